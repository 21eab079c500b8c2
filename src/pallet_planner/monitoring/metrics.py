"""Metrics tracking and export for pallet plans.

Provides dataclasses summarizing a ``PackingResult`` per pallet and per plan,
and utilities for exporting them to JSON and CSV.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pallet_planner.config import PalletConfig
from pallet_planner.core.models import PackingResult, Pallet


CSV_FIELDS = [
    "plan_id", "pallet_id", "layers", "units_placed", "height", "weight",
    "weight_unit", "utilization_pct", "volume_used", "volume_total", "freight_class",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PalletMetrics:
    """Metrics for a single pallet.

    Attributes:
        plan_id: Identifier of the plan this pallet belongs to.
        pallet_id: Pallet number within the plan (1-based).
        layers: Number of layers stacked.
        units_placed: Number of units on the pallet.
        height: Stacked height in inches.
        weight: Load weight in ``weight_unit``.
        weight_unit: Unit of ``weight``.
        utilization_pct: Volume utilization percentage (0-100) of the
            footprint times the maximum height.
        volume_used: Occupied volume in cubic inches.
        volume_total: Available volume in cubic inches.
        freight_class: Freight class label.
    """

    plan_id: str
    pallet_id: int
    layers: int
    units_placed: int
    height: float
    weight: float
    weight_unit: str
    utilization_pct: float
    volume_used: float
    volume_total: float
    freight_class: str

    @classmethod
    def from_pallet(cls, pallet: Pallet, config: PalletConfig, plan_id: str) -> "PalletMetrics":
        volume_total = config.footprint_area * config.max_height
        volume_used = pallet.volume_used
        return cls(
            plan_id=plan_id,
            pallet_id=pallet.id,
            layers=len(pallet.layers),
            units_placed=pallet.unit_count,
            height=pallet.total_height,
            weight=pallet.total_weight,
            weight_unit=pallet.weight_unit.value,
            utilization_pct=100.0 * volume_used / volume_total,
            volume_used=volume_used,
            volume_total=volume_total,
            freight_class=pallet.freight_class,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PlanMetrics:
    """Aggregate metrics for one packing plan.

    Attributes:
        plan_id: Unique identifier for the plan.
        total_pallets: Number of pallets built.
        total_units: Number of units placed.
        total_weight: Weight of all pallets in the plan's weight unit.
        avg_utilization_pct: Average volume utilization across pallets.
        median_utilization_pct: Median volume utilization across pallets.
        min_utilization_pct: Minimum volume utilization across pallets.
        max_utilization_pct: Maximum volume utilization across pallets.
        runtime_seconds: Optimization wall time in seconds.
        started_at: Plan start timestamp.
        completed_at: Plan completion timestamp (None if running).
        pallet_metrics: List of per-pallet metrics.
    """

    plan_id: str
    total_pallets: int = 0
    total_units: int = 0
    total_weight: float = 0.0
    avg_utilization_pct: float = 0.0
    median_utilization_pct: float = 0.0
    min_utilization_pct: float = 0.0
    max_utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None
    pallet_metrics: list[PalletMetrics] = field(default_factory=list)

    def add_pallet(self, pallet: PalletMetrics) -> None:
        """Add a pallet's metrics to the plan.

        Example:
            >>> pm = PlanMetrics("plan_001")
            >>> pm.add_pallet(PalletMetrics("plan_001", 1, 2, 8, 20.0, 160.0, "lbs",
            ...                             27.8, 38400.0, 138240.0, "Class 85"))
            >>> pm.total_pallets, pm.total_units
            (1, 8)
        """
        self.pallet_metrics.append(pallet)
        self.total_pallets += 1
        self.total_units += pallet.units_placed
        self.total_weight += pallet.weight
        self._recalculate_stats()

    def mark_complete(self) -> None:
        """Mark the plan as complete and calculate the runtime."""
        self.completed_at = _utcnow()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def _recalculate_stats(self) -> None:
        """Recalculate aggregate statistics from pallet metrics."""
        if not self.pallet_metrics:
            return

        utilizations = [p.utilization_pct for p in self.pallet_metrics]
        self.avg_utilization_pct = sum(utilizations) / len(utilizations)
        self.min_utilization_pct = min(utilizations)
        self.max_utilization_pct = max(utilizations)

        sorted_utils = sorted(utilizations)
        n = len(sorted_utils)
        if n % 2 == 0:
            self.median_utilization_pct = (sorted_utils[n // 2 - 1] + sorted_utils[n // 2]) / 2
        else:
            self.median_utilization_pct = sorted_utils[n // 2]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["pallet_metrics"] = [p.to_dict() for p in self.pallet_metrics]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Aggregate metrics only (no pallet_metrics list)."""
        d = self.to_dict()
        del d["pallet_metrics"]
        return d


def collect_metrics(
    result: PackingResult,
    config: PalletConfig,
    plan_id: str,
    started_at: datetime | None = None,
) -> PlanMetrics:
    """Build plan metrics from a finished ``PackingResult`` and mark them complete."""
    metrics = PlanMetrics(plan_id=plan_id)
    if started_at is not None:
        metrics.started_at = started_at
    for pallet in result.pallets:
        metrics.add_pallet(PalletMetrics.from_pallet(pallet, config, plan_id))
    metrics.mark_complete()
    return metrics


def export_to_json(metrics: PlanMetrics, output_path: Path | str, include_pallets: bool = True) -> None:
    """Export plan metrics to a JSON file.

    Args:
        metrics: PlanMetrics instance to export.
        output_path: Path to output JSON file.
        include_pallets: If True, include per-pallet metrics. If False, summary only.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict() if include_pallets else metrics.to_summary_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: PlanMetrics, output_path: Path | str) -> None:
    """Export per-pallet metrics to a CSV file (header only for an empty plan)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for pallet in metrics.pallet_metrics:
            writer.writerow(pallet.to_dict())


def format_summary(metrics: PlanMetrics) -> str:
    """Human-readable summary of plan metrics.

    Example:
        >>> pm = PlanMetrics("plan_001")
        >>> "Plan: plan_001" in format_summary(pm)
        True
    """
    unit = metrics.pallet_metrics[0].weight_unit if metrics.pallet_metrics else ""
    lines = [
        "=" * 60,
        f"Plan: {metrics.plan_id}",
        "=" * 60,
        f"Total Pallets: {metrics.total_pallets}",
        f"Total Units: {metrics.total_units}",
        f"Total Weight: {metrics.total_weight:.1f} {unit}".rstrip(),
        "",
        "Utilization Statistics:",
        f"  Average: {metrics.avg_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_utilization_pct:.2f}%",
        "",
        f"Runtime: {metrics.runtime_seconds:.3f} seconds",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)
