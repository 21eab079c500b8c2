"""Command-line runner: plan pallets for a job file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import yaml
from pydantic import ValidationError

from pallet_planner.algorithms.optimizer import PalletOptimizer
from pallet_planner.core.errors import PalletPlannerError
from pallet_planner.core.models import PackingResult
from pallet_planner.io.schemas import load_job
from pallet_planner.monitoring.metrics import (
    PlanMetrics,
    collect_metrics,
    export_to_csv,
    export_to_json,
    format_summary,
)
from pallet_planner.runner.dataset import ORDERING_STRATEGIES, get_ordering_strategy

EXIT_OK = 0
EXIT_PACKING_ERROR = 1
EXIT_BAD_JOB = 2


def format_breakdown(result: PackingResult) -> str:
    """Per-pallet breakdown: layers, units per SKU, height, weight, class."""
    unit = result.weight_unit.value
    lines = []
    for pallet in result.pallets:
        lines.append(
            f"PALLET {pallet.id}: {len(pallet.layers)} layer(s), "
            f"{pallet.total_height:.1f} in, {pallet.total_weight:.1f} {unit}, "
            f"{pallet.freight_class}"
        )
        for index, layer in enumerate(pallet.layers, start=1):
            contents = ", ".join(f"{sku_id} x{qty}" for sku_id, qty in layer.quantities().items())
            lines.append(f"  layer {index} (h={layer.height:g}): {contents}")
    return "\n".join(lines)


def save_plan(result: PackingResult, metrics: PlanMetrics, output_dir: Path) -> list[Path]:
    """Write plan.json plus the metrics JSON/CSV into *output_dir*."""
    output_dir.mkdir(parents=True, exist_ok=True)
    plan_path = output_dir / f"{metrics.plan_id}_plan.json"
    with plan_path.open("w") as f:
        json.dump(result.to_dict(), f, indent=2)

    json_path = output_dir / f"{metrics.plan_id}_metrics.json"
    csv_path = output_dir / f"{metrics.plan_id}_pallets.csv"
    export_to_json(metrics, json_path)
    export_to_csv(metrics, csv_path)
    return [plan_path, json_path, csv_path]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pallet-plan",
        description="Plan pallets for an order job file (YAML or JSON)",
    )
    parser.add_argument("job", type=Path, help="Path to the job file")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to write the plan and metrics to (default: print only)",
    )
    parser.add_argument(
        "--ordering",
        choices=sorted(ORDERING_STRATEGIES),
        default="as_entered",
        help="Order line ordering before packing (default: as_entered)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of ``pallet-plan``; returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        job = load_job(args.job)
    except (OSError, yaml.YAMLError, json.JSONDecodeError, ValidationError) as e:
        print(f"Invalid job file {args.job}: {e}", file=sys.stderr)
        return EXIT_BAD_JOB

    plan_id = job.plan_id or f"plan_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
    started_at = datetime.now(timezone.utc)
    try:
        optimizer = PalletOptimizer(job.to_config())
        lines = get_ordering_strategy(args.ordering)(job.to_order_lines())
        result = optimizer.optimize(lines)
    except PalletPlannerError as e:
        print(f"Packing failed: {e}", file=sys.stderr)
        return EXIT_PACKING_ERROR

    metrics = collect_metrics(result, optimizer.config, plan_id, started_at=started_at)
    print(format_breakdown(result))
    print(format_summary(metrics))

    if args.output_dir is not None:
        for path in save_plan(result, metrics, args.output_dir):
            print(f"✓ Saved {path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
