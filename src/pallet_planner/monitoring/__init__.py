"""Monitoring module for pallet-planner.

Provides per-pallet and per-plan metrics and their JSON/CSV export.
"""

from .metrics import (
    PalletMetrics,
    PlanMetrics,
    collect_metrics,
    export_to_csv,
    export_to_json,
    format_summary,
)

__all__ = [
    "PalletMetrics",
    "PlanMetrics",
    "collect_metrics",
    "export_to_csv",
    "export_to_json",
    "format_summary",
]
