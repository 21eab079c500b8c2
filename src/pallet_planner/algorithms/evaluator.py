"""Scoring of packed layers for the layer selector."""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from pallet_planner.algorithms.layer_packer import PackedLayer, pack_layer
from pallet_planner.config import PalletConfig
from pallet_planner.core.models import Layer, PackingItem


@dataclass(frozen=True)
class LayerCandidate:
    """
    A packed layer plus the numbers the selector ranks it by.

    Attributes:
        efficiency:          Fraction of the footprint covered (capped at 1).
        waste_volume:        Uncovered footprint area times layer height.
        perfect_fit:         Footprint fully covered within tolerance.
        perfectly_divisible: Perfect fit and the layer height evenly divides
                             the remaining pallet height.
    """
    packed: PackedLayer
    efficiency: float
    waste_volume: float
    perfect_fit: bool
    perfectly_divisible: bool

    @property
    def layer(self) -> Layer:
        return self.packed.layer

    @property
    def usage(self) -> Dict[str, int]:
        return self.packed.usage

    @property
    def height(self) -> float:
        return self.packed.height

    @property
    def weight_lbs(self) -> float:
        return self.packed.weight_lbs

    def rank_key(self) -> tuple:
        """Sort key: efficiency desc, waste asc, height desc, weight desc."""
        return (-self.efficiency, self.waste_volume, -self.height, -self.weight_lbs)


def divides_evenly(total: float, part: float, tolerance: float) -> bool:
    """True if *part* divides *total* within *tolerance*."""
    if part <= tolerance:
        return False
    remainder = total % part
    return remainder <= tolerance or part - remainder <= tolerance


def evaluate_layer(
    packed: PackedLayer,
    remaining_height: float,
    config: PalletConfig,
) -> LayerCandidate:
    """Attach efficiency, waste and fit flags to a packed layer."""
    footprint = config.footprint_area
    area_used = packed.area_used
    height = packed.height

    perfect_fit = abs(area_used - footprint) <= config.tolerance
    return LayerCandidate(
        packed=packed,
        efficiency=min(area_used / footprint, 1.0),
        waste_volume=(footprint - area_used) * height,
        perfect_fit=perfect_fit,
        perfectly_divisible=perfect_fit and divides_evenly(remaining_height, height, config.tolerance),
    )


def build_candidate(
    height: float,
    items: Sequence[PackingItem],
    remaining_height: float,
    weight_budget_lbs: float,
    config: PalletConfig,
) -> Optional[LayerCandidate]:
    """Pack a layer of *height* and score it; None if nothing fits."""
    packed = pack_layer(height, items, weight_budget_lbs, config)
    if packed is None:
        return None
    return evaluate_layer(packed, remaining_height, config)
