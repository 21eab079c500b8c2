"""
Pallet configuration for the packing engine.

All modules read pallet limits and tolerances from ``PalletConfig`` so that
the orientation generator, the layer evaluator and the divisibility check
agree on the same tolerance.

Classes:
    PalletConfig: footprint, height/weight limits, weight unit, tolerance
"""

from dataclasses import dataclass
import math

from pallet_planner.core.errors import InvalidConfiguration
from pallet_planner.core.units import WeightUnit, to_pounds


# Shared comparison tolerance (inches for heights, square inches for areas).
DEFAULT_TOLERANCE: float = 1e-3

# Decimal places used when building dimension keys for deduplication.
DIMENSION_PRECISION: int = 3

# Floor applied to pallet height before computing density.
MIN_DENSITY_HEIGHT: float = 1e-6


@dataclass(frozen=True)
class PalletConfig:
    """
    Physical limits of one pallet.

    Attributes:
        footprint_length: X-axis extent of the pallet base (inches).
        footprint_width:  Y-axis extent of the pallet base (inches).
        max_height:       Maximum stacked load height (inches).
        max_weight:       Maximum load weight, in ``weight_unit``.
        weight_unit:      Unit of ``max_weight`` and of every SKU weight.
        tolerance:        Comparison tolerance for heights, areas and divisibility.
    """
    footprint_length: float = 48.0
    footprint_width: float = 40.0
    max_height: float = 72.0
    max_weight: float = 2000.0
    weight_unit: WeightUnit = WeightUnit.LBS
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "weight_unit", WeightUnit.parse(self.weight_unit))
        except ValueError as exc:
            raise InvalidConfiguration(
                f"Unknown weight unit {self.weight_unit!r}. "
                f"Valid: {[u.value for u in WeightUnit]}"
            ) from exc

    @property
    def footprint_area(self) -> float:
        return self.footprint_length * self.footprint_width

    @property
    def max_weight_lbs(self) -> float:
        return to_pounds(self.max_weight, self.weight_unit)

    @property
    def grid_length(self) -> int:
        """Number of one-inch grid cells along the x-axis."""
        return math.ceil(self.footprint_length)

    @property
    def grid_width(self) -> int:
        """Number of one-inch grid cells along the y-axis."""
        return math.ceil(self.footprint_width)

    def validate(self) -> None:
        """Raise ``InvalidConfiguration`` unless every limit is usable."""
        for name in ("footprint_length", "footprint_width", "max_height", "tolerance"):
            value = getattr(self, name)
            if not (value > 0 and math.isfinite(value)):
                raise InvalidConfiguration(f"{name} must be a positive number, got {value!r}")
        if not (self.max_weight_lbs > 0 and math.isfinite(self.max_weight_lbs)):
            raise InvalidConfiguration(
                f"max_weight must be a positive number, got {self.max_weight!r}"
            )

    def to_dict(self) -> dict:
        return {
            "footprint_length": self.footprint_length,
            "footprint_width": self.footprint_width,
            "max_height": self.max_height,
            "max_weight": self.max_weight,
            "weight_unit": self.weight_unit.value,
            "tolerance": self.tolerance,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PalletConfig":
        return cls(**d)
