"""Unit handling for weights and order quantities.

The engine works internally in pounds; callers may express SKU weights and the
pallet weight limit in either pounds or kilograms.
"""

from enum import Enum


LBS_PER_KG = 2.20462

# Cubic inches per cubic foot, used for freight density.
CUBIC_INCHES_PER_FOOT = 1728.0


class WeightUnit(str, Enum):
    """Weight unit of SKU weights and the pallet weight limit."""

    LBS = "lbs"
    KG = "kg"

    @classmethod
    def parse(cls, value: "str | WeightUnit") -> "WeightUnit":
        """Accept an enum member or a case-insensitive name ("lbs", "kg")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("lb", "pound", "pounds"):
            key = "lbs"
        elif key in ("kgs", "kilogram", "kilograms"):
            key = "kg"
        return cls(key)


class UnitType(str, Enum):
    """How an order line counts its quantity."""

    EACH = "each"
    CASE = "case"


def pounds_per_unit(unit: WeightUnit) -> float:
    return LBS_PER_KG if unit is WeightUnit.KG else 1.0


def to_pounds(value: float, unit: WeightUnit) -> float:
    """Convert *value* expressed in *unit* to pounds."""
    return float(value) * pounds_per_unit(unit)


def from_pounds(value: float, unit: WeightUnit) -> float:
    """Convert a pound value back into *unit*."""
    return float(value) / pounds_per_unit(unit)
