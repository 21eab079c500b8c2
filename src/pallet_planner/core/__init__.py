"""Data model, units and error kinds of the pallet planner."""

from .errors import (
    InvalidConfiguration,
    PalletPlannerError,
    SkuExceedsPallet,
    UnpackableRemainder,
)
from .models import (
    SKU,
    Layer,
    OrderLine,
    OrientationOption,
    PackingItem,
    PackingResult,
    Pallet,
    PlacedItem,
)
from .units import UnitType, WeightUnit

__all__ = [
    "SKU",
    "OrderLine",
    "OrientationOption",
    "PackingItem",
    "PlacedItem",
    "Layer",
    "Pallet",
    "PackingResult",
    "UnitType",
    "WeightUnit",
    "PalletPlannerError",
    "InvalidConfiguration",
    "SkuExceedsPallet",
    "UnpackableRemainder",
]
