"""
pallet_planner: layer-based pallet packing with freight classification.

Public API:
    from pallet_planner import PalletConfig, PalletOptimizer, SKU, OrderLine
    result = PalletOptimizer(PalletConfig(max_height=72, max_weight=2000)).optimize(lines)
"""

from .algorithms.freight import classify_freight
from .algorithms.optimizer import PalletOptimizer
from .config import PalletConfig
from .core.errors import (
    InvalidConfiguration,
    PalletPlannerError,
    SkuExceedsPallet,
    UnpackableRemainder,
)
from .core.models import SKU, Layer, OrderLine, PackingResult, Pallet, PlacedItem
from .core.units import UnitType, WeightUnit

__version__ = "0.1.0"

__all__ = [
    "PalletConfig",
    "PalletOptimizer",
    "classify_freight",
    "SKU",
    "OrderLine",
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
