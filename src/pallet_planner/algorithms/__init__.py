"""Packing algorithms: orientations, layer packing and selection, pallets."""

from .evaluator import LayerCandidate, evaluate_layer
from .freight import classify_freight, freight_class_number, pallet_density
from .grid import OccupancyGrid
from .layer_packer import PackedLayer, pack_layer
from .layer_selector import select_layer
from .optimizer import PalletOptimizer
from .orientations import generate_orientations
from .pallet_builder import PalletBuilder

__all__ = [
    "PalletOptimizer",
    "PalletBuilder",
    "select_layer",
    "LayerCandidate",
    "evaluate_layer",
    "PackedLayer",
    "pack_layer",
    "OccupancyGrid",
    "generate_orientations",
    "classify_freight",
    "freight_class_number",
    "pallet_density",
]
