"""
2D layer packer: fills one layer of a fixed height on the pallet footprint.

Algorithm overview
~~~~~~~~~~~~~~~~~~
  1. Keep only items with an orientation whose height matches the layer.
  2. Visit items largest maximum footprint first (ties keep order-line order).
  3. For each item, place units one at a time while quantity and the weight
     budget allow: try its matching orientations largest footprint first and
     take the first free bottom-left position on the occupancy grid.
  4. Stop an item as soon as none of its orientations fits anywhere.

The packer never mutates the ``PackingItem`` rows; consumed counts are
returned in ``PackedLayer.usage`` for the caller to apply.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from pallet_planner.algorithms.grid import OccupancyGrid
from pallet_planner.config import PalletConfig
from pallet_planner.core.models import Layer, PackingItem, PlacedItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackedLayer:
    """A packed layer with the units it consumed per SKU id."""
    layer: Layer
    usage: Dict[str, int] = field(default_factory=dict)
    area_used: float = 0.0

    @property
    def height(self) -> float:
        return self.layer.height

    @property
    def weight_lbs(self) -> float:
        return self.layer.weight_lbs


def pack_layer(
    height: float,
    items: Sequence[PackingItem],
    weight_budget_lbs: float,
    config: PalletConfig,
) -> Optional[PackedLayer]:
    """
    Pack units of *height* onto an empty layer.

    Returns:
        The packed layer, or None if not a single unit could be placed.
    """
    tol = config.tolerance

    # Item → matching options, largest footprint first (stable on ties).
    candidates = []
    for item in items:
        if item.remaining <= 0:
            continue
        options = item.options_for_height(height, tol)
        if not options:
            continue
        options = sorted(options, key=lambda o: o.footprint_area, reverse=True)
        candidates.append((item, options))
    candidates.sort(key=lambda c: (-c[1][0].footprint_area, c[0].order))

    grid = OccupancyGrid(config)
    placed: List[PlacedItem] = []
    usage: Dict[str, int] = {}
    area_used = 0.0
    weight_used = 0.0

    for item, options in candidates:
        remaining = item.remaining
        while remaining > 0 and weight_used + item.unit_weight_lbs <= weight_budget_lbs + tol:
            spot = None
            for option in options:
                pos = grid.find_position(option.length, option.width)
                if pos is not None:
                    spot = (pos, option)
                    break
            if spot is None:
                break

            (x, y), option = spot
            grid.mark(x, y, option.length, option.width)
            placed.append(
                PlacedItem(
                    sku=item.sku,
                    x=float(x),
                    y=float(y),
                    length=option.length,
                    width=option.width,
                    height=option.height,
                    rotated=option.rotated,
                )
            )
            area_used += option.footprint_area
            weight_used += item.unit_weight_lbs
            usage[item.sku.id] = usage.get(item.sku.id, 0) + 1
            remaining -= 1

    if not placed:
        return None

    logger.debug(
        "Packed layer h=%.3f: %d unit(s), area %.1f, weight %.1f lbs",
        height, len(placed), area_used, weight_used,
    )
    return PackedLayer(
        layer=Layer(items=tuple(placed), height=height, weight_lbs=weight_used),
        usage=usage,
        area_used=area_used,
    )
