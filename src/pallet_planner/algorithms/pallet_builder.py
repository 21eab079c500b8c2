"""Pallet builder: stacks selected layers until a budget runs out."""

import logging
from typing import List, Sequence

from pallet_planner.algorithms.freight import classify_freight
from pallet_planner.algorithms.layer_selector import select_layer
from pallet_planner.config import PalletConfig
from pallet_planner.core.errors import UnpackableRemainder
from pallet_planner.core.models import Layer, PackingItem, Pallet

logger = logging.getLogger(__name__)


class PalletBuilder:
    """
    Builds one pallet at a time from the shared inventory rows.

    Layers are added while height, weight and inventory remain; the item
    rows passed to ``build`` are decremented by every accepted layer.
    """

    def __init__(self, config: PalletConfig):
        self.config = config

    def build(self, items: Sequence[PackingItem], pallet_id: int) -> Pallet:
        """
        Build pallet *pallet_id*.

        Raises:
            UnpackableRemainder: if inventory remains but not a single layer fits.
        """
        cfg = self.config
        tol = cfg.tolerance
        max_weight_lbs = cfg.max_weight_lbs

        layers: List[Layer] = []
        height = 0.0
        weight_lbs = 0.0

        while (
            cfg.max_height - height > tol
            and max_weight_lbs - weight_lbs > tol
            and any(item.remaining > 0 for item in items)
        ):
            candidate = select_layer(
                items, cfg.max_height - height, max_weight_lbs - weight_lbs, cfg,
            )
            if candidate is None:
                break

            for item in items:
                used = candidate.usage.get(item.sku.id, 0)
                if used:
                    item.remaining -= used
            layers.append(candidate.layer)
            height += candidate.height
            weight_lbs += candidate.weight_lbs

        if not layers:
            blocking = next((item for item in items if item.remaining > 0), None)
            if blocking is not None:
                raise UnpackableRemainder(blocking.sku, blocking.remaining)

        pallet = Pallet(
            id=pallet_id,
            layers=tuple(layers),
            total_height=height,
            total_weight_lbs=weight_lbs,
            footprint_length=cfg.footprint_length,
            footprint_width=cfg.footprint_width,
            weight_unit=cfg.weight_unit,
            freight_class=classify_freight(
                weight_lbs, height, cfg.footprint_length, cfg.footprint_width,
            ),
        )
        logger.debug("Built %r", pallet)
        return pallet
