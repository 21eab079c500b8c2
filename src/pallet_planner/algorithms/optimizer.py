"""Layer-based pallet optimizer: the entry point of the packing engine."""

import logging
from typing import Dict, Iterable, List, Optional

from pallet_planner.algorithms.orientations import generate_orientations
from pallet_planner.algorithms.pallet_builder import PalletBuilder
from pallet_planner.config import PalletConfig
from pallet_planner.core.errors import UnpackableRemainder
from pallet_planner.core.models import OrderLine, PackingItem, PackingResult, Pallet
from pallet_planner.core.units import to_pounds

logger = logging.getLogger(__name__)


class PalletOptimizer:
    """
    Packs order lines onto as many pallets as needed.

    Each pallet is built greedily from height-homogeneous layers; pallets
    are numbered from 1 in build order. The optimizer only holds its
    configuration, so one instance can serve several ``optimize`` calls.
    """

    def __init__(self, config: Optional[PalletConfig] = None):
        """
        Args:
            config: Pallet limits (default: 48×40in, 72in, 2000 lbs).

        Raises:
            InvalidConfiguration: if a dimension, the height or the weight
                limit is not a positive number.
        """
        self.config = config or PalletConfig()
        self.config.validate()

    def optimize(self, order_lines: Iterable[OrderLine]) -> PackingResult:
        """
        Pack every unit of *order_lines*.

        Returns:
            PackingResult whose pallets hold exactly the requested quantities.

        Raises:
            SkuExceedsPallet: a SKU fits the pallet in no orientation.
            UnpackableRemainder: inventory remains that no layer can hold.
        """
        items = self._build_inventory(order_lines)
        requested = {item.sku.id: item.remaining for item in items}
        builder = PalletBuilder(self.config)

        pallets: List[Pallet] = []
        next_pallet_id = 1
        while any(item.remaining > 0 for item in items):
            pallets.append(builder.build(items, next_pallet_id))
            next_pallet_id += 1

        result = PackingResult(pallets=tuple(pallets), weight_unit=self.config.weight_unit)
        self._check_conservation(result, items, requested)
        logger.info(
            "Packed %d unit(s) onto %d pallet(s)", result.total_units, result.total_pallets,
        )
        return result

    def _build_inventory(self, order_lines: Iterable[OrderLine]) -> List[PackingItem]:
        """One PackingItem per distinct SKU id, in first-appearance order."""
        items: Dict[str, PackingItem] = {}
        for line in order_lines:
            if line.quantity <= 0:
                logger.debug("Skipping order line for %s with quantity %s", line.sku.id, line.quantity)
                continue
            item = items.get(line.sku.id)
            if item is None:
                item = PackingItem(
                    sku=line.sku,
                    remaining=0,
                    orientations=tuple(generate_orientations(line.sku, self.config)),
                    unit_weight_lbs=to_pounds(line.sku.weight, self.config.weight_unit),
                    order=len(items),
                )
                items[line.sku.id] = item
            item.remaining += int(line.quantity)
        return list(items.values())

    @staticmethod
    def _check_conservation(
        result: PackingResult,
        items: List[PackingItem],
        requested: Dict[str, int],
    ) -> None:
        """Every requested unit must appear on exactly one pallet."""
        placed = result.placed_quantities()
        for item in items:
            missing = requested[item.sku.id] - placed.get(item.sku.id, 0)
            if missing != 0 or item.remaining != 0:
                raise UnpackableRemainder(
                    item.sku,
                    missing,
                    f"Placed {placed.get(item.sku.id, 0)} of {requested[item.sku.id]} "
                    f"unit(s) of SKU '{item.sku.id}'",
                )
