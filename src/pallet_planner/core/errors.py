"""Error kinds raised by the packing engine.

All of them are terminal for the ``optimize`` call that raised them: the
engine never retries and never returns a partial plan.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pallet_planner.core.models import SKU


class PalletPlannerError(Exception):
    """Base class for packing engine errors."""


class InvalidConfiguration(PalletPlannerError):
    """Pallet dimensions, height or weight budget are not usable."""


class SkuExceedsPallet(PalletPlannerError):
    """No rotation of a SKU fits the pallet footprint under the height limit."""

    def __init__(self, sku: "SKU", message: Optional[str] = None) -> None:
        self.sku = sku
        super().__init__(
            message
            or (
                f"SKU '{sku.id}' ({sku.length}x{sku.width}x{sku.height}) "
                f"does not fit the pallet in any orientation"
            )
        )


class UnpackableRemainder(PalletPlannerError):
    """Inventory remains but no layer can be built on an empty pallet."""

    def __init__(self, sku: "SKU", remaining: int, message: Optional[str] = None) -> None:
        self.sku = sku
        self.remaining = remaining
        super().__init__(
            message
            or (
                f"Cannot place remaining {remaining} unit(s) of SKU '{sku.id}': "
                f"no layer fits within the pallet height and weight limits"
            )
        )
