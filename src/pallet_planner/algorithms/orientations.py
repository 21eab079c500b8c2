"""
Orientation generation: enumerates the valid rotations of a SKU.

A rotation is valid when its height stays under the pallet height limit and
its footprint fits the pallet base in at least one of the two axis
assignments (the base may be turned 90° independently of which face is up).
"""

from typing import List, Tuple

from pallet_planner.config import DIMENSION_PRECISION, PalletConfig
from pallet_planner.core.errors import SkuExceedsPallet
from pallet_planner.core.models import SKU, OrientationOption


# Axis permutations of (length, width, height), in enumeration order.
AXIS_PERMUTATIONS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (0, 2, 1),
    (1, 0, 2), (1, 2, 0),
    (2, 0, 1), (2, 1, 0),
)


def dimension_key(length: float, width: float, height: float) -> Tuple[float, float, float]:
    """Rounded dimension triple used to deduplicate orientations."""
    return (
        round(length, DIMENSION_PRECISION),
        round(width, DIMENSION_PRECISION),
        round(height, DIMENSION_PRECISION),
    )


def fits_footprint(length: float, width: float, config: PalletConfig) -> bool:
    """True if a (length, width) base fits the pallet in either axis assignment."""
    tol = config.tolerance
    fl, fw = config.footprint_length, config.footprint_width
    return (length <= fl + tol and width <= fw + tol) or (width <= fl + tol and length <= fw + tol)


def generate_orientations(sku: SKU, config: PalletConfig) -> List[OrientationOption]:
    """
    Return the deduplicated valid orientations of *sku*.

    Raises:
        SkuExceedsPallet: if no rotation fits the footprint under the height limit.
    """
    dims = sku.dimensions
    seen: set = set()
    options: List[OrientationOption] = []
    for axes in AXIS_PERMUTATIONS:
        length, width, height = (float(dims[a]) for a in axes)
        if height > config.max_height + config.tolerance:
            continue
        if not fits_footprint(length, width, config):
            continue
        key = dimension_key(length, width, height)
        if key in seen:
            continue
        seen.add(key)
        options.append(OrientationOption(length=length, width=width, height=height, axes=axes))

    if not options:
        raise SkuExceedsPallet(sku)
    return options
