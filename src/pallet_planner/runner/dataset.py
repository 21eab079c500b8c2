"""Random order generation for benchmarks and property checks."""

import random
from typing import Callable

from pallet_planner.core.models import SKU, OrderLine


# Common carton edges (inches); whole numbers keep layers grid-aligned.
CARTON_EDGES = (6.0, 8.0, 10.0, 12.0, 16.0, 20.0, 24.0)


def generate_skus(count: int = 10, seed: int | None = None) -> list[SKU]:
    """
    Generate random carton SKUs.

    Args:
        count: Number of SKUs to generate
        seed: Random seed for reproducibility (default: None)

    Returns:
        List of SKUs named SKU-000, SKU-001, ...
    """
    rng = random.Random(seed)
    skus = []
    for i in range(count):
        length, width, height = (rng.choice(CARTON_EDGES) for _ in range(3))
        # Random weight: 2-60 lbs
        weight = round(rng.uniform(2.0, 60.0), 1)
        skus.append(
            SKU(
                id=f"SKU-{i:03d}", name=f"Carton {i}", length=length,
                width=width, height=height, weight=weight, pack_type="carton",
            )
        )
    return skus


def generate_order_lines(
    count: int = 10,
    max_quantity: int = 40,
    seed: int | None = None,
) -> list[OrderLine]:
    """
    Generate one order line per random SKU.

    Args:
        count: Number of order lines (and SKUs)
        max_quantity: Upper bound of the per-line quantity
        seed: Random seed for reproducibility (default: None)
    """
    rng = random.Random(seed)
    skus = generate_skus(count, seed=seed)
    return [OrderLine(sku=sku, quantity=rng.randint(1, max_quantity)) for sku in skus]


def volume_sorted_order(lines: list[OrderLine]) -> list[OrderLine]:
    """Order lines by unit volume (largest first)."""
    return sorted(lines, key=lambda line: line.sku.volume, reverse=True)


def weight_sorted_order(lines: list[OrderLine]) -> list[OrderLine]:
    """Order lines by unit weight (heaviest first)."""
    return sorted(lines, key=lambda line: line.sku.weight, reverse=True)


# Map of ordering strategy names to functions
ORDERING_STRATEGIES: dict[str, Callable[[list[OrderLine]], list[OrderLine]]] = {
    "as_entered": list,
    "volume_sorted": volume_sorted_order,
    "weight_sorted": weight_sorted_order,
}


def get_ordering_strategy(name: str) -> Callable[[list[OrderLine]], list[OrderLine]]:
    """
    Get an ordering strategy function by name.

    Raises:
        ValueError: If strategy name is not recognized
    """
    if name not in ORDERING_STRATEGIES:
        raise ValueError(
            f"Unknown ordering strategy: {name}. "
            f"Available: {list(ORDERING_STRATEGIES.keys())}"
        )
    return ORDERING_STRATEGIES[name]
