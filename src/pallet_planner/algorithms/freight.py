"""Freight class from pallet density (pounds per cubic foot)."""

from typing import Tuple

from pallet_planner.config import MIN_DENSITY_HEIGHT
from pallet_planner.core.units import CUBIC_INCHES_PER_FOOT


# (density threshold, class number), densest first. A pallet gets the first
# class whose threshold its density strictly exceeds.
FREIGHT_CLASS_TABLE: Tuple[Tuple[float, float], ...] = (
    (50.0, 50),
    (35.0, 55),
    (30.0, 60),
    (22.5, 65),
    (15.0, 70),
    (13.5, 77.5),
    (12.0, 85),
    (10.5, 92.5),
    (9.0, 100),
    (8.0, 110),
    (7.0, 125),
    (6.0, 150),
    (5.0, 175),
    (4.0, 200),
    (3.0, 250),
    (2.0, 300),
    (1.0, 400),
)

LOWEST_DENSITY_CLASS: float = 500


def pallet_density(weight_lbs: float, height: float, length: float, width: float) -> float:
    """Pounds per cubic foot of a ``length × width × height`` (inches) load."""
    cubic_feet = (length * width * max(height, MIN_DENSITY_HEIGHT)) / CUBIC_INCHES_PER_FOOT
    return weight_lbs / cubic_feet


def freight_class_number(density: float) -> float:
    for threshold, number in FREIGHT_CLASS_TABLE:
        if density > threshold:
            return number
    return LOWEST_DENSITY_CLASS


def format_freight_class(number: float) -> str:
    """``77.5`` → ``"Class 77.5"``, ``100`` → ``"Class 100"``."""
    return f"Class {number:g}"


def classify_freight(weight_lbs: float, height: float, length: float, width: float) -> str:
    """Freight class label of a pallet load."""
    return format_freight_class(freight_class_number(pallet_density(weight_lbs, height, length, width)))
