"""Core data models for pallet planning.

Reference data (``SKU``, ``OrderLine``) is owned by the caller and never
mutated. ``PackingItem`` is the engine's private, mutable inventory row; the
result types (``PlacedItem``, ``Layer``, ``Pallet``, ``PackingResult``) are
frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pallet_planner.core.units import UnitType, WeightUnit, from_pounds


# ─────────────────────────────────────────────────────────────────────────────
# Reference data
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SKU:
    """
    A stock keeping unit: one handled box.

    Attributes:
        id:        Unique identifier.
        name:      Display name.
        length:    X extent (inches).
        width:     Y extent (inches).
        height:    Z extent (inches).
        weight:    Unit weight, in the order's weight unit.
        pack_type: Free-form packaging description (carton, tote, ...).
    """
    id: str
    name: str
    length: float
    width: float
    height: float
    weight: float
    pack_type: str = "box"
    description: Optional[str] = None

    @property
    def dimensions(self) -> tuple[float, float, float]:
        return (self.length, self.width, self.height)

    @property
    def footprint_area(self) -> float:
        return self.length * self.width

    @property
    def volume(self) -> float:
        """Unit volume in cubic inches."""
        return self.length * self.width * self.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id, "name": self.name, "length": self.length,
            "width": self.width, "height": self.height, "weight": self.weight,
            "pack_type": self.pack_type, "description": self.description,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "SKU":
        return cls(
            id=str(d["id"]), name=d.get("name") or str(d["id"]),
            length=float(d["length"]), width=float(d["width"]),
            height=float(d["height"]), weight=float(d["weight"]),
            pack_type=d.get("pack_type") or "box", description=d.get("description"),
        )

    def __repr__(self) -> str:
        return (
            f"SKU(id={self.id!r}, "
            f"{self.length}×{self.width}×{self.height}in, "
            f"{self.weight})"
        )


@dataclass(frozen=True)
class OrderLine:
    """A requested quantity of one SKU."""
    sku: SKU
    quantity: int
    unit_type: UnitType = UnitType.EACH

    def to_dict(self) -> dict[str, Any]:
        return {
            "sku": self.sku.id,
            "quantity": self.quantity,
            "unit_type": self.unit_type.value,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Engine working set
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OrientationOption:
    """
    One valid rotation of a SKU.

    ``axes`` records which SKU axes (0=length, 1=width, 2=height) became the
    placed length, width and height.
    """
    length: float
    width: float
    height: float
    axes: tuple[int, int, int] = (0, 1, 2)

    @property
    def footprint_area(self) -> float:
        return self.length * self.width

    @property
    def rotated(self) -> bool:
        """True when the footprint is the 90° turn of its face."""
        return self.axes[0] > self.axes[1]


@dataclass
class PackingItem:
    """
    Remaining inventory of one distinct SKU during a single ``optimize`` call.

    ``order`` is the index of the SKU's first order line and is the final
    tie-break wherever items are sorted.
    """
    sku: SKU
    remaining: int
    orientations: tuple[OrientationOption, ...]
    unit_weight_lbs: float
    order: int = 0

    @property
    def max_footprint_area(self) -> float:
        return max((o.footprint_area for o in self.orientations), default=0.0)

    def options_for_height(self, height: float, tolerance: float) -> list[OrientationOption]:
        """Orientation options whose height matches *height* within *tolerance*."""
        return [o for o in self.orientations if abs(o.height - height) <= tolerance]


# ─────────────────────────────────────────────────────────────────────────────
# Results
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlacedItem:
    """A single unit placed on a layer, at (x, y) with its rotated footprint."""
    sku: SKU
    x: float
    y: float
    length: float
    width: float
    height: float
    rotated: bool = False
    quantity: int = 1

    @property
    def x_max(self) -> float:
        return self.x + self.length

    @property
    def y_max(self) -> float:
        return self.y + self.width

    @property
    def footprint_area(self) -> float:
        return self.length * self.width

    def to_dict(self) -> dict[str, Any]:
        return {
            "sku": self.sku.id,
            "quantity": self.quantity,
            "position": {"x": self.x, "y": self.y},
            "dimensions": {"length": self.length, "width": self.width, "height": self.height},
            "rotated": self.rotated,
        }


@dataclass(frozen=True)
class Layer:
    """Items sharing one stacking height."""
    items: tuple[PlacedItem, ...]
    height: float
    weight_lbs: float

    @property
    def area_used(self) -> float:
        return sum(p.footprint_area for p in self.items)

    @property
    def unit_count(self) -> int:
        return sum(p.quantity for p in self.items)

    def quantities(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for p in self.items:
            counts[p.sku.id] = counts.get(p.sku.id, 0) + p.quantity
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "height": self.height,
            "weight_lbs": self.weight_lbs,
            "items": [p.to_dict() for p in self.items],
        }


@dataclass(frozen=True)
class Pallet:
    """A finished pallet. Height and weight are locked in when it is built."""
    id: int
    layers: tuple[Layer, ...]
    total_height: float
    total_weight_lbs: float
    footprint_length: float
    footprint_width: float
    weight_unit: WeightUnit = WeightUnit.LBS
    freight_class: str = "Class 500"

    @property
    def total_weight(self) -> float:
        """Total weight in the caller's weight unit."""
        return from_pounds(self.total_weight_lbs, self.weight_unit)

    @property
    def unit_count(self) -> int:
        return sum(layer.unit_count for layer in self.layers)

    @property
    def volume_used(self) -> float:
        """Cubic inches occupied by the placed units."""
        return sum(p.footprint_area * p.height for layer in self.layers for p in layer.items)

    def quantities(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for layer in self.layers:
            for sku_id, qty in layer.quantities().items():
                counts[sku_id] = counts.get(sku_id, 0) + qty
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "layers": [layer.to_dict() for layer in self.layers],
            "total_height": self.total_height,
            "total_weight": self.total_weight,
            "total_weight_lbs": self.total_weight_lbs,
            "weight_unit": self.weight_unit.value,
            "pallet_size": {"length": self.footprint_length, "width": self.footprint_width},
            "freight_class": self.freight_class,
        }

    def __repr__(self) -> str:
        return (
            f"Pallet(id={self.id}, layers={len(self.layers)}, "
            f"units={self.unit_count}, "
            f"height={self.total_height:.1f}in, "
            f"weight={self.total_weight:.1f}{self.weight_unit.value}, "
            f"{self.freight_class})"
        )


@dataclass(frozen=True)
class PackingResult:
    """Ordered pallets of one plan plus totals."""
    pallets: tuple[Pallet, ...] = field(default_factory=tuple)
    weight_unit: WeightUnit = WeightUnit.LBS

    @property
    def total_pallets(self) -> int:
        return len(self.pallets)

    @property
    def total_weight_lbs(self) -> float:
        return sum(p.total_weight_lbs for p in self.pallets)

    @property
    def total_weight(self) -> float:
        return from_pounds(self.total_weight_lbs, self.weight_unit)

    @property
    def total_height(self) -> float:
        return sum(p.total_height for p in self.pallets)

    @property
    def total_units(self) -> int:
        return sum(p.unit_count for p in self.pallets)

    def placed_quantities(self) -> dict[str, int]:
        """Units placed per SKU id across all pallets."""
        counts: dict[str, int] = {}
        for pallet in self.pallets:
            for sku_id, qty in pallet.quantities().items():
                counts[sku_id] = counts.get(sku_id, 0) + qty
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "pallets": [p.to_dict() for p in self.pallets],
            "summary": {
                "total_pallets": self.total_pallets,
                "total_units": self.total_units,
                "total_height": self.total_height,
                "total_weight": self.total_weight,
                "total_weight_lbs": self.total_weight_lbs,
                "weight_unit": self.weight_unit.value,
            },
        }
