"""Data schemas for plan job files (YAML or JSON)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from pallet_planner.config import DEFAULT_TOLERANCE, PalletConfig
from pallet_planner.core.models import SKU, OrderLine
from pallet_planner.core.units import UnitType


class PalletSchema(BaseModel):
    """Schema for the pallet limits of a job."""
    length: float = Field(default=48.0, gt=0, description="Footprint length in inches")
    width: float = Field(default=40.0, gt=0, description="Footprint width in inches")
    max_height: float = Field(default=72.0, gt=0, description="Maximum load height in inches")
    max_weight: float = Field(default=2000.0, gt=0, description="Maximum load weight")
    weight_unit: Literal["lbs", "kg"] = Field(default="lbs", description="Unit of all weights")
    tolerance: float = Field(default=DEFAULT_TOLERANCE, gt=0)


class SkuSchema(BaseModel):
    """Schema for a SKU record."""
    id: str = Field(min_length=1, description="Unique SKU identifier")
    name: Optional[str] = None
    length: float = Field(gt=0, description="Length in inches")
    width: float = Field(gt=0, description="Width in inches")
    height: float = Field(gt=0, description="Height in inches")
    weight: float = Field(ge=0, description="Unit weight in the job's weight unit")
    pack_type: str = "box"
    description: Optional[str] = None


class OrderLineSchema(BaseModel):
    """Schema for an order line referencing a SKU by id."""
    sku: str = Field(description="SKU identifier")
    quantity: int = Field(description="Requested units; lines <= 0 are ignored")
    unit_type: Literal["each", "case"] = "each"


class PlanJobSchema(BaseModel):
    """Schema for a complete plan job."""
    plan_id: Optional[str] = None
    pallet: PalletSchema = Field(default_factory=PalletSchema)
    skus: List[SkuSchema] = Field(min_length=1)
    order: List[OrderLineSchema] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_references(self) -> "PlanJobSchema":
        ids = [s.id for s in self.skus]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate SKU ids: {duplicates}")
        unknown = sorted({line.sku for line in self.order} - set(ids))
        if unknown:
            raise ValueError(f"Order references unknown SKU ids: {unknown}")
        return self

    def to_config(self) -> PalletConfig:
        p = self.pallet
        return PalletConfig.from_dict({
            "footprint_length": p.length,
            "footprint_width": p.width,
            "max_height": p.max_height,
            "max_weight": p.max_weight,
            "weight_unit": p.weight_unit,
            "tolerance": p.tolerance,
        })

    def to_order_lines(self) -> List[OrderLine]:
        skus = {s.id: SKU.from_dict(s.model_dump()) for s in self.skus}
        return [
            OrderLine(sku=skus[line.sku], quantity=line.quantity, unit_type=UnitType(line.unit_type))
            for line in self.order
        ]


def load_job(path: Path | str) -> PlanJobSchema:
    """
    Read and validate a job file; ``.json`` is parsed as JSON, anything else
    as YAML.

    Raises:
        pydantic.ValidationError: if the content does not match the schema.
        yaml.YAMLError / json.JSONDecodeError: if the file cannot be parsed.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    return PlanJobSchema.model_validate(data if data is not None else {})
