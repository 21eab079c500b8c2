"""Job-file schemas and loading."""

from .schemas import OrderLineSchema, PalletSchema, PlanJobSchema, SkuSchema, load_job

__all__ = ["PalletSchema", "SkuSchema", "OrderLineSchema", "PlanJobSchema", "load_job"]
