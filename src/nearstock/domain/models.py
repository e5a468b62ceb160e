"""
Domain models (Pydantic).

These types are the contract between the pipeline stages:
- flattened commerce inventory (`InventoryRecord`)
- the fulfillment decision (`SelectionResult`)
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class InventoryRecord(BaseModel):
    """One (product variant, stock location) quantity observation."""

    location_name: str
    quantity: int = Field(0, ge=0)


class SelectionResult(BaseModel):
    """Outcome of the two-tier availability policy."""

    tier: Literal["nearest", "fallback", "out_of_stock"]
    warehouse: str | None = None
    quantity: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _validate_shape(self) -> "SelectionResult":
        if self.tier == "out_of_stock":
            if self.warehouse is not None or self.quantity is not None:
                raise ValueError("out_of_stock results carry no warehouse or quantity")
        elif self.warehouse is None or self.quantity is None:
            raise ValueError(f"{self.tier} results require warehouse and quantity")
        return self

    @property
    def out_of_stock(self) -> bool:
        return self.tier == "out_of_stock"

    @classmethod
    def nearest(cls, record: InventoryRecord) -> "SelectionResult":
        return cls(tier="nearest", warehouse=record.location_name, quantity=record.quantity)

    @classmethod
    def fallback(cls, record: InventoryRecord) -> "SelectionResult":
        return cls(tier="fallback", warehouse=record.location_name, quantity=record.quantity)

    @classmethod
    def none_available(cls) -> "SelectionResult":
        return cls(tier="out_of_stock")
