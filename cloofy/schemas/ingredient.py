from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IngredientBase(BaseModel):
    name: str
    unit: str
    current_stock: float = Field(0.0, allow_inf_nan=False)
    reorder_level: float = Field(0.0, allow_inf_nan=False)
    unit_cost: float = Field(0.0, allow_inf_nan=False)


class IngredientCreate(IngredientBase):
    pass


class IngredientRead(IngredientBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class StockAdjustment(BaseModel):
    change: float = Field(allow_inf_nan=False)
    reason: Optional[str] = None


class InventoryLogRead(BaseModel):
    id: int
    timestamp: datetime
    ingredient_id: int
    change: float
    reason: str

    model_config = ConfigDict(from_attributes=True)
