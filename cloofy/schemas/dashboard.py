from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict

from cloofy.schemas.ingredient import IngredientRead


class DashboardSummary(BaseModel):
    revenue: float
    sales_count: int
    total_tubs: int
    low_stock: List[IngredientRead]


class DaySalesRead(BaseModel):
    day: date
    revenue: float
    tubs: int

    model_config = ConfigDict(from_attributes=True)
