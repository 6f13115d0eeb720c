from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class SaleCreate(BaseModel):
    product_id: int
    # Coerced by cloofy.core.coercion.parse_quantity so bad values map to 400.
    qty: Any = None


class SaleRead(BaseModel):
    id: int
    timestamp: datetime
    product_id: int
    qty: int
    total_price: float

    model_config = ConfigDict(from_attributes=True)
