from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class Ingredient:
    id: int
    name: str
    unit: str
    current_stock: float
    reorder_level: float
    unit_cost: float

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.reorder_level


@dataclass(frozen=True)
class RecipeLine:
    ingredient_id: int
    quantity_per_unit: float


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    price: float
    recipe: tuple[RecipeLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Sale:
    id: int
    timestamp: datetime
    product_id: int
    qty: int
    total_price: float


@dataclass(frozen=True)
class InventoryLogEntry:
    id: int
    timestamp: datetime
    ingredient_id: int
    change: float
    reason: str


@dataclass(frozen=True)
class SalesTotals:
    revenue: float = 0.0
    sales_count: int = 0
    tubs: int = 0


@dataclass(frozen=True)
class DaySales:
    day: date
    revenue: float
    tubs: int


@dataclass(frozen=True)
class SaleReceipt:
    sale: Sale
    total_price: float


__all__ = [
    "DaySales",
    "Ingredient",
    "InventoryLogEntry",
    "Product",
    "RecipeLine",
    "Sale",
    "SaleReceipt",
    "SalesTotals",
]
