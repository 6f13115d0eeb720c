from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Sequence

from cloofy.core.errors import StorageFailure
from cloofy.core.records import (
    DaySales,
    Ingredient,
    InventoryLogEntry,
    Product,
    RecipeLine,
    Sale,
    SalesTotals,
)
from cloofy.storage.base import DEFAULT_LOCK_TIMEOUT_SECONDS, Storage, StorageSession


@dataclass
class _State:
    ingredients: dict[int, Ingredient] = field(default_factory=dict)
    products: dict[int, Product] = field(default_factory=dict)
    sales: list[Sale] = field(default_factory=list)
    logs: list[InventoryLogEntry] = field(default_factory=list)
    next_ids: dict[str, int] = field(
        default_factory=lambda: {"ingredient": 1, "product": 1, "sale": 1, "log": 1}
    )

    def next_id(self, kind: str) -> int:
        value = self.next_ids[kind]
        self.next_ids[kind] = value + 1
        return value


class MemoryStorageSession(StorageSession):
    def __init__(self, storage: "MemoryStorage"):
        self._storage = storage
        self._snapshot = copy.deepcopy(storage.state)

    @property
    def state(self) -> _State:
        return self._storage.state

    def get_ingredient(self, ingredient_id: int) -> Optional[Ingredient]:
        return self.state.ingredients.get(ingredient_id)

    def list_ingredients(self) -> list[Ingredient]:
        return [self.state.ingredients[key] for key in sorted(self.state.ingredients)]

    def list_low_stock(self) -> list[Ingredient]:
        return [ingredient for ingredient in self.list_ingredients() if ingredient.is_low_stock]

    def add_ingredient(
        self,
        *,
        name: str,
        unit: str,
        current_stock: float,
        reorder_level: float,
        unit_cost: float,
    ) -> Ingredient:
        ingredient = Ingredient(
            id=self.state.next_id("ingredient"),
            name=name,
            unit=unit,
            current_stock=float(current_stock),
            reorder_level=float(reorder_level),
            unit_cost=float(unit_cost),
        )
        self.state.ingredients[ingredient.id] = ingredient
        return ingredient

    def set_stock(self, ingredient_id: int, new_stock: float) -> None:
        current = self.state.ingredients.get(ingredient_id)
        if current is None:
            raise StorageFailure(f"Ingredient {ingredient_id} vanished during update")
        self.state.ingredients[ingredient_id] = replace(current, current_stock=float(new_stock))

    def append_log(
        self, ingredient_id: int, change: float, reason: str, timestamp: datetime
    ) -> InventoryLogEntry:
        entry = InventoryLogEntry(
            id=self.state.next_id("log"),
            timestamp=timestamp,
            ingredient_id=ingredient_id,
            change=float(change),
            reason=reason,
        )
        self.state.logs.append(entry)
        return entry

    def list_logs(self, ingredient_id: Optional[int] = None) -> list[InventoryLogEntry]:
        if ingredient_id is None:
            return list(self.state.logs)
        return [entry for entry in self.state.logs if entry.ingredient_id == ingredient_id]

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.state.products.get(product_id)

    def list_products(self) -> list[Product]:
        return [self.state.products[key] for key in sorted(self.state.products)]

    def add_product(self, *, name: str, price: float, recipe: Sequence[RecipeLine]) -> Product:
        product = Product(
            id=self.state.next_id("product"),
            name=name,
            price=float(price),
            recipe=tuple(recipe),
        )
        self.state.products[product.id] = product
        return product

    def add_sale(
        self, product_id: int, qty: int, total_price: float, timestamp: datetime
    ) -> Sale:
        sale = Sale(
            id=self.state.next_id("sale"),
            timestamp=timestamp,
            product_id=product_id,
            qty=qty,
            total_price=float(total_price),
        )
        self.state.sales.append(sale)
        return sale

    def list_sales(self) -> list[Sale]:
        return list(self.state.sales)

    def sales_totals(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> SalesTotals:
        selected = [
            sale
            for sale in self.state.sales
            if (start is None or sale.timestamp >= start) and (end is None or sale.timestamp < end)
        ]
        return SalesTotals(
            revenue=float(sum(sale.total_price for sale in selected)),
            sales_count=len(selected),
            tubs=sum(sale.qty for sale in selected),
        )

    def sales_by_day(self, since: datetime) -> list[DaySales]:
        buckets: dict = {}
        for sale in self.state.sales:
            if sale.timestamp < since:
                continue
            day = sale.timestamp.date()
            revenue, tubs = buckets.get(day, (0.0, 0))
            buckets[day] = (revenue + sale.total_price, tubs + sale.qty)
        return [
            DaySales(day=day, revenue=revenue, tubs=tubs)
            for day, (revenue, tubs) in sorted(buckets.items())
        ]

    def commit(self) -> None:
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is not None:
            self._storage.state = self._snapshot
            self._snapshot = None


class MemoryStorage(Storage):
    """Process-local storage used by tests and throwaway runs."""

    def __init__(self, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        super().__init__(lock_timeout=lock_timeout)
        self.state = _State()
        self._opened = False

    def open(self) -> None:
        self._opened = True

    def close(self) -> None:
        self._opened = False

    def _begin(self) -> StorageSession:
        if not self._opened:
            raise StorageFailure("Storage is not open")
        return MemoryStorageSession(self)


__all__ = ["MemoryStorage", "MemoryStorageSession"]
