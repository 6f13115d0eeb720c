from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cloofy.core.dates import as_utc
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
from cloofy.database import Base, build_engine, build_sessionmaker
from cloofy.models import (
    IngredientRow,
    InventoryLogRow,
    ProductRow,
    SaleRow,
    import_all_models,
)
from cloofy.storage.base import DEFAULT_LOCK_TIMEOUT_SECONDS, Storage, StorageSession

logger = logging.getLogger(__name__)


@contextmanager
def _guard(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Storage failure while trying to %s", action)
        raise StorageFailure(f"Failed to {action}") from exc


def _ingredient(row: IngredientRow) -> Ingredient:
    return Ingredient(
        id=row.id,
        name=row.name,
        unit=row.unit,
        current_stock=float(row.current_stock),
        reorder_level=float(row.reorder_level),
        unit_cost=float(row.unit_cost),
    )


def _recipe_from_json(raw) -> tuple[RecipeLine, ...]:
    return tuple(
        RecipeLine(
            ingredient_id=int(line["ingredient_id"]),
            quantity_per_unit=float(line["quantity_per_unit"]),
        )
        for line in raw or []
    )


def _recipe_to_json(recipe: Sequence[RecipeLine]) -> list[dict]:
    return [
        {"ingredient_id": line.ingredient_id, "quantity_per_unit": line.quantity_per_unit}
        for line in recipe
    ]


def _product(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        price=float(row.price),
        recipe=_recipe_from_json(row.recipe),
    )


def _sale(row: SaleRow) -> Sale:
    return Sale(
        id=row.id,
        timestamp=as_utc(row.timestamp),
        product_id=row.product_id,
        qty=int(row.qty),
        total_price=float(row.total_price),
    )


def _log_entry(row: InventoryLogRow) -> InventoryLogEntry:
    return InventoryLogEntry(
        id=row.id,
        timestamp=as_utc(row.timestamp),
        ingredient_id=row.ingredient_id,
        change=float(row.change),
        reason=row.reason or "",
    )


class SqlStorageSession(StorageSession):
    def __init__(self, db: Session):
        self.db = db

    def get_ingredient(self, ingredient_id: int) -> Optional[Ingredient]:
        with _guard("load ingredient"):
            row = self.db.get(IngredientRow, ingredient_id, populate_existing=True)
        return _ingredient(row) if row else None

    def list_ingredients(self) -> list[Ingredient]:
        with _guard("load ingredients"):
            rows = self.db.execute(select(IngredientRow).order_by(IngredientRow.id)).scalars().all()
        return [_ingredient(row) for row in rows]

    def list_low_stock(self) -> list[Ingredient]:
        with _guard("load low stock ingredients"):
            rows = (
                self.db.execute(
                    select(IngredientRow)
                    .where(IngredientRow.current_stock <= IngredientRow.reorder_level)
                    .order_by(IngredientRow.id)
                )
                .scalars()
                .all()
            )
        return [_ingredient(row) for row in rows]

    def add_ingredient(
        self,
        *,
        name: str,
        unit: str,
        current_stock: float,
        reorder_level: float,
        unit_cost: float,
    ) -> Ingredient:
        row = IngredientRow(
            name=name,
            unit=unit,
            current_stock=current_stock,
            reorder_level=reorder_level,
            unit_cost=unit_cost,
        )
        with _guard("create ingredient"):
            self.db.add(row)
            self.db.flush()
        return _ingredient(row)

    def set_stock(self, ingredient_id: int, new_stock: float) -> None:
        with _guard("update stock"):
            row = self.db.get(IngredientRow, ingredient_id)
            if row is None:
                raise StorageFailure(f"Ingredient {ingredient_id} vanished during update")
            row.current_stock = new_stock
            self.db.flush()

    def append_log(
        self, ingredient_id: int, change: float, reason: str, timestamp: datetime
    ) -> InventoryLogEntry:
        row = InventoryLogRow(
            ingredient_id=ingredient_id,
            change=change,
            reason=reason,
            timestamp=timestamp,
        )
        with _guard("append inventory log"):
            self.db.add(row)
            self.db.flush()
        return _log_entry(row)

    def list_logs(self, ingredient_id: Optional[int] = None) -> list[InventoryLogEntry]:
        stmt = select(InventoryLogRow).order_by(InventoryLogRow.id)
        if ingredient_id is not None:
            stmt = stmt.where(InventoryLogRow.ingredient_id == ingredient_id)
        with _guard("load inventory logs"):
            rows = self.db.execute(stmt).scalars().all()
        return [_log_entry(row) for row in rows]

    def get_product(self, product_id: int) -> Optional[Product]:
        with _guard("load product"):
            row = self.db.get(ProductRow, product_id)
        return _product(row) if row else None

    def list_products(self) -> list[Product]:
        with _guard("load products"):
            rows = self.db.execute(select(ProductRow).order_by(ProductRow.id)).scalars().all()
        return [_product(row) for row in rows]

    def add_product(self, *, name: str, price: float, recipe: Sequence[RecipeLine]) -> Product:
        row = ProductRow(name=name, price=price, recipe=_recipe_to_json(recipe))
        with _guard("create product"):
            self.db.add(row)
            self.db.flush()
        return _product(row)

    def add_sale(
        self, product_id: int, qty: int, total_price: float, timestamp: datetime
    ) -> Sale:
        row = SaleRow(
            product_id=product_id,
            qty=qty,
            total_price=total_price,
            timestamp=timestamp,
        )
        with _guard("record sale"):
            self.db.add(row)
            self.db.flush()
        return _sale(row)

    def list_sales(self) -> list[Sale]:
        with _guard("load sales"):
            rows = self.db.execute(select(SaleRow).order_by(SaleRow.id)).scalars().all()
        return [_sale(row) for row in rows]

    def sales_totals(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> SalesTotals:
        stmt = select(
            func.coalesce(func.sum(SaleRow.total_price), 0.0),
            func.count(SaleRow.id),
            func.coalesce(func.sum(SaleRow.qty), 0),
        )
        if start is not None:
            stmt = stmt.where(SaleRow.timestamp >= start)
        if end is not None:
            stmt = stmt.where(SaleRow.timestamp < end)
        with _guard("aggregate sales"):
            revenue, count, tubs = self.db.execute(stmt).one()
        return SalesTotals(revenue=float(revenue or 0.0), sales_count=int(count or 0), tubs=int(tubs or 0))

    def sales_by_day(self, since: datetime) -> list[DaySales]:
        # Grouping happens in Python so day boundaries are UTC on every backend.
        stmt = (
            select(SaleRow.timestamp, SaleRow.total_price, SaleRow.qty)
            .where(SaleRow.timestamp >= since)
            .order_by(SaleRow.timestamp)
        )
        with _guard("aggregate sales by day"):
            rows = self.db.execute(stmt).all()

        buckets: dict = {}
        for timestamp, total_price, qty in rows:
            day = as_utc(timestamp).date()
            revenue, tubs = buckets.get(day, (0.0, 0))
            buckets[day] = (revenue + float(total_price), tubs + int(qty))
        return [
            DaySales(day=day, revenue=revenue, tubs=tubs)
            for day, (revenue, tubs) in sorted(buckets.items())
        ]

    def commit(self) -> None:
        with _guard("commit transaction"):
            self.db.commit()

    def rollback(self) -> None:
        with _guard("roll back transaction"):
            self.db.rollback()

    def close(self) -> None:
        self.db.close()


class SqlStorage(Storage):
    def __init__(self, database_url: str, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        super().__init__(lock_timeout=lock_timeout)
        self.database_url = database_url
        self._engine = None
        self._sessionmaker = None

    def open(self) -> None:
        if self._engine is not None:
            return
        import_all_models()
        with _guard("open database"):
            self._engine = build_engine(self.database_url)
            Base.metadata.create_all(bind=self._engine)
        self._sessionmaker = build_sessionmaker(self._engine)
        logger.info("Storage opened: %s", self._engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Storage closed.")

    def _begin(self) -> StorageSession:
        if self._sessionmaker is None:
            raise StorageFailure("Storage is not open")
        return SqlStorageSession(self._sessionmaker())


__all__ = ["SqlStorage", "SqlStorageSession"]
