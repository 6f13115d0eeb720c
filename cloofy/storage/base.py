"""Storage contract shared by the SQL backend and the in-memory fake.

A :class:`Storage` is opened once at process start and closed at shutdown.
All reads and writes go through :meth:`Storage.transaction`, which hands out
a :class:`StorageSession` unit of work.  Only one unit of work is active at a
time per storage handle, so a sale's feasibility check and its deductions can
never interleave with another sale or a manual adjustment.  Nested
``transaction()`` calls on the same thread join the active unit of work.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional, Sequence

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

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT_SECONDS = 30.0


class StorageSession(ABC):
    @abstractmethod
    def get_ingredient(self, ingredient_id: int) -> Optional[Ingredient]: ...

    @abstractmethod
    def list_ingredients(self) -> list[Ingredient]: ...

    @abstractmethod
    def list_low_stock(self) -> list[Ingredient]: ...

    @abstractmethod
    def add_ingredient(
        self,
        *,
        name: str,
        unit: str,
        current_stock: float,
        reorder_level: float,
        unit_cost: float,
    ) -> Ingredient: ...

    @abstractmethod
    def set_stock(self, ingredient_id: int, new_stock: float) -> None: ...

    @abstractmethod
    def append_log(
        self, ingredient_id: int, change: float, reason: str, timestamp: datetime
    ) -> InventoryLogEntry: ...

    @abstractmethod
    def list_logs(self, ingredient_id: Optional[int] = None) -> list[InventoryLogEntry]: ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]: ...

    @abstractmethod
    def list_products(self) -> list[Product]: ...

    @abstractmethod
    def add_product(self, *, name: str, price: float, recipe: Sequence[RecipeLine]) -> Product: ...

    @abstractmethod
    def add_sale(
        self, product_id: int, qty: int, total_price: float, timestamp: datetime
    ) -> Sale: ...

    @abstractmethod
    def list_sales(self) -> list[Sale]: ...

    @abstractmethod
    def sales_totals(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> SalesTotals: ...

    @abstractmethod
    def sales_by_day(self, since: datetime) -> list[DaySales]: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    def close(self) -> None:
        return None


class Storage(ABC):
    def __init__(self, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._lock = threading.Lock()
        self._local = threading.local()
        self._lock_timeout = lock_timeout

    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def _begin(self) -> StorageSession: ...

    @contextmanager
    def transaction(self) -> Iterator[StorageSession]:
        active = getattr(self._local, "session", None)
        if active is not None:
            yield active
            return

        if not self._lock.acquire(timeout=self._lock_timeout):
            logger.error("Timed out after %.1fs waiting for storage lock.", self._lock_timeout)
            raise StorageFailure("Timed out waiting for storage")
        try:
            session = self._begin()
            self._local.session = session
            try:
                yield session
            except BaseException:
                session.rollback()
                raise
            else:
                session.commit()
            finally:
                self._local.session = None
                session.close()
        finally:
            self._lock.release()

    def __enter__(self) -> "Storage":
        self.open()
        return self

    def __exit__(self, *_exc) -> None:
        self.close()


__all__ = ["DEFAULT_LOCK_TIMEOUT_SECONDS", "Storage", "StorageSession"]
