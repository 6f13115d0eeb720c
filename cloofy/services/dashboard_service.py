from datetime import datetime
from typing import Optional

from cloofy.core.dates import parse_month, trailing_window_start
from cloofy.core.records import DaySales, Ingredient, SalesTotals
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.storage.base import Storage

DEFAULT_WINDOW_DAYS = 30


class DashboardService:
    """Read-only projections over sales history and ingredient stock."""

    def __init__(self, storage: Storage, ledger: Optional[InventoryLedger] = None):
        self.storage = storage
        self.ledger = ledger or InventoryLedger(storage)

    def summary(self) -> dict:
        with self.storage.transaction() as tx:
            totals = tx.sales_totals()
            low_stock = self.ledger.list_low_stock()
        return {
            "revenue": totals.revenue,
            "sales_count": totals.sales_count,
            "total_tubs": totals.tubs,
            "low_stock": low_stock,
        }

    def sales_by_day(
        self, days: int = DEFAULT_WINDOW_DAYS, *, now: Optional[datetime] = None
    ) -> list[DaySales]:
        since = trailing_window_start(days, now=now)
        with self.storage.transaction() as tx:
            return tx.sales_by_day(since)

    def monthly_totals(self, month: Optional[str] = None) -> SalesTotals:
        bounds = parse_month(month)
        with self.storage.transaction() as tx:
            if bounds is None:
                return tx.sales_totals()
            return tx.sales_totals(*bounds)

    def low_stock(self) -> list[Ingredient]:
        return self.ledger.list_low_stock()


__all__ = ["DEFAULT_WINDOW_DAYS", "DashboardService"]
