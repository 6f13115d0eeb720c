from cloofy.services.dashboard_service import DashboardService
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.services.report_service import build_monthly_report
from cloofy.services.sale_processor import SaleProcessor
from cloofy.services.seed_service import seed_defaults

__all__ = [
    "DashboardService",
    "InventoryLedger",
    "SaleProcessor",
    "build_monthly_report",
    "seed_defaults",
]
