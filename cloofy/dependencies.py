from fastapi import Request

from cloofy.config import Settings
from cloofy.services.dashboard_service import DashboardService
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.services.sale_processor import SaleProcessor


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_ledger(request: Request) -> InventoryLedger:
    return request.app.state.ledger


def get_sale_processor(request: Request) -> SaleProcessor:
    return request.app.state.sale_processor


def get_dashboard(request: Request) -> DashboardService:
    return request.app.state.dashboard


__all__ = [
    "get_dashboard",
    "get_ledger",
    "get_sale_processor",
    "get_settings_dep",
]
