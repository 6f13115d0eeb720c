from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from cloofy.config import Settings
from cloofy.dependencies import get_dashboard, get_ledger, get_sale_processor, get_settings_dep
from cloofy.schemas.dashboard import DashboardSummary, DaySalesRead
from cloofy.schemas.product import ProductRead
from cloofy.services.dashboard_service import DashboardService
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.services.sale_processor import SaleProcessor

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])
page_router = APIRouter(tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(dashboard: DashboardService = Depends(get_dashboard)):
    return dashboard.summary()


@router.get("/sales-by-day", response_model=List[DaySalesRead])
def sales_by_day(
    dashboard: DashboardService = Depends(get_dashboard),
    settings: Settings = Depends(get_settings_dep),
):
    return dashboard.sales_by_day(settings.SALES_WINDOW_DAYS)


@page_router.get("/", response_class=HTMLResponse)
def dashboard_page(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
    ledger: InventoryLedger = Depends(get_ledger),
    processor: SaleProcessor = Depends(get_sale_processor),
    settings: Settings = Depends(get_settings_dep),
):
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "app_name": settings.APP_NAME,
            "currency": settings.CURRENCY_LABEL,
            "window_days": settings.SALES_WINDOW_DAYS,
            "summary": dashboard.summary(),
            "days": dashboard.sales_by_day(settings.SALES_WINDOW_DAYS),
            "ingredients": ledger.list_ingredients(),
            "products": [ProductRead.from_record(product) for product in processor.list_products()],
        },
    )


__all__ = ["page_router", "router"]
