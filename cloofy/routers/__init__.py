from cloofy.routers.dashboard import page_router as dashboard_page_router
from cloofy.routers.dashboard import router as dashboard_router
from cloofy.routers.health import router as health_router
from cloofy.routers.ingredients import router as ingredients_router
from cloofy.routers.products import router as products_router
from cloofy.routers.reports import router as reports_router
from cloofy.routers.sales import router as sales_router

__all__ = [
    "dashboard_page_router",
    "dashboard_router",
    "health_router",
    "ingredients_router",
    "products_router",
    "reports_router",
    "sales_router",
]
