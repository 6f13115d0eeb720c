import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from cloofy import __version__
from cloofy.config import Settings, get_settings
from cloofy.core.constants import TEMPLATES_DIR
from cloofy.core.errors import CloofyError, StorageFailure
from cloofy.core.logging import setup_logging
from cloofy.routers import (
    dashboard_page_router,
    dashboard_router,
    health_router,
    ingredients_router,
    products_router,
    reports_router,
    sales_router,
)
from cloofy.services.dashboard_service import DashboardService
from cloofy.services.inventory_ledger import InventoryLedger
from cloofy.services.sale_processor import SaleProcessor
from cloofy.services.seed_service import seed_defaults
from cloofy.storage import Storage, storage_from_settings

logger = logging.getLogger(__name__)


async def _handle_domain_error(_request: Request, exc: CloofyError):
    if isinstance(exc, StorageFailure):
        logger.error("Request failed on storage: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    settings = settings or get_settings()
    storage = storage or storage_from_settings(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        setup_logging(settings)
        storage.open()
        try:
            if settings.SEED_ON_STARTUP:
                seed_defaults(storage)
            logger.info("%s ready (%s)", settings.APP_NAME, settings.ENVIRONMENT)
            yield
        finally:
            storage.close()

    app = FastAPI(title=settings.APP_NAME, version=__version__, lifespan=lifespan)

    ledger = InventoryLedger(storage)
    app.state.settings = settings
    app.state.storage = storage
    app.state.ledger = ledger
    app.state.sale_processor = SaleProcessor(storage, ledger)
    app.state.dashboard = DashboardService(storage, ledger)
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.add_exception_handler(CloofyError, _handle_domain_error)

    app.include_router(health_router)
    app.include_router(ingredients_router)
    app.include_router(products_router)
    app.include_router(sales_router)
    app.include_router(dashboard_router)
    app.include_router(reports_router)
    app.include_router(dashboard_page_router)
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("cloofy.main:app", host=settings.HOST, port=settings.PORT)


app = create_app()


__all__ = ["app", "create_app", "run"]
