from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from cloofy.config import Settings
from cloofy.core.constants import REPORT_FILENAME
from cloofy.dependencies import get_dashboard, get_settings_dep
from cloofy.services.dashboard_service import DashboardService
from cloofy.services.report_service import build_monthly_report

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("/monthly-pdf")
def monthly_pdf(
    month: Optional[str] = Query(None, description="Month filter (YYYY-MM)"),
    dashboard: DashboardService = Depends(get_dashboard),
    settings: Settings = Depends(get_settings_dep),
):
    content = build_monthly_report(dashboard, month, currency=settings.CURRENCY_LABEL)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )


__all__ = ["router"]
