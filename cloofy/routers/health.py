from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from cloofy.config import Settings
from cloofy.dependencies import get_settings_dep

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings_dep)):
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "time": datetime.now(timezone.utc).isoformat(),
    }
