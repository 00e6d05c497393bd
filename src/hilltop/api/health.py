from fastapi import APIRouter

from hilltop.config import get_settings
from hilltop.core.clock import to_utc_z, utcnow
from hilltop.core.dtos.common import HealthResponse

settings = get_settings()

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness probe for the site."""
    return HealthResponse(
        status="healthy",
        timestamp=to_utc_z(utcnow()),
        service=settings.APP_NAME
    )


@router.get("/api/health", response_model=HealthResponse)
async def api_health_check():
    """Liveness probe for the API."""
    return HealthResponse(
        status="healthy",
        timestamp=to_utc_z(utcnow()),
        service=f"{settings.APP_NAME} API"
    )
