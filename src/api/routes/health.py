"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core import config

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if the HubSpot token is not configured.
    """
    crm_configured = bool(config.HUBSPOT_ACCESS_TOKEN)
    timestamp = datetime.now(timezone.utc).isoformat()

    if crm_configured:
        return HealthResponse(
            status="healthy",
            version=config.API_VERSION,
            crm_configured=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=config.API_VERSION,
                crm_configured=False,
                timestamp=timestamp,
                error="HubSpot access token not configured",
            ).model_dump(),
        )
