"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.database import is_database_configured
from ..dependencies import ServiceContainer, get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    email: str
    google: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    container: ServiceContainer = Depends(get_container),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=container.settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    container: ServiceContainer = Depends(get_container),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which external integrations are configured. Email and Google
    sign-in are optional; the API is ready as long as storage is set up.
    """
    settings = container.settings
    database = "configured" if is_database_configured(settings) else "missing"
    return ReadinessResponse(
        status="ready" if database == "configured" else "degraded",
        database=database,
        email="configured" if container.notification_channel.is_configured else "disabled",
        google="configured" if settings.google_client_id else "disabled",
    )
