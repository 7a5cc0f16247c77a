"""
Health check endpoints.
"""

from fastapi import APIRouter

from food_guess.core.dependencies import AppSettings
from food_guess_schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def get_health_status(settings: AppSettings):
    """
    Basic health check endpoint.

    Reports 'degraded' when the upstream credential is missing, since every
    guess would then fail with a configuration error.
    """
    if settings.upstream_configured:
        return HealthResponse(status="healthy", version=settings.APP_VERSION, upstream_configured=True)

    return HealthResponse(
        status="degraded",
        version=settings.APP_VERSION,
        upstream_configured=False,
        warnings=["OPENAI_API_KEY is not set"]
    )
