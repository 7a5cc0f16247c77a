"""
Shared dependencies for FastAPI endpoints.
"""

import logging
from typing import Annotated

from fastapi import Depends
import httpx

from food_guess.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


AppSettings = Annotated[Settings, Depends(get_settings)]


# HTTP Client singleton
_http_client: httpx.AsyncClient | None = None


async def get_http_client(settings: AppSettings) -> httpx.AsyncClient:
    """
    Get or create the global HTTP client.
    Used for making requests to the upstream inference API.
    """
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            follow_redirects=True
        )
    return _http_client


async def close_http_client():
    """Close the global HTTP client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


# Dependency annotations
HTTPClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]
