"""
Error taxonomy for the guess pipeline.
Every failure is surfaced to the caller as an HTTP status and a JSON error body.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from food_guess_schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class FoodGuessError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, details=self.details)


class RequestValidationFailed(FoodGuessError):
    """Bad or missing input fields."""
    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLargeError(RequestValidationFailed):
    """Image payload exceeds the accepted base64 length."""
    status_code = status.HTTP_413_CONTENT_TOO_LARGE

    def __init__(self, message: str = "Image too large. Retake with lower quality."):
        super().__init__(message)


class ConfigurationError(FoodGuessError):
    """Upstream credential is not configured."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(FoodGuessError):
    """Inference API call failed."""
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, upstream_status: Optional[int], body: str = ""):
        self.upstream_status = upstream_status
        self.body = body
        prefix = upstream_status if upstream_status is not None else "unreachable"
        super().__init__(f"AI error: {prefix} {body}")


class FormatError(FoodGuessError):
    """Inference API output could not be parsed or failed validation."""
    status_code = status.HTTP_502_BAD_GATEWAY


def flatten_validation_error(exc: ValidationError) -> Dict[str, Any]:
    """
    Flatten pydantic errors into form-level and per-field messages.

    Args:
        exc: Validation error raised by a model

    Returns:
        {"formErrors": [...], "fieldErrors": {"items.0.grams": [...]}}
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for error in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in error["loc"])
        if not loc:
            form_errors.append(error["msg"])
        else:
            field_errors.setdefault(loc, []).append(error["msg"])

    return {"formErrors": form_errors, "fieldErrors": field_errors}


def describe_validation_error(exc: ValidationError) -> str:
    """Single-line message naming the first offending field."""
    first = exc.errors(include_url=False)[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{loc}: {first['msg']}" if loc else first["msg"]


async def food_guess_error_handler(request: Request, exc: FoodGuessError) -> JSONResponse:
    """Render a pipeline error as its status code and error body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.status_code} {exc.message[:200]}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.status_code} {exc.message[:200]}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True)
    )
