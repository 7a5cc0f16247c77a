"""
Food guess endpoints.
"""

import json
import logging

from fastapi import APIRouter, Request

from food_guess.core.dependencies import AppSettings, HTTPClient
from food_guess.core.errors import RequestValidationFailed
from food_guess.core.guess_handler import GuessRequestHandler
from food_guess_schemas.common import ErrorResponse
from food_guess_schemas.food import DiscoveryResponse, GuessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/food", tags=["food"])


@router.get("/guess", response_model=DiscoveryResponse)
async def describe_guess_endpoint():
    """Tell browsers and curious callers how to use this route."""
    return DiscoveryResponse(ok=True, message="Use POST /api/food/guess")


@router.post(
    "/guess",
    response_model=GuessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed request body"},
        413: {"model": ErrorResponse, "description": "Image too large"},
        500: {"model": ErrorResponse, "description": "Upstream credential missing"},
        502: {"model": ErrorResponse, "description": "Upstream failure or unexpected output"},
    }
)
async def guess_food(request: Request, settings: AppSettings, client: HTTPClient):
    """
    Guess the foods in a photo and estimate their nutrients.

    Body:
        imageBase64: Base64 image, optionally a data URL (min 100 chars)
        mealHint: Optional hint such as 'lunch'

    Returns:
        Up to 8 food items with grams and calories/protein/carbs/fat
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationFailed(f"Invalid JSON body: {e}") from e

    handler = GuessRequestHandler(settings=settings, client=client)
    return await handler.execute(body)
