"""
Food guess API schemas.
Type-safe contracts for the guess endpoint and the model output it relays.
"""

from typing import Annotated, List, Union
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer


__all__ = [
    "GuessRequest",
    "NutrientSet",
    "FoodItem",
    "GuessResponse",
    "DiscoveryResponse",
    "MAX_FOOD_ITEMS",
]

MAX_FOOD_ITEMS = 8


def _json_number(value: float) -> Union[int, float]:
    """Write whole numbers as JSON integers (250, not 250.0)."""
    return int(value) if value.is_integer() else value


# Accepts int or float, validated as float, written back as int when whole
Number = Annotated[float, PlainSerializer(_json_number, return_type=Union[int, float])]


# ============================================================================
# Request
# ============================================================================

class GuessRequest(BaseModel):
    """Inbound photo to guess foods from."""
    model_config = ConfigDict(strict=True)

    image_base64: str = Field(
        ...,
        alias="imageBase64",
        min_length=100,
        description="Base64 image payload, optionally with a data URL prefix"
    )
    # May be omitted, but an explicit null is rejected
    meal_hint: str = Field(
        default=None,
        alias="mealHint",
        description="Free-text hint such as 'breakfast'"
    )


# ============================================================================
# Model output
# ============================================================================

class NutrientSet(BaseModel):
    """Estimated nutrients for one portion."""
    model_config = ConfigDict(strict=True)

    calories: Number = Field(..., ge=0, le=5000)
    protein_g: Number = Field(..., ge=0, le=500)
    carbs_g: Number = Field(..., ge=0, le=500)
    fat_g: Number = Field(..., ge=0, le=500)


class FoodItem(BaseModel):
    """One recognised food with its portion size."""
    model_config = ConfigDict(strict=True)

    name: str = Field(..., min_length=1)
    grams: Number = Field(..., gt=0, le=2000)
    nutrients: NutrientSet


class GuessResponse(BaseModel):
    """Validated list of foods returned to the caller."""
    model_config = ConfigDict(strict=True)

    items: List[FoodItem] = Field(..., max_length=MAX_FOOD_ITEMS)


# ============================================================================
# Discovery
# ============================================================================

class DiscoveryResponse(BaseModel):
    """Answer to a GET on the guess route."""
    ok: bool = True
    message: str
