"""
Prompt construction for the upstream vision model.
"""

from food_guess_schemas.food import GuessRequest

RESPONSE_SHAPE_INSTRUCTION = (
    'Return ONLY JSON in this shape: '
    '{"items":[{"name":string,"grams":number,'
    '"nutrients":{"calories":number,"protein_g":number,"carbs_g":number,"fat_g":number}}]}'
)

NUTRITION_INSTRUCTIONS = [
    "You are a nutrition assistant.",
    "From this photo, identify the most likely foods the user will log.",
    "Return 1-4 items max. Use realistic portion grams.",
    "Provide approximate calories/protein/carbs/fat for that portion.",
    "If unsure, choose the simplest common interpretation and be conservative.",
]


def build_prompt(request: GuessRequest) -> str:
    """
    Build the instruction text sent alongside the photo.

    The JSON shape line always comes first; the meal hint, when given,
    is appended verbatim as the last line.
    """
    lines = [RESPONSE_SHAPE_INSTRUCTION, *NUTRITION_INSTRUCTIONS]
    if request.meal_hint:
        lines.append(f"Meal hint: {request.meal_hint}")
    return "\n".join(lines)
