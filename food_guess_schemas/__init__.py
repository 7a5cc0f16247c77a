"""
API schemas for the food guess service.
Provides type-safe contracts for the HTTP API and the upstream model output.
"""

__version__ = "0.1.0"

# Export commonly used schemas
from food_guess_schemas.common import *  # noqa: F403, F401
from food_guess_schemas.food import *  # noqa: F403, F401
