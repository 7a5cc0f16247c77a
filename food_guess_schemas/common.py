"""
Common schemas shared by all endpoints.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


__all__ = ["ErrorResponse", "HealthResponse"]


class ErrorResponse(BaseModel):
    """
    Standard error response.

    Example:
        ErrorResponse(
            error="AI returned unexpected format",
            details={"formErrors": [], "fieldErrors": {"items.0.grams": ["..."]}}
        )
    """
    error: str
    details: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str  # "healthy", "degraded"
    version: str
    upstream_configured: bool
    warnings: Optional[List[str]] = None
