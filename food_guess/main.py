"""
Food Guess API - Main FastAPI Application
Turns a food photo into an estimated list of foods and nutrients via a vision model.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from food_guess.core.config import get_settings
from food_guess.core.dependencies import close_http_client
from food_guess.core.errors import FoodGuessError, food_guess_error_handler
from food_guess.api import food, health

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Runs on startup and shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    if not settings.upstream_configured:
        logger.warning("OPENAI_API_KEY is not set; guesses will fail until it is configured")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_http_client()
    logger.info("HTTP client closed")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Estimate foods and nutrients from a meal photo",
    version=settings.APP_VERSION,
    lifespan=lifespan
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Error rendering
app.add_exception_handler(FoodGuessError, food_guess_error_handler)


# Include API routers
app.include_router(health.router)
app.include_router(food.router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": {
                "GET /health": "Service health check"
            },
            "food": {
                "GET /api/food/guess": "Usage hint",
                "POST /api/food/guess": "Guess foods and nutrients from a base64 photo"
            }
        },
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "food_guess.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
