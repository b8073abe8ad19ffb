"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from stayboard import __version__
from stayboard.config import get_settings
from stayboard.core.lifespan import lifespan
from stayboard.core.middleware import setup_middleware
from stayboard.middleware.error_handlers import register_error_handlers
from stayboard.routers import (
    currency_router,
    health_router,
    listing_router,
    view_router,
    weather_router,
)

STATIC_DIR = Path(__file__).parent.parent / "static"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Stayboard API",
        description="""
        **Stayboard** - Property listings with live weather and currency conversion

        ## Enrichment
        - Listing pages show current weather for the listing's location, falling
          back to a default city when the location can't be resolved.
        - Prices are stored in the reference currency and converted into the
          visitor's selected currency using live rates, with static fallback rates.

        ## Health & Monitoring
        - `/health` - Basic health check (Docker/K8s)
        - `/health/live` - Liveness probe (is app running?)
        - `/health/ready` - Readiness probe (can serve traffic?)

        ## Rate Limits
        - API endpoints: 60 requests/minute per IP
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # View routes (HTML pages) - no prefix
    app.include_router(view_router.router, tags=["views"])

    app.include_router(health_router.router, tags=["health"])

    # API routes
    app.include_router(listing_router.router, prefix="/api/listings", tags=["listings"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])
    app.include_router(currency_router.router, prefix="/api/currency", tags=["currency"])

    return app
