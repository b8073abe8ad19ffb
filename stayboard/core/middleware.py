"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from stayboard.config import Settings
from stayboard.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# Shared by the API routers and app.state so decorated routes and the
# exception handler agree on one limiter.
limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    cors_origins = settings.get_cors_origins()
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        event_type="security_config",
        origins=cors_origins,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Trusted hosts - prevent host header injection
    trusted_hosts = settings.get_trusted_hosts()
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        event_type="security_config",
        hosts=trusted_hosts,
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )

    app.state.limiter = limiter

    @app.middleware("http")
    async def count_requests(request, call_next):
        """Count total requests for the readiness endpoint."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        response = await call_next(request)
        return response

    return limiter
