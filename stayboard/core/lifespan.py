"""Application lifespan management."""

import os
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from stayboard import __version__
from stayboard.config import get_settings
from stayboard.logging_config import get_logger, log_with_context
from stayboard.middleware.logging_middleware import redact_sensitive_data
from stayboard.services.listing_store import InMemoryListingStore

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log requests with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log responses with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client() -> httpx.AsyncClient:
    """Create the shared outbound HTTP client.

    Provider calls pass no per-request timeout, so these transport timeouts
    bound how long a stalled provider can hold up a page.
    """
    proxy = os.getenv("HTTP_PROXY") or os.getenv("HTTPS_PROXY")

    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }

    if proxy:
        log_with_context(
            logger,
            "info",
            "Creating HTTP client with proxy",
            proxy=redact_sensitive_data(proxy),
            event_type="http_client_config",
        )

    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,  # Connection establishment timeout
            read=10.0,  # Read response timeout
            write=5.0,  # Write operation timeout
            pool=5.0,  # Pool checkout timeout
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        proxy=proxy or None,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so cleanup always runs.
    """
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting Stayboard application",
        version=__version__,
        event_type="app_startup",
    )

    # Load seed data first: a bad listings file aborts startup before any client exists
    settings = get_settings()
    app.state.listing_store = InMemoryListingStore.from_file(settings.listings_file)

    client = create_http_client()
    app.state.http_client = client
    log_with_context(
        logger,
        "info",
        "HTTP client initialized successfully",
        event_type="http_client_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Stayboard application",
            event_type="app_shutdown",
        )

        await client.aclose()
        log_with_context(
            logger,
            "info",
            "HTTP client closed",
            event_type="http_client_cleanup",
        )
