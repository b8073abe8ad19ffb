"""FastAPI dependencies for dependency injection."""

import httpx
from babel import Locale
from fastapi import Depends, Request

from stayboard.config import Settings, get_settings
from stayboard.services.listing_store import InMemoryListingStore
from stayboard.services.rates_service import RateClient
from stayboard.services.weather_service import WeatherClient
from stayboard.utils.locales import negotiate_locale


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_listing_store(request: Request) -> InMemoryListingStore:
    """
    Get the listing store from app state.

    Raises:
        RuntimeError: If the listing store is not initialized.
    """
    store: InMemoryListingStore | None = getattr(request.app.state, "listing_store", None)

    if store is None:
        raise RuntimeError("Listing store not initialized.")

    return store


async def get_weather_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherClient:
    """Build a weather client with credentials from settings."""
    return WeatherClient(
        client,
        settings.weather_api_key,
        base_url=settings.weather_api_url,
        units=settings.weather_units,
        default_locale=settings.default_locale,
        timezone=settings.display_timezone,
    )


async def get_rate_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> RateClient:
    """Build a rate client for the configured currencies."""
    return RateClient(
        client,
        base_currency=settings.reference_currency,
        currencies=settings.offered_currencies,
        fallback_rates=settings.fallback_rates,
        url=settings.rates_api_url,
    )


async def get_request_locale(request: Request, settings: Settings = Depends(get_settings)) -> Locale:
    """Negotiate the display locale from the Accept-Language header."""
    return negotiate_locale(request.headers.get("accept-language"), settings.default_locale)
