"""Listing API routes returning JSON."""

from babel import Locale
from fastapi import APIRouter, Depends, Query, Request

from stayboard.config import Settings, get_settings
from stayboard.core.middleware import limiter
from stayboard.dependencies import get_listing_store, get_request_locale, get_weather_client
from stayboard.exceptions import ListingNotFoundException
from stayboard.models.base_models import ErrorResponse
from stayboard.models.listing import Listing, ListingDetail
from stayboard.protocols import ListingStoreProtocol, WeatherProviderProtocol
from stayboard.services.weather_service import resolve_weather

router = APIRouter()


@router.get("", response_model=list[Listing], summary="List or search listings")
@limiter.limit("60/minute")
async def list_listings(
    request: Request,
    q: str | None = Query(default=None, description="Optional title pattern (case-insensitive regex)"),
    store: ListingStoreProtocol = Depends(get_listing_store),
) -> list[Listing]:
    """All listings, or those whose title matches ``q``."""
    if q:
        return await store.search(q)
    return await store.list_all()


@router.get(
    "/{listing_id}",
    response_model=ListingDetail,
    summary="Get a listing with weather",
    responses={404: {"model": ErrorResponse, "description": "Listing not found"}},
)
@limiter.limit("60/minute")
async def get_listing(
    request: Request,
    listing_id: str,
    store: ListingStoreProtocol = Depends(get_listing_store),
    weather_client: WeatherProviderProtocol = Depends(get_weather_client),
    locale: Locale = Depends(get_request_locale),
    settings: Settings = Depends(get_settings),
) -> ListingDetail:
    """The listing plus weather for its location (null when unavailable)."""
    listing = await store.get(listing_id)
    if listing is None:
        raise ListingNotFoundException(listing_id)

    resolution = await resolve_weather(weather_client, listing.location, settings.weather_fallback_city, locale)
    return ListingDetail(
        listing=listing,
        weather=resolution.weather,
        weather_fallback_used=resolution.fallback_used,
    )
