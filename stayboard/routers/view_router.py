"""Page/view routes for serving listing pages."""

from urllib.parse import urlsplit

from babel import Locale
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from stayboard.config import Settings, get_settings
from stayboard.dependencies import get_listing_store, get_rate_client, get_request_locale, get_weather_client
from stayboard.exceptions import UnsupportedCurrencyException
from stayboard.protocols import ListingStoreProtocol, RateProviderProtocol, WeatherProviderProtocol
from stayboard.services.currency_display import CookieSelectionStore
from stayboard.views.template_renderer import TemplateRenderer

router = APIRouter()


def back_url(request: Request, default: str = "/listings") -> str:
    """Same-site path from the Referer header, or ``default``."""
    referer = request.headers.get("referer")
    if not referer:
        return default
    parts = urlsplit(referer)
    if parts.netloc and parts.netloc != request.url.netloc:
        return default
    path = parts.path or default
    if not path.startswith("/") or path.startswith("//"):
        return default
    return f"{path}?{parts.query}" if parts.query else path


@router.get("/")
async def root():
    """Send visitors to the listing index."""
    return RedirectResponse("/listings", status_code=307)


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """No icon is shipped; answer without a body instead of a 404."""
    return Response(status_code=204)


@router.get("/listings", response_class=HTMLResponse)
async def index(
    request: Request,
    store: ListingStoreProtocol = Depends(get_listing_store),
    rate_client: RateProviderProtocol = Depends(get_rate_client),
    locale: Locale = Depends(get_request_locale),
    settings: Settings = Depends(get_settings),
):
    """Render all listings."""
    return await TemplateRenderer.render_index(request, store, rate_client, locale, settings)


@router.get("/listings/search", response_class=HTMLResponse)
async def search(
    request: Request,
    q: str = Query(default="", description="Title pattern"),
    store: ListingStoreProtocol = Depends(get_listing_store),
    rate_client: RateProviderProtocol = Depends(get_rate_client),
    locale: Locale = Depends(get_request_locale),
    settings: Settings = Depends(get_settings),
):
    """Render listings whose title matches ``q``."""
    return await TemplateRenderer.render_search(request, q, store, rate_client, locale, settings)


@router.get("/listings/currency/{code}")
async def switch_currency(
    request: Request,
    code: str,
    settings: Settings = Depends(get_settings),
):
    """Persist the display currency and send the visitor back.

    The page they return to re-runs the conversion pass with the new code.
    """
    code = code.strip().upper()
    if code not in settings.offered_currencies:
        raise UnsupportedCurrencyException(code, settings.offered_currencies)

    response = RedirectResponse(back_url(request), status_code=303)
    store = CookieSelectionStore(request.cookies)
    store.set(settings.currency_cookie_name, code)
    store.apply_to(response)
    return response


@router.get("/listings/{listing_id}", response_class=HTMLResponse)
async def show_listing(
    request: Request,
    listing_id: str,
    store: ListingStoreProtocol = Depends(get_listing_store),
    weather_client: WeatherProviderProtocol = Depends(get_weather_client),
    rate_client: RateProviderProtocol = Depends(get_rate_client),
    locale: Locale = Depends(get_request_locale),
    settings: Settings = Depends(get_settings),
):
    """Render one listing with weather and converted price."""
    return await TemplateRenderer.render_listing_detail(
        request, listing_id, store, weather_client, rate_client, locale, settings
    )
