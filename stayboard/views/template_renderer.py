"""Template rendering utilities for HTML views."""

from pathlib import Path

from babel import Locale
from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from stayboard.config import Settings
from stayboard.logging_config import get_logger, log_with_context
from stayboard.models.listing import Listing
from stayboard.protocols import ListingStoreProtocol, RateProviderProtocol, WeatherProviderProtocol
from stayboard.services.currency_display import CookieSelectionStore, CurrencyDisplay, PricedElement
from stayboard.services.weather_service import resolve_weather

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def build_currency_display(
    request: Request,
    rate_client: RateProviderProtocol,
    locale: Locale,
    settings: Settings,
) -> CurrencyDisplay:
    """Currency display backed by the visitor's selection cookie."""
    return CurrencyDisplay(
        rate_client,
        CookieSelectionStore(request.cookies),
        reference_currency=settings.reference_currency,
        offered_currencies=settings.offered_currencies,
        storage_key=settings.currency_cookie_name,
        unit_suffix=settings.price_unit_suffix,
        locale=locale,
    )


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for listing pages."""

    @staticmethod
    async def _render_listing_cards(
        request: Request,
        template: str,
        listings: list[Listing],
        rate_client: RateProviderProtocol,
        locale: Locale,
        settings: Settings,
        **context,
    ) -> HTMLResponse:
        display = build_currency_display(request, rate_client, locale, settings)
        prices = [PricedElement(listing.price) for listing in listings]
        rates = await display.initialize(prices)

        return templates.TemplateResponse(
            request,
            template,
            {
                "items": list(zip(listings, prices, strict=True)),
                "selected_currency": display.selected_code,
                "offered_currencies": display.offered_currencies,
                "rates_are_fallback": rates.is_fallback,
                **context,
            },
        )

    @staticmethod
    async def render_index(
        request: Request,
        store: ListingStoreProtocol,
        rate_client: RateProviderProtocol,
        locale: Locale,
        settings: Settings,
    ) -> HTMLResponse:
        """Render all listings with converted prices."""
        listings = await store.list_all()
        return await TemplateRenderer._render_listing_cards(
            request, "listings/index.html", listings, rate_client, locale, settings
        )

    @staticmethod
    async def render_search(
        request: Request,
        query: str,
        store: ListingStoreProtocol,
        rate_client: RateProviderProtocol,
        locale: Locale,
        settings: Settings,
    ) -> HTMLResponse:
        """Render title search results."""
        results = await store.search(query)
        return await TemplateRenderer._render_listing_cards(
            request, "listings/search.html", results, rate_client, locale, settings, q=query
        )

    @staticmethod
    async def render_listing_detail(
        request: Request,
        listing_id: str,
        store: ListingStoreProtocol,
        weather_client: WeatherProviderProtocol,
        rate_client: RateProviderProtocol,
        locale: Locale,
        settings: Settings,
    ) -> Response:
        """Render one listing with its weather panel and converted price.

        Unknown listings redirect back to the index.
        """
        listing = await store.get(listing_id)
        if listing is None:
            log_with_context(
                logger,
                "info",
                "Listing not found, redirecting to index",
                listing_id=listing_id,
                event_type="listing_not_found",
            )
            return RedirectResponse("/listings", status_code=303)

        resolution = await resolve_weather(weather_client, listing.location, settings.weather_fallback_city, locale)

        display = build_currency_display(request, rate_client, locale, settings)
        price = PricedElement(listing.price)
        rates = await display.initialize([price])

        return templates.TemplateResponse(
            request,
            "listings/show.html",
            {
                "listing": listing,
                "price": price,
                "weather": resolution.weather,
                "weather_fallback_used": resolution.fallback_used,
                "selected_currency": display.selected_code,
                "offered_currencies": display.offered_currencies,
                "rates_are_fallback": rates.is_fallback,
            },
        )
