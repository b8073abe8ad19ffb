"""Currency API routes."""

from babel import Locale
from fastapi import APIRouter, Depends, Query, Request

from stayboard.config import Settings, get_settings
from stayboard.core.middleware import limiter
from stayboard.dependencies import get_rate_client, get_request_locale
from stayboard.models.base_models import ConvertedPrice
from stayboard.models.rates import CurrencyRateTable
from stayboard.protocols import RateProviderProtocol
from stayboard.services.currency_display import CurrencyDisplay, InMemorySelectionStore, PricedElement

router = APIRouter()


@router.get(
    "/rates",
    response_model=CurrencyRateTable,
    summary="Get exchange rates",
    description="""
    Rates from the reference currency to every offered currency.

    Falls back to static approximate rates when the provider is unavailable
    (`is_fallback` is true); never returns a provider error.

    **Rate Limited:** 60 requests/minute
    """,
)
@limiter.limit("60/minute")
async def get_rates(
    request: Request,
    rate_client: RateProviderProtocol = Depends(get_rate_client),
) -> CurrencyRateTable:
    """Get the current rate table."""
    return await rate_client.fetch_rates()


@router.get(
    "/convert",
    response_model=ConvertedPrice,
    summary="Convert a reference-currency price",
    description="""
    Converts an amount stored in the reference currency into `code` and
    formats it for the request's locale. Unknown codes convert 1:1.

    **Rate Limited:** 60 requests/minute
    """,
)
@limiter.limit("60/minute")
async def convert(
    request: Request,
    amount: float = Query(ge=0, description="Amount in the reference currency"),
    code: str = Query(min_length=1, description="Target currency code"),
    rate_client: RateProviderProtocol = Depends(get_rate_client),
    locale: Locale = Depends(get_request_locale),
    settings: Settings = Depends(get_settings),
) -> ConvertedPrice:
    """Convert and format one price."""
    code = code.strip().upper()
    display = CurrencyDisplay(
        rate_client,
        InMemorySelectionStore(),
        reference_currency=settings.reference_currency,
        offered_currencies=settings.offered_currencies,
        unit_suffix=settings.price_unit_suffix,
        locale=locale,
    )
    element = PricedElement(amount)
    rates = await display.change_currency(code, [element])

    return ConvertedPrice(
        code=code,
        base_amount=amount,
        amount=round(amount * rates.rate_for(code), 2),
        formatted=element.text,
        is_fallback_rate=rates.is_fallback,
    )
