"""Locale-aware currency formatting with a symbol fallback."""

from babel import Locale
from babel.numbers import format_currency, validate_currency

from stayboard.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

DEFAULT_LOCALE = "en_US"

CURRENCY_SYMBOLS: dict[str, str] = {"INR": "₹", "USD": "$", "EUR": "€"}


def fallback_format(amount: float, currency_code: str) -> str:
    """Symbol plus the amount fixed to two decimals, e.g. ``"$ 12.00"``.

    Codes without a known symbol get an empty prefix.
    """
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper(), "")
    return f"{symbol} {amount:.2f}"


def format_amount(amount: float, currency_code: str, locale: Locale | str | None = None) -> str:
    """Format ``amount`` in ``currency_code`` for display. Never raises.

    Args:
        amount: Amount already converted into ``currency_code``
        currency_code: ISO 4217 code
        locale: Display locale (defaults to en_US)

    Returns:
        Locale-formatted currency string, or the symbol fallback when Babel
        can't format the code or locale
    """
    code = (currency_code or "").strip().upper()
    try:
        validate_currency(code)
        return format_currency(amount, code, locale=locale or DEFAULT_LOCALE)
    except Exception as e:
        log_with_context(
            logger,
            "debug",
            "Locale currency formatting unavailable, using symbol fallback",
            currency=code,
            locale=str(locale),
            error=str(e),
            error_type=type(e).__name__,
            event_type="currency_format_fallback",
        )
        return fallback_format(amount, code)
