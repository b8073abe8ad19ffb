"""Display-currency selection and price conversion for rendered pages.

Prices are stored in the reference currency. Each conversion pass fetches
one rate table and rewrites the text of every priced element on the page.
"""

from collections.abc import Iterable, Mapping

from babel import Locale
from fastapi import Response

from stayboard.logging_config import get_logger, log_with_context
from stayboard.models.rates import CurrencyRateTable
from stayboard.protocols import RateProviderProtocol, SelectionStoreProtocol
from stayboard.services.currency_formatter import format_amount

logger = get_logger(__name__)

SELECTION_KEY = "selectedCurrency"
SELECTION_MAX_AGE_SECONDS = 10 * 365 * 24 * 60 * 60  # effectively never expires


class PricedElement:
    """A displayed price: its reference-currency amount and rendered text."""

    def __init__(self, base_amount: float, text: str = ""):
        self.base_amount = base_amount
        self.text = text

    def __repr__(self) -> str:
        return f"PricedElement(base_amount={self.base_amount!r}, text={self.text!r})"


class InMemorySelectionStore:
    """Dictionary-backed selection store."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class CookieSelectionStore:
    """Selection store over request cookies.

    Reads come from the incoming cookies; writes are queued and copied onto
    the outgoing response by ``apply_to``.
    """

    def __init__(self, cookies: Mapping[str, str]):
        self._cookies = dict(cookies)
        self._pending: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._cookies.get(key)

    def set(self, key: str, value: str) -> None:
        self._cookies[key] = value
        self._pending[key] = value

    def apply_to(self, response: Response) -> None:
        """Persist queued writes as long-lived cookies on ``response``."""
        for key, value in self._pending.items():
            response.set_cookie(key, value, max_age=SELECTION_MAX_AGE_SECONDS, samesite="lax")
        self._pending.clear()


class CurrencyDisplay:
    """Converts priced elements into the visitor's selected currency."""

    def __init__(
        self,
        rate_provider: RateProviderProtocol,
        store: SelectionStoreProtocol,
        *,
        reference_currency: str,
        offered_currencies: Iterable[str],
        storage_key: str = SELECTION_KEY,
        unit_suffix: str = "/ night",
        locale: Locale | str | None = None,
    ):
        self._rates = rate_provider
        self._store = store
        self._reference = reference_currency
        self._offered = list(offered_currencies)
        self._key = storage_key
        self._suffix = unit_suffix
        self._locale = locale
        self._selected = reference_currency

    @property
    def selected_code(self) -> str:
        return self._selected

    @property
    def offered_currencies(self) -> list[str]:
        return list(self._offered)

    def read_selection(self) -> str:
        """Persisted selection if it is still on offer, else the reference currency."""
        saved = self._store.get(self._key)
        if saved and saved in self._offered:
            return saved
        if saved:
            log_with_context(
                logger,
                "debug",
                "Ignoring persisted currency that is not offered",
                currency=saved,
                event_type="currency_selection_ignored",
            )
        return self._reference

    async def initialize(self, elements: Iterable[PricedElement]) -> CurrencyRateTable:
        """Restore the persisted selection and run the first conversion pass."""
        self._selected = self.read_selection()
        return await self.apply(elements)

    async def change_currency(self, code: str, elements: Iterable[PricedElement]) -> CurrencyRateTable:
        """Persist a user-chosen currency and re-run the conversion pass."""
        self._store.set(self._key, code)
        self._selected = code
        log_with_context(
            logger,
            "info",
            "Display currency changed",
            currency=code,
            event_type="currency_selection_changed",
        )
        return await self.apply(elements)

    async def apply(self, elements: Iterable[PricedElement]) -> CurrencyRateTable:
        """Fetch rates once and rewrite every element's text."""
        rates = await self._rates.fetch_rates()
        for element in elements:
            element.text = self.render_price(element.base_amount, rates)
        return rates

    def render_price(self, base_amount: float, rates: CurrencyRateTable) -> str:
        converted = base_amount * rates.rate_for(self._selected)
        return f"{format_amount(converted, self._selected, self._locale)} {self._suffix}"
