"""Protocol definitions for dependency injection."""

from typing import Protocol

from babel import Locale

from stayboard.models.listing import Listing
from stayboard.models.rates import CurrencyRateTable
from stayboard.models.weather import WeatherResult


class WeatherProviderProtocol(Protocol):
    """Anything that can look up current weather for a free-text location."""

    async def fetch_weather(self, query: str, locale: Locale | str | None = None) -> WeatherResult:
        """Look up weather; must return a failure result instead of raising."""
        ...


class RateProviderProtocol(Protocol):
    """Anything that can produce a currency rate table."""

    async def fetch_rates(self) -> CurrencyRateTable:
        """Return current rates; must never raise."""
        ...


class ListingStoreProtocol(Protocol):
    """Read access to listings.

    Persistence is out of scope here; the app ships an in-memory store.
    """

    async def list_all(self) -> list[Listing]: ...

    async def get(self, listing_id: str) -> Listing | None: ...

    async def search(self, query: str) -> list[Listing]: ...


class SelectionStoreProtocol(Protocol):
    """Key-value store for the visitor's display currency."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
