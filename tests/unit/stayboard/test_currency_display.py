"""Tests for display currency selection and price conversion."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi import Response

from stayboard.models.rates import CurrencyRateTable
from stayboard.services.currency_display import (
    SELECTION_KEY,
    CookieSelectionStore,
    CurrencyDisplay,
    InMemorySelectionStore,
    PricedElement,
)
from stayboard.services.rates_service import RateClient

OFFERED = ["INR", "USD", "EUR"]


@pytest.fixture
def rate_table():
    return CurrencyRateTable(base="INR", rates={"INR": 1.0, "USD": 0.012, "EUR": 0.011})


@pytest.fixture
def rate_provider(rate_table):
    provider = MagicMock()
    provider.fetch_rates = AsyncMock(return_value=rate_table)
    return provider


def make_display(rate_provider, store=None, **kwargs) -> CurrencyDisplay:
    return CurrencyDisplay(
        rate_provider,
        store if store is not None else InMemorySelectionStore(),
        reference_currency="INR",
        offered_currencies=OFFERED,
        locale="en_US",
        **kwargs,
    )


class TestInitialize:
    """Tests for restoring the selection and the first pass."""

    @pytest.mark.asyncio
    async def test_defaults_to_reference_currency(self, rate_provider):
        """Test no persisted selection means reference currency."""
        display = make_display(rate_provider)
        element = PricedElement(1000)

        await display.initialize([element])

        assert display.selected_code == "INR"
        assert element.text == "₹1,000.00 / night"

    @pytest.mark.asyncio
    async def test_restores_persisted_selection(self, rate_provider):
        """Test a saved, offered currency is used."""
        store = InMemorySelectionStore({SELECTION_KEY: "USD"})
        display = make_display(rate_provider, store)
        element = PricedElement(1000)

        await display.initialize([element])

        assert display.selected_code == "USD"
        assert element.text == "$12.00 / night"

    @pytest.mark.asyncio
    async def test_ignores_selection_not_offered(self, rate_provider):
        """Test a saved code that is no longer offered falls back to the reference currency."""
        store = InMemorySelectionStore({SELECTION_KEY: "GBP"})
        display = make_display(rate_provider, store)

        await display.initialize([PricedElement(1000)])

        assert display.selected_code == "INR"

    @pytest.mark.asyncio
    async def test_single_rate_fetch_per_pass(self, rate_provider):
        """Test one rate fetch regardless of how many prices are on the page."""
        display = make_display(rate_provider)
        elements = [PricedElement(amount) for amount in (800, 1000, 2500)]

        await display.initialize(elements)

        rate_provider.fetch_rates.assert_awaited_once()
        assert all(element.text.endswith("/ night") for element in elements)


class TestChangeCurrency:
    """Tests for user-driven currency changes."""

    @pytest.mark.asyncio
    async def test_usd_scenario(self, rate_provider):
        """Test 1000 INR at 0.012 renders as $12.00 / night."""
        store = InMemorySelectionStore()
        display = make_display(rate_provider, store)
        element = PricedElement(1000)

        await display.change_currency("USD", [element])

        assert element.text == "$12.00 / night"
        assert store.get(SELECTION_KEY) == "USD"

    @pytest.mark.asyncio
    async def test_change_reruns_full_pass(self, rate_provider):
        """Test every element is rewritten after a change."""
        display = make_display(rate_provider)
        elements = [PricedElement(1000), PricedElement(2500)]

        await display.initialize(elements)
        await display.change_currency("EUR", elements)

        assert [element.text for element in elements] == ["€11.00 / night", "€27.50 / night"]
        assert rate_provider.fetch_rates.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_code_passes_through(self, rate_provider):
        """Test a code missing from the rate table converts 1:1."""
        display = make_display(rate_provider)
        element = PricedElement(1000)

        await display.change_currency("XYZ", [element])

        assert element.text == " 1000.00 / night"

    @pytest.mark.asyncio
    async def test_conversion_is_idempotent(self, rate_provider):
        """Test repeated passes with the same inputs give identical output."""
        display = make_display(rate_provider, InMemorySelectionStore({SELECTION_KEY: "USD"}))
        elements = [PricedElement(1000), PricedElement(1234.56)]

        await display.initialize(elements)
        first = [element.text for element in elements]
        await display.apply(elements)
        await display.apply(elements)

        assert [element.text for element in elements] == first

    @pytest.mark.asyncio
    async def test_custom_suffix(self, rate_provider):
        """Test the unit suffix is configurable."""
        display = make_display(rate_provider, unit_suffix="per stay")
        element = PricedElement(1000)

        await display.change_currency("USD", [element])

        assert element.text == "$12.00 per stay"


class TestWithUnreachableProvider:
    """Conversion still succeeds with fallback rates."""

    @pytest.mark.asyncio
    async def test_fallback_rates_still_convert(self, mock_http_client):
        """Test an unreachable rate provider doesn't break the page."""
        mock_http_client.get.side_effect = httpx.ConnectError("down")
        rate_client = RateClient(mock_http_client, currencies=OFFERED)
        display = make_display(rate_client, InMemorySelectionStore({SELECTION_KEY: "USD"}))
        element = PricedElement(1000)

        rates = await display.initialize([element])

        assert rates.is_fallback is True
        assert element.text == "$12.00 / night"


class TestCookieSelectionStore:
    """Tests for the cookie-backed selection store."""

    def test_reads_request_cookies(self):
        store = CookieSelectionStore({SELECTION_KEY: "EUR"})

        assert store.get(SELECTION_KEY) == "EUR"
        assert store.get("missing") is None

    def test_writes_long_lived_cookie(self):
        """Test writes are visible immediately and persisted on the response."""
        store = CookieSelectionStore({})
        store.set(SELECTION_KEY, "USD")
        response = Response()

        store.apply_to(response)

        assert store.get(SELECTION_KEY) == "USD"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{SELECTION_KEY}=USD")
        assert "Max-Age=315360000" in cookie
