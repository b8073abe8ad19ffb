"""Exchange rate service with a static fallback table.

``fetch_rates`` always returns a complete table. Provider failures degrade
to the fallback rates, either for the whole table or per currency.
"""

from collections.abc import Iterable, Mapping

import httpx
from pydantic import ValidationError

from stayboard.config import EXCHANGE_RATES_URL
from stayboard.logging_config import get_logger, log_with_context
from stayboard.middleware.logging_middleware import redact_sensitive_data
from stayboard.models.rates import CurrencyRateTable, RatesPayload

logger = get_logger(__name__)

DEFAULT_FALLBACK_RATES: dict[str, float] = {"INR": 1.0, "USD": 0.012, "EUR": 0.011}


class RateClient:
    """Fetches rates for the offered currencies relative to the reference currency."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_currency: str = "INR",
        currencies: Iterable[str] = ("INR", "USD", "EUR"),
        fallback_rates: Mapping[str, float] | None = None,
        url: str = EXCHANGE_RATES_URL,
    ):
        self._client = client
        self._base = base_currency
        self._url = url
        self._fallback = dict(fallback_rates if fallback_rates is not None else DEFAULT_FALLBACK_RATES)
        self._fallback[self._base] = 1.0
        self._currencies = list(dict.fromkeys([self._base, *currencies]))

        missing = [code for code in self._currencies if code not in self._fallback]
        if missing:
            raise ValueError(f"No fallback rate for offered currencies: {', '.join(missing)}")

    def fallback_table(self) -> CurrencyRateTable:
        """The static table used when the provider cannot be reached."""
        return CurrencyRateTable(
            base=self._base,
            rates={code: self._fallback[code] for code in self._currencies},
            is_fallback=True,
        )

    async def fetch_rates(self) -> CurrencyRateTable:
        """Get live rates, degrading to the fallback table on any failure."""
        try:
            response = await self._client.get(self._url, params={"base": self._base})
            response.raise_for_status()
            payload = RatesPayload.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            return self._degrade(f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            return self._degrade(f"{type(e).__name__}: {e}")
        except (ValidationError, ValueError) as e:
            return self._degrade(f"Malformed rates response: {e}")

        rates: dict[str, float] = {self._base: 1.0}
        defaulted: list[str] = []
        for code in self._currencies:
            if code == self._base:
                continue
            live = payload.rate_for(code)
            if live is None:
                defaulted.append(code)
                rates[code] = self._fallback[code]
            else:
                rates[code] = live

        if defaulted:
            log_with_context(
                logger,
                "warning",
                "Rate provider omitted currencies, using fallback values",
                currencies=defaulted,
                event_type="rates_partial_fallback",
            )

        return CurrencyRateTable(base=self._base, rates=rates)

    def _degrade(self, detail: str) -> CurrencyRateTable:
        log_with_context(
            logger,
            "warning",
            "Rate fetch failed, using fallback rates",
            base=self._base,
            detail=redact_sensitive_data(detail),
            event_type="rates_fallback",
        )
        return self.fallback_table()
