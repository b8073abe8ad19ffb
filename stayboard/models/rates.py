"""Pydantic models for exchange rates."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RatesPayload(BaseModel):
    """Exchange rate provider response.

    Individual rates are kept untyped so one bad entry doesn't reject the
    whole body; ``rate_for`` decides whether a value is usable.
    """

    rates: dict[str, Any] = Field(default_factory=dict)

    def rate_for(self, code: str) -> float | None:
        """Return a usable rate for ``code`` or None when missing or invalid."""
        value = self.rates.get(code)
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        try:
            rate = float(value)
        except OverflowError:
            return None
        if not math.isfinite(rate) or rate <= 0:
            return None
        return rate


class CurrencyRateTable(BaseModel):
    """Rates relative to the reference currency, used for price conversion."""

    model_config = ConfigDict(frozen=True)

    base: str
    rates: dict[str, float]
    is_fallback: bool = False

    @model_validator(mode="after")
    def check_base_rate(self) -> "CurrencyRateTable":
        if self.rates.get(self.base) != 1.0:
            raise ValueError(f"rate table must map base currency {self.base} to 1.0")
        return self

    def rate_for(self, code: str) -> float:
        """Rate for ``code``; unknown codes pass through at 1:1."""
        return self.rates.get(code, 1.0)
