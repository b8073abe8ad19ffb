"""Stayboard models"""

from stayboard.models.base_models import ConvertedPrice, DetailedHealthResponse, ErrorResponse, HealthResponse
from stayboard.models.listing import Listing, ListingDetail
from stayboard.models.rates import CurrencyRateTable, RatesPayload
from stayboard.models.weather import (
    FailureReason,
    OpenWeatherPayload,
    WeatherLookupFailure,
    WeatherResolution,
    WeatherResult,
    WeatherSnapshot,
)

__all__ = [
    "ConvertedPrice",
    "DetailedHealthResponse",
    "ErrorResponse",
    "HealthResponse",
    "Listing",
    "ListingDetail",
    "CurrencyRateTable",
    "RatesPayload",
    "FailureReason",
    "OpenWeatherPayload",
    "WeatherLookupFailure",
    "WeatherResolution",
    "WeatherResult",
    "WeatherSnapshot",
]
