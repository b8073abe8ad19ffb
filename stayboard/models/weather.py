"""Pydantic models for weather data."""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ICON_BASE_URL = "https://openweathermap.org/img/wn"


def round_half_away(value: float) -> int:
    """Round to the nearest whole number, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def icon_url_for(icon_code: str) -> str:
    """Build the display URL for an OpenWeatherMap icon code."""
    return f"{ICON_BASE_URL}/{icon_code}@2x.png"


class WeatherInfo(BaseModel):
    """Weather condition info from OpenWeatherMap."""

    description: str
    icon: str = Field(min_length=1)


class MainInfo(BaseModel):
    """Main weather metrics from OpenWeatherMap."""

    temp: float = Field(allow_inf_nan=False)
    feels_like: float = Field(allow_inf_nan=False)
    humidity: int


class WindInfo(BaseModel):
    """Wind information from OpenWeatherMap."""

    speed: float = Field(allow_inf_nan=False)


class SysInfo(BaseModel):
    """Location and sun times from OpenWeatherMap."""

    country: str
    sunrise: int
    sunset: int


class OpenWeatherPayload(BaseModel):
    """The subset of the OpenWeatherMap current weather response we consume.

    Every field is required; a response missing any of them is malformed.
    """

    name: str
    sys: SysInfo
    main: MainInfo
    wind: WindInfo
    weather: list[WeatherInfo] = Field(min_length=1)


class WeatherSnapshot(BaseModel):
    """Normalized weather for one location, ready for display."""

    model_config = ConfigDict(frozen=True)

    city: str
    country: str
    temp_c: int
    feels_like_c: int
    humidity_pct: int
    wind_speed: float
    description: str
    icon_url: str
    sunrise: str
    sunset: str


class FailureReason(str, Enum):
    """Why a weather lookup produced no snapshot."""

    BLANK_QUERY = "blank_query"
    PROVIDER_UNREACHABLE = "provider_unreachable"
    PROVIDER_ERROR = "provider_error"
    MALFORMED_RESPONSE = "malformed_response"


class WeatherLookupFailure(BaseModel):
    """Typed absence of a weather snapshot."""

    model_config = ConfigDict(frozen=True)

    reason: FailureReason
    query: str
    detail: str = ""


WeatherResult = WeatherSnapshot | WeatherLookupFailure


class WeatherResolution(BaseModel):
    """Outcome of a lookup with the default-city fallback applied."""

    model_config = ConfigDict(frozen=True)

    requested: str
    weather: WeatherSnapshot | None
    fallback_used: bool = False
