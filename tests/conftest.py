"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

# Settings() requires an API key; set one before the app module is imported.
os.environ.setdefault("WEATHER_API_KEY", "test-weather-key")

from stayboard.config import Settings  # noqa: E402
from stayboard.models.listing import Listing  # noqa: E402
from stayboard.models.weather import WeatherSnapshot  # noqa: E402

SUNRISE_EPOCH = 1700000000  # 2023-11-14 22:13:20 UTC
SUNSET_EPOCH = 1700036000  # 2023-11-15 08:13:20 UTC


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def transport_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for a real AsyncClient answering from a handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        api_host="0.0.0.0",
        api_port=8000,
        weather_api_key="test-weather-key",
        weather_fallback_city="New York",
        reference_currency="INR",
        offered_currencies=["INR", "USD", "EUR"],
        fallback_rates={"INR": 1.0, "USD": 0.012, "EUR": 0.011},
        default_locale="en_US",
        display_timezone="UTC",
    )


@pytest.fixture
def mock_weather_response():
    """Mock OpenWeatherMap API response."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "base": "stations",
        "main": {
            "temp": 12.5,
            "feels_like": 11.4,
            "temp_min": 11.0,
            "temp_max": 14.0,
            "pressure": 1012,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 240},
        "clouds": {"all": 75},
        "dt": SUNRISE_EPOCH + 7200,
        "sys": {
            "type": 2,
            "id": 2075535,
            "country": "GB",
            "sunrise": SUNRISE_EPOCH,
            "sunset": SUNSET_EPOCH,
        },
        "timezone": 0,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def mock_rates_response():
    """Mock exchange rate provider response with INR as base."""
    return {
        "success": True,
        "base": "INR",
        "date": "2026-10-19",
        "rates": {"INR": 1, "USD": 0.0119, "EUR": 0.0103, "GBP": 0.0091},
    }


@pytest.fixture
def sample_listings():
    """A few listings covering resolvable, unresolvable and blank locations."""
    return [
        Listing(
            id="loft",
            title="Modern Loft in Downtown",
            description="Stylish loft.",
            location="London",
            country="United Kingdom",
            price=1000,
        ),
        Listing(
            id="cottage",
            title="Cozy Beachfront Cottage",
            description="Relaxing getaway.",
            location="Atlantis Under The Sea",
            country="Nowhere",
            price=2500,
        ),
        Listing(
            id="treehouse",
            title="Secluded Treehouse",
            description="Among the treetops.",
            location="  ",
            country="Costa Rica",
            price=800,
        ),
    ]


@pytest.fixture
def london_snapshot():
    """A fully populated snapshot for London."""
    return WeatherSnapshot(
        city="London",
        country="GB",
        temp_c=13,
        feels_like_c=11,
        humidity_pct=81,
        wind_speed=4.1,
        description="light rain",
        icon_url="https://openweathermap.org/img/wn/10d@2x.png",
        sunrise="10:13:20 PM",
        sunset="8:13:20 AM",
    )
