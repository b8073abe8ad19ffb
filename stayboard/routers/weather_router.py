"""Weather API routes."""

from babel import Locale
from fastapi import APIRouter, Depends, Query, Request

from stayboard.config import Settings, get_settings
from stayboard.core.middleware import limiter
from stayboard.dependencies import get_request_locale, get_weather_client
from stayboard.models.weather import WeatherResolution
from stayboard.protocols import WeatherProviderProtocol
from stayboard.services import weather_service

router = APIRouter()


@router.get(
    "",
    response_model=WeatherResolution,
    summary="Get current weather for a location",
    description="""
    Looks up current weather for a free-text location via OpenWeatherMap.

    If the location can't be resolved or the provider fails, the configured
    fallback city is used instead. `weather` is null when both lookups fail;
    this endpoint never returns a provider error.

    **Rate Limited:** 60 requests/minute
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "requested": "London",
                        "weather": {
                            "city": "London",
                            "country": "GB",
                            "temp_c": 12,
                            "feels_like_c": 11,
                            "humidity_pct": 81,
                            "wind_speed": 4.1,
                            "description": "light rain",
                            "icon_url": "https://openweathermap.org/img/wn/10d@2x.png",
                            "sunrise": "6:42:10 AM",
                            "sunset": "7:31:55 PM",
                        },
                        "fallback_used": False,
                    }
                }
            },
        },
    },
)
@limiter.limit("60/minute")
async def get_weather(
    request: Request,
    location: str = Query(default="", description="Free-text location, e.g. a city name"),
    weather_client: WeatherProviderProtocol = Depends(get_weather_client),
    locale: Locale = Depends(get_request_locale),
    settings: Settings = Depends(get_settings),
) -> WeatherResolution:
    """Get weather for ``location`` with the default-city fallback applied."""
    return await weather_service.resolve_weather(weather_client, location, settings.weather_fallback_city, locale)
