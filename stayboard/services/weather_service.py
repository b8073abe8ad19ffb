"""Weather service for OpenWeatherMap API integration.

Lookups never raise. A failed lookup comes back as a ``WeatherLookupFailure``
and ``resolve_weather`` decides whether to retry with the fallback city.
"""

from datetime import UTC, datetime

import httpx
from babel import Locale
from babel.dates import format_time, get_timezone
from pydantic import ValidationError

from stayboard.config import OPENWEATHER_URL
from stayboard.logging_config import get_logger, log_with_context
from stayboard.middleware.logging_middleware import redact_sensitive_data
from stayboard.models.weather import (
    FailureReason,
    OpenWeatherPayload,
    WeatherLookupFailure,
    WeatherResolution,
    WeatherResult,
    WeatherSnapshot,
    icon_url_for,
    round_half_away,
)
from stayboard.protocols import WeatherProviderProtocol

logger = get_logger(__name__)


def format_sun_time(epoch_seconds: int, locale: Locale | str, timezone: str) -> str:
    """Format a UTC epoch timestamp as a localized time of day."""
    moment = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return format_time(moment, format="medium", tzinfo=get_timezone(timezone), locale=locale)


class WeatherClient:
    """Current-weather lookups by free-text location.

    Credentials and endpoint are injected so tests can point the client at
    a fake transport with fake keys.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        *,
        base_url: str = OPENWEATHER_URL,
        units: str = "metric",
        default_locale: Locale | str = "en_US",
        timezone: str = "UTC",
    ):
        self._client = client
        self._api_key = api_key
        self._base_url = base_url
        self._units = units
        self._default_locale = default_locale
        self._timezone = timezone

    async def fetch_weather(self, query: str, locale: Locale | str | None = None) -> WeatherResult:
        """Look up current weather for ``query``.

        Args:
            query: Free-text location, e.g. a listing's location field
            locale: Locale for sunrise/sunset strings (defaults to the client's)

        Returns:
            WeatherSnapshot on success, WeatherLookupFailure otherwise
        """
        location = (query or "").strip()
        if not location:
            log_with_context(
                logger,
                "debug",
                "Skipping weather lookup for blank location",
                event_type="weather_lookup_skipped",
            )
            return WeatherLookupFailure(reason=FailureReason.BLANK_QUERY, query=query or "")

        params = {"q": location, "appid": self._api_key, "units": self._units}

        try:
            response = await self._client.get(self._base_url, params=params)
            response.raise_for_status()
            payload = OpenWeatherPayload.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            return self._failure(
                location,
                FailureReason.PROVIDER_ERROR,
                f"HTTP {e.response.status_code}: {e.response.text[:200]}",
            )
        except httpx.HTTPError as e:
            return self._failure(location, FailureReason.PROVIDER_UNREACHABLE, f"{type(e).__name__}: {e}")
        except (ValidationError, ValueError) as e:
            return self._failure(location, FailureReason.MALFORMED_RESPONSE, str(e))

        try:
            return self._to_snapshot(payload, locale or self._default_locale)
        except (ArithmeticError, ValueError, OSError) as e:
            # Out-of-range sun timestamps or temperatures
            return self._failure(location, FailureReason.MALFORMED_RESPONSE, str(e))

    def _to_snapshot(self, payload: OpenWeatherPayload, locale: Locale | str) -> WeatherSnapshot:
        condition = payload.weather[0]
        return WeatherSnapshot(
            city=payload.name,
            country=payload.sys.country,
            temp_c=round_half_away(payload.main.temp),
            feels_like_c=round_half_away(payload.main.feels_like),
            humidity_pct=payload.main.humidity,
            wind_speed=payload.wind.speed,
            description=condition.description,
            icon_url=icon_url_for(condition.icon),
            sunrise=format_sun_time(payload.sys.sunrise, locale, self._timezone),
            sunset=format_sun_time(payload.sys.sunset, locale, self._timezone),
        )

    def _failure(self, location: str, reason: FailureReason, detail: str) -> WeatherLookupFailure:
        detail = redact_sensitive_data(detail)
        log_with_context(
            logger,
            "warning",
            "Weather lookup failed",
            location=location,
            reason=reason.value,
            detail=detail,
            event_type="weather_lookup_failed",
        )
        return WeatherLookupFailure(reason=reason, query=location, detail=detail)


async def resolve_weather(
    weather_client: WeatherProviderProtocol,
    location: str,
    fallback_city: str,
    locale: Locale | str | None = None,
) -> WeatherResolution:
    """Weather for ``location``, falling back to ``fallback_city`` once.

    A resolution with ``weather=None`` means both lookups failed; callers
    render without a weather panel.
    """
    result = await weather_client.fetch_weather(location, locale)
    if isinstance(result, WeatherSnapshot):
        return WeatherResolution(requested=location, weather=result)

    log_with_context(
        logger,
        "info",
        "Falling back to default weather location",
        location=location,
        fallback_city=fallback_city,
        reason=result.reason.value,
        event_type="weather_fallback",
    )
    fallback = await weather_client.fetch_weather(fallback_city, locale)
    if isinstance(fallback, WeatherSnapshot):
        return WeatherResolution(requested=location, weather=fallback, fallback_used=True)

    log_with_context(
        logger,
        "warning",
        "Weather unavailable for listing and fallback location",
        location=location,
        fallback_city=fallback_city,
        reason=fallback.reason.value,
        event_type="weather_unavailable",
    )
    return WeatherResolution(requested=location, weather=None, fallback_used=True)
