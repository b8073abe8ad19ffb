from pathlib import Path

from babel import Locale, UnknownLocaleError
from babel.dates import get_timezone
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stayboard.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # stayboard repo root

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
EXCHANGE_RATES_URL = "https://api.exchangerate.host/latest"


class Settings(BaseSettings):
    """Application settings with validation.

    The weather API key is required and will raise a validation error if missing.
    Everything else has a working default so the app can start from a bare .env.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator / @model_validator decorators
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Weather API - required for the weather panel
    weather_api_key: str = Field(min_length=1, description="OpenWeatherMap API key")
    weather_api_url: str = Field(default=OPENWEATHER_URL, pattern=r"^https?://", description="Current weather endpoint")
    weather_units: str = Field(default="metric", description="OpenWeatherMap unit system")
    weather_fallback_city: str = Field(default="New York", description="City used when a listing location fails")

    # Exchange rates
    rates_api_url: str = Field(default=EXCHANGE_RATES_URL, pattern=r"^https?://", description="Latest rates endpoint")
    reference_currency: str = Field(default="INR", min_length=3, max_length=3, description="Currency prices are stored in")
    offered_currencies: list[str] = Field(
        default=["INR", "USD", "EUR"], min_length=1, description="Currencies offered by the selector"
    )
    fallback_rates: dict[str, float] = Field(
        default={"INR": 1.0, "USD": 0.012, "EUR": 0.011},
        description="Approximate rates used when the rate provider is unavailable",
    )

    # Display
    default_locale: str = Field(default="en_US", description="Locale used when the request does not negotiate one")
    display_timezone: str = Field(default="UTC", description="Timezone for sunrise/sunset times")
    price_unit_suffix: str = Field(default="/ night", description="Suffix appended to every displayed price")
    currency_cookie_name: str = Field(default="selectedCurrency", min_length=1, description="Selection cookie key")

    # Listing store seed data
    listings_file: Path = Field(default=BASE_DIR / "stayboard" / "data" / "listings.json")

    # Logging and server process
    log_level: str = Field(default="INFO", description="Root and console log level")
    log_dir: Path = Field(default=BASE_DIR / "logs", description="Directory for the JSON log file")
    reload: bool = Field(default=False, description="Auto-reload when run through the stayboard script")

    # Security
    cors_origins: str = Field(default="http://localhost:8000,http://127.0.0.1:8000")
    trusted_hosts: str = Field(default="*")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("weather_fallback_city", mode="after")
    @classmethod
    def validate_weather_fallback_city(cls, v: str) -> str:
        """The fallback query is sent to the provider, so it must not be blank."""
        v = v.strip()
        if not v:
            raise ValueError("weather_fallback_city must not be empty")
        return v

    @field_validator("reference_currency", mode="after")
    @classmethod
    def normalize_reference_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("offered_currencies", mode="after")
    @classmethod
    def normalize_offered_currencies(cls, v: list[str]) -> list[str]:
        """Upper-case codes and drop repeats, keeping the first occurrence."""
        codes = [code.strip().upper() for code in v]
        unique = list(dict.fromkeys(codes))
        if len(unique) != len(codes):
            log_with_context(
                logger,
                "warning",
                "Duplicate offered currencies ignored",
                configured=codes,
                offered=unique,
                event_type="config_duplicate_currency",
            )
        return unique

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard level name, got {v!r}")
        return v

    @field_validator("fallback_rates", mode="after")
    @classmethod
    def normalize_fallback_rates(cls, v: dict[str, float]) -> dict[str, float]:
        """Upper-case codes and reject rates that would break conversion."""
        normalized = {code.strip().upper(): rate for code, rate in v.items()}
        for code, rate in normalized.items():
            if rate <= 0:
                raise ValueError(f"fallback rate for {code} must be positive, got {rate}")
        return normalized

    @field_validator("default_locale", mode="after")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        try:
            Locale.parse(v)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"default_locale is not a known locale: {e}") from e
        return v

    @field_validator("display_timezone", mode="after")
    @classmethod
    def validate_display_timezone(cls, v: str) -> str:
        try:
            get_timezone(v)
        except LookupError as e:
            raise ValueError(f"display_timezone is not a known timezone: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_currency_coverage(self) -> "Settings":
        """Every currency the selector offers must resolve to a fallback rate."""
        if self.reference_currency not in self.offered_currencies:
            raise ValueError("offered_currencies must include the reference currency")

        missing = [code for code in self.offered_currencies if code not in self.fallback_rates]
        if missing:
            raise ValueError(f"fallback_rates is missing offered currencies: {', '.join(missing)}")

        if self.fallback_rates[self.reference_currency] != 1.0:
            raise ValueError("fallback rate for the reference currency must be 1.0")
        return self

    def get_cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_trusted_hosts(self) -> list[str]:
        """Trusted host patterns as a list."""
        return [host.strip() for host in self.trusted_hosts.split(",") if host.strip()]


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    This function creates a singleton to avoid re-reading .env file
    on every request. Use this with FastAPI's Depends() for
    dependency injection.

    Returns:
        Cached Settings instance

    Example:
        @app.get("/")
        async def route(settings: Settings = Depends(get_settings)):
            return {"host": settings.api_host}
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
