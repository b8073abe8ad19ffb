"""Pydantic models for listings."""

from pydantic import BaseModel, Field

from stayboard.models.weather import WeatherSnapshot


class Listing(BaseModel):
    """A property listing as read from the listing store."""

    id: str = Field(min_length=1)
    title: str
    description: str = ""
    location: str = ""
    country: str = ""
    price: float = Field(ge=0, description="Nightly price in the reference currency")
    image_url: str | None = None


class ListingDetail(BaseModel):
    """A listing together with the weather for its location."""

    listing: Listing
    weather: WeatherSnapshot | None = None
    weather_fallback_used: bool = False
