"""Pydantic models for request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with dependency status."""

    status: str = Field(..., description="Overall health status: healthy or unhealthy")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server timestamp")
    checks: dict[str, str] = Field(..., description="Individual health check results")


class ConvertedPrice(BaseModel):
    """A reference-currency amount converted for display."""

    code: str
    base_amount: float
    amount: float
    formatted: str
    is_fallback_rate: bool


class ErrorDetail(BaseModel):
    """Body of a structured error."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error envelope returned by the application exception handler."""

    error: ErrorDetail
