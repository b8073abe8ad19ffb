"""Custom exceptions for Stayboard with proper HTTP status codes.

Provider failures (weather, exchange rates) are never raised; they are turned
into typed results or fallback values inside the services. The exceptions
below only cover errors that must reach the HTTP boundary.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    STAYBOARD_ERROR = "STAYBOARD_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Listing errors
    LISTING_NOT_FOUND = "LISTING_NOT_FOUND"

    # Currency errors
    CURRENCY_UNSUPPORTED = "CURRENCY_UNSUPPORTED"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"


class StayboardException(Exception):
    """Base exception for application errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.STAYBOARD_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize application exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ListingNotFoundException(StayboardException):
    """Requested listing does not exist."""

    def __init__(self, listing_id: str):
        super().__init__(
            f"Listing '{listing_id}' does not exist",
            code=ErrorCode.LISTING_NOT_FOUND,
            status_code=404,
            details={"listing_id": listing_id},
        )


class UnsupportedCurrencyException(StayboardException):
    """Currency code is not one of the offered display currencies."""

    def __init__(self, currency_code: str, offered: list[str]):
        super().__init__(
            f"Currency '{currency_code}' is not supported",
            code=ErrorCode.CURRENCY_UNSUPPORTED,
            status_code=400,
            details={"currency": currency_code, "offered": offered},
        )


class ConfigurationException(StayboardException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
