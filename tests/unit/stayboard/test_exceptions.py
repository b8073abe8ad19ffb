"""Tests for custom exception classes."""

from stayboard.exceptions import (
    ConfigurationException,
    ErrorCode,
    ListingNotFoundException,
    StayboardException,
    UnsupportedCurrencyException,
)


class TestErrorCodes:
    """Tests for ErrorCode enum."""

    def test_error_code_values(self):
        """Test that error codes have correct values."""
        assert ErrorCode.STAYBOARD_ERROR == "STAYBOARD_ERROR"
        assert ErrorCode.LISTING_NOT_FOUND == "LISTING_NOT_FOUND"
        assert ErrorCode.CURRENCY_UNSUPPORTED == "CURRENCY_UNSUPPORTED"
        assert ErrorCode.CONFIG_INVALID == "CONFIG_INVALID"


class TestStayboardException:
    """Tests for StayboardException."""

    def test_basic(self):
        exc = StayboardException(message="Test error")

        assert exc.message == "Test error"
        assert exc.code == ErrorCode.STAYBOARD_ERROR
        assert exc.status_code == 500
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_with_details(self):
        exc = StayboardException(
            message="Test error", code=ErrorCode.INTERNAL_ERROR, status_code=503, details={"key": "value"}
        )

        assert exc.code == ErrorCode.INTERNAL_ERROR
        assert exc.status_code == 503
        assert exc.details["key"] == "value"


class TestDomainExceptions:
    """Tests for listing, currency and configuration errors."""

    def test_listing_not_found(self):
        exc = ListingNotFoundException("loft")

        assert exc.status_code == 404
        assert exc.code == ErrorCode.LISTING_NOT_FOUND
        assert exc.details == {"listing_id": "loft"}
        assert "loft" in exc.message

    def test_unsupported_currency(self):
        exc = UnsupportedCurrencyException("GBP", ["INR", "USD"])

        assert exc.status_code == 400
        assert exc.code == ErrorCode.CURRENCY_UNSUPPORTED
        assert exc.details == {"currency": "GBP", "offered": ["INR", "USD"]}

    def test_configuration_defaults(self):
        exc = ConfigurationException("bad config")

        assert exc.code == ErrorCode.CONFIG_ERROR
        assert exc.status_code == 500
        assert isinstance(exc, StayboardException)
