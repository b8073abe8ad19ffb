"""Tests for currency formatting."""

from unittest.mock import patch

import pytest
from babel.numbers import format_currency

from stayboard.services.currency_formatter import fallback_format, format_amount


class TestFormatAmount:
    """Tests for format_amount."""

    def test_usd_in_us_locale(self):
        """Test a converted USD amount renders symbol-prefixed with two decimals."""
        assert format_amount(1000 * 0.012, "USD", "en_US") == "$12.00"

    @pytest.mark.parametrize("code", ["INR", "USD", "EUR"])
    @pytest.mark.parametrize("locale", ["en_US", "en_IN", "de_DE", "fr_FR"])
    def test_matches_locale_formatting(self, code, locale):
        """Test known codes use Babel's locale-aware formatting."""
        assert format_amount(1234.5, code, locale) == format_currency(1234.5, code, locale=locale)

    def test_defaults_to_en_us(self):
        """Test formatting without an explicit locale."""
        assert format_amount(12.0, "EUR") == format_currency(12.0, "EUR", locale="en_US")

    def test_lowercase_code_is_normalized(self):
        """Test codes are case-insensitive."""
        assert format_amount(12.0, "usd", "en_US") == "$12.00"

    def test_unknown_code_uses_empty_symbol(self):
        """Test an unrecognized code renders with an empty symbol prefix."""
        assert format_amount(12.0, "XYZ", "en_US") == " 12.00"

    def test_malformed_code_uses_fallback(self):
        """Test a malformed code never raises."""
        assert format_amount(3.14159, "not-a-code", "en_US") == " 3.14"

    def test_unknown_locale_uses_symbol_fallback(self):
        """Test an unknown locale falls back to symbol plus fixed decimals."""
        assert format_amount(12.0, "USD", "zz_ZZ") == "$ 12.00"

    def test_formatting_error_uses_symbol_fallback(self):
        """Test any Babel error degrades to the symbol table."""
        with patch(
            "stayboard.services.currency_formatter.format_currency",
            side_effect=ValueError("unsupported"),
        ):
            assert format_amount(1000 * 0.011, "EUR", "en_US") == "€ 11.00"


class TestFallbackFormat:
    """Tests for the symbol fallback."""

    @pytest.mark.parametrize(
        ("amount", "code", "expected"),
        [
            (12.0, "USD", "$ 12.00"),
            (0.5, "EUR", "€ 0.50"),
            (1500, "INR", "₹ 1500.00"),
            (2.5, "GBP", " 2.50"),
        ],
    )
    def test_fallback_format(self, amount, code, expected):
        assert fallback_format(amount, code) == expected
