"""Tests for locale-aware period names and money formatting."""

from datetime import date
from decimal import Decimal

from household.services.locale_service import (
    _resolve_locale,
    currency_symbol,
    format_amount,
    format_period_name,
)


class TestFormatPeriodName:
    def test_english(self):
        assert format_period_name(date(2025, 3, 1), locale="en_US") == "March 2025"

    def test_spanish(self):
        assert format_period_name(date(2025, 3, 14), locale="es_CL") == "marzo 2025"


class TestCurrency:
    def test_known_symbol(self):
        assert currency_symbol("USD", locale="en_US") == "$"

    def test_unknown_currency_returns_code(self):
        assert currency_symbol("XYZ", locale="en_US") == "XYZ"

    def test_format_amount(self):
        assert format_amount(Decimal("1234.5"), "USD", locale="en_US") == "$1,234.50"


class TestResolveLocale:
    def test_valid_locale_kept(self):
        assert _resolve_locale("es_CL") == "es_CL"

    def test_unknown_locale_falls_back(self):
        assert _resolve_locale("xx_YY") == "en_US"
