"""Centralized locale service for month labels and money formatting.

Uses the babel library. The ``locale`` setting (LOCALE env var, default:
en_US) selects month names and number formatting.

Example:
    >>> from household.services.locale_service import format_period_name
    >>> format_period_name(date(2025, 3, 1))
    'March 2025'
"""

import logging
from datetime import date
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency as babel_format_currency
from babel.numbers import get_currency_symbol as babel_get_currency_symbol
from babel.numbers import is_currency

from household.services.config import settings

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

# Standalone month name followed by the year, e.g. "March 2025" / "marzo 2025"
PERIOD_NAME_PATTERN = "LLLL y"


def _resolve_locale(locale_str: str) -> str:
    """Validate a locale identifier with babel.

    Returns:
        Canonical locale string (e.g., 'en_US'), or DEFAULT_LOCALE when invalid
    """
    try:
        return str(Locale.parse(locale_str))
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Invalid LOCALE %r: %s. Falling back to %r", locale_str, e, DEFAULT_LOCALE)
        return DEFAULT_LOCALE


# Resolved once at import from the LOCALE setting
LOCALE = _resolve_locale(settings.locale)


def format_period_name(period_date: date, locale: str | None = None) -> str:
    """Human-readable month label for a period.

    Args:
        period_date: Any date within the period
        locale: Babel locale (default: LOCALE)

    Returns:
        Localized "<month> <year>" label (e.g., 'March 2025')
    """
    return babel_format_date(period_date, format=PERIOD_NAME_PATTERN, locale=locale or LOCALE)


def currency_symbol(currency: str, locale: str | None = None) -> str:
    """Currency symbol for display, or the code itself when babel does not know it."""
    if not currency or not is_currency(currency):
        return currency
    return babel_get_currency_symbol(currency, locale=locale or LOCALE)


def format_amount(amount: Decimal | int | float, currency: str, locale: str | None = None) -> str:
    """Format monetary amount according to locale.

    Args:
        amount: Amount to format
        currency: ISO 4217 currency code
        locale: Babel locale (default: LOCALE)

    Returns:
        Formatted currency string (e.g., 'CLP 1,000,000')
    """
    return babel_format_currency(Decimal(amount), currency, locale=locale or LOCALE)


__all__ = [
    "LOCALE",
    "DEFAULT_LOCALE",
    "format_period_name",
    "currency_symbol",
    "format_amount",
]
