"""Calendar-month period helpers.

A period is a calendar month, represented canonically by its first day.
Periods travel through URLs as ``YYYY-MM`` strings.
"""

import logging
from datetime import date, datetime

logger = logging.getLogger(__name__)

PERIOD_PARAM_FORMAT = "%Y-%m"


def beginning_of_month(value: date) -> date:
    """Truncate a date (or datetime) to the first day of its month."""
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def current_period(today: date | None = None) -> date:
    """First day of the current month."""
    return beginning_of_month(today or date.today())


def parse_period(value: str | None, today: date | None = None) -> date:
    """Parse a ``YYYY-MM`` period string.

    Missing or malformed values fall back to the current month.

    Args:
        value: Period string (e.g., "2025-03") or None
        today: Reference date for the fallback (default: date.today())

    Returns:
        First day of the parsed month

    Example:
        >>> parse_period("2025-03")
        datetime.date(2025, 3, 1)
    """
    if not value:
        return current_period(today)
    try:
        return datetime.strptime(value.strip(), PERIOD_PARAM_FORMAT).date()
    except ValueError:
        logger.warning("Invalid period parameter %r, using current month", value)
        return current_period(today)


def period_param(period_date: date) -> str:
    """Format a period as ``YYYY-MM``."""
    return period_date.strftime(PERIOD_PARAM_FORMAT)


def previous_period(period_date: date) -> date:
    """First day of the month before ``period_date``."""
    period_date = beginning_of_month(period_date)
    if period_date.month == 1:
        return period_date.replace(year=period_date.year - 1, month=12)
    return period_date.replace(month=period_date.month - 1)


def next_period(period_date: date, today: date | None = None) -> date | None:
    """First day of the month after ``period_date``.

    Returns None when that month is later than the current month, so
    navigation never moves into the future.
    """
    period_date = beginning_of_month(period_date)
    if period_date.month == 12:
        following = period_date.replace(year=period_date.year + 1, month=1)
    else:
        following = period_date.replace(month=period_date.month + 1)

    if following > current_period(today):
        return None
    return following


__all__ = [
    "PERIOD_PARAM_FORMAT",
    "beginning_of_month",
    "current_period",
    "parse_period",
    "period_param",
    "previous_period",
    "next_period",
]
