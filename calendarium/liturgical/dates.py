"""Input coercion and iteration helpers for civil dates."""

from datetime import date, datetime, timedelta

from .easter import GREGORIAN_MAX_YEAR, GREGORIAN_MIN_YEAR
from .errors import InvalidInput


def check_year(year):
    """Return ``year`` as an int, raising InvalidInput outside the Gregorian range."""
    if isinstance(year, bool):
        raise InvalidInput(f"Invalid year: {year!r}")
    try:
        value = int(year)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid year: {year!r}") from None
    if not GREGORIAN_MIN_YEAR <= value <= GREGORIAN_MAX_YEAR:
        raise InvalidInput(
            f"Year {value} is outside the supported range {GREGORIAN_MIN_YEAR}-{GREGORIAN_MAX_YEAR}."
        )
    return value


def coerce_date(value):
    """Accept a ``date``, a ``datetime`` or an ISO ``YYYY-MM-DD`` string.

    Times and time zones are discarded: only the civil date matters.
    """
    if isinstance(value, datetime):
        value = value.date()
    elif isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidInput(f"Invalid date {value!r}. Please use YYYY-MM-DD.") from None
    elif not isinstance(value, date):
        raise InvalidInput(f"Invalid date {value!r}. Please use YYYY-MM-DD.")
    check_year(value.year)
    return value


def iter_days(start, end):
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def year_days(year):
    return iter_days(date(year, 1, 1), date(year, 12, 31))
