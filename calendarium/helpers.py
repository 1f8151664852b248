"""Request-level helpers shared by the API and the HTML views."""

from flask import current_app, request

from .liturgical import InvalidInput


def configured_year(value):
    """Parse a year from a URL segment and check it against the configured bounds."""
    min_year = current_app.config["CALENDAR_MIN_YEAR"]
    max_year = current_app.config["CALENDAR_MAX_YEAR"]
    try:
        year = int(value)
    except (TypeError, ValueError):
        year = None
    if year is None or not min_year <= year <= max_year:
        raise InvalidInput(f"Invalid year. Please provide a year between {min_year} and {max_year}.")
    return year


def requested_region():
    """Region from the ``region`` query argument, or the configured default."""
    return request.args.get("region") or current_app.config["CALENDAR_DEFAULT_REGION"]
