from datetime import date

from flask import Blueprint, current_app, jsonify

from .. import current_resolver
from ..helpers import configured_year, requested_region
from ..liturgical import InvalidInput, coerce_date

api_bp = Blueprint("api", __name__)
docs_bp = Blueprint("docs", __name__)


@api_bp.after_request
def allow_any_origin(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def _checked_date(value):
    d = coerce_date(value)
    configured_year(d.year)
    return d


@api_bp.route("/today")
def today():
    info = current_resolver().day_info(date.today(), requested_region())
    return jsonify({"date": info.date.isoformat(), "liturgicalDay": info.as_dict()})


@api_bp.route("/date/<value>")
def by_date(value):
    info = current_resolver().day_info(_checked_date(value), requested_region())
    return jsonify({"date": info.date.isoformat(), "liturgicalDay": info.as_dict()})


@api_bp.route("/range/<start>/<end>")
def date_range(start, end):
    start_date = _checked_date(start)
    end_date = _checked_date(end)
    if start_date > end_date:
        raise InvalidInput("Start date must be before end date.")
    max_days = current_app.config["CALENDAR_MAX_RANGE_DAYS"]
    if (end_date - start_date).days + 1 > max_days:
        raise InvalidInput(f"Date range is too long; at most {max_days} days are allowed.")

    days = current_resolver().date_range(start_date, end_date, requested_region())
    return jsonify(
        {
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
            "liturgicalDays": [{"date": info.date.isoformat(), "liturgicalDay": info.as_dict()} for info in days],
        }
    )


@api_bp.route("/season/<year>")
def seasons(year):
    year = configured_year(year)
    windows = current_resolver().season_windows(year, requested_region())
    return jsonify({"year": year, "seasons": [window.as_dict() for window in windows]})


@api_bp.route("/feast/<year>")
def feast_days(year):
    year = configured_year(year)
    feasts = current_resolver().feast_days(year, requested_region())
    return jsonify({"year": year, "feastDays": [feast.as_dict() for feast in feasts]})


@api_bp.route("/year/<year>")
def full_year(year):
    year = configured_year(year)
    resolver = current_resolver()
    region = requested_region()
    days = resolver.full_year(year, region)
    return jsonify(
        {
            "year": year,
            "region": resolver.normalize_region(region),
            "anchors": resolver.anchors(year).as_dict(),
            "liturgicalCalendar": [info.as_dict() for info in days],
        }
    )


@docs_bp.route("/docs")
def docs():
    return jsonify(
        {
            "apiEndpoints": {
                "/api/calendar/today": "Get liturgical information for today",
                "/api/calendar/date/<date>": "Get liturgical information for a specific date (YYYY-MM-DD)",
                "/api/calendar/range/<start>/<end>": "Get liturgical information for a date range",
                "/api/calendar/season/<year>": "Get liturgical seasons for a specific year",
                "/api/calendar/feast/<year>": "Get feast days for a specific year",
                "/api/calendar/year/<year>": "Get complete calendar for a year",
            },
            "viewEndpoints": {
                "/calendar/view": "View current month calendar",
                "/calendar/view/<year>/<month>": "View calendar for a specific month and year",
                "/calendar/view/<year>": "View calendar for an entire year",
            },
            "regions": list(current_resolver().regions),
            "parameters": {"region": "Optional region overlay; unknown regions fall back to general"},
        }
    )
