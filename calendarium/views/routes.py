import calendar
from datetime import date

from flask import Blueprint, render_template, request

from .. import current_resolver
from ..helpers import configured_year, requested_region
from ..liturgical import InvalidInput
from .forms import CalendarViewForm, region_choices

views_bp = Blueprint("views", __name__)

# Sunday-first weeks, as printed in liturgical calendars.
_MONTH_LAYOUT = calendar.Calendar(firstweekday=6)

MONTH_NAMES = [calendar.month_name[m] for m in range(1, 13)]
WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _region_form():
    resolver = current_resolver()
    form = CalendarViewForm(request.args)
    form.region.choices = region_choices(resolver.regions)
    form.region.data = resolver.normalize_region(requested_region())
    return form


def month_grid(year, month, region):
    """Weeks of day-info cells covering a month, padded with days of the adjacent months."""
    weeks = _MONTH_LAYOUT.monthdatescalendar(year, month)
    days = current_resolver().date_range(weeks[0][0], weeks[-1][-1], region)
    cells = [{"info": info, "in_month": info.date.month == month} for info in days]
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def _adjacent_month(year, month, step):
    month += step
    if month == 0:
        return year - 1, 12
    if month == 13:
        return year + 1, 1
    return year, month


@views_bp.route("/")
def index():
    return render_template("index.html", year=date.today().year, form=_region_form())


def _render_month(year, month, is_current_month=False):
    form = _region_form()
    region = form.region.data
    prev_year, prev_month = _adjacent_month(year, month, -1)
    next_year, next_month = _adjacent_month(year, month, 1)
    return render_template(
        "calendar/month.html",
        year=year,
        month=month,
        month_name=MONTH_NAMES[month - 1],
        weeks=month_grid(year, month, region),
        weekday_headers=WEEKDAY_HEADERS,
        prev_year=prev_year,
        prev_month=prev_month,
        next_year=next_year,
        next_month=next_month,
        today=date.today() if is_current_month else None,
        region=region,
        form=form,
    )


@views_bp.route("/calendar/view")
def current_month():
    today = date.today()
    return _render_month(today.year, today.month, is_current_month=True)


@views_bp.route("/calendar/view/<year>/<month>")
def month_view(year, month):
    year = configured_year(year)
    try:
        month = int(month)
    except ValueError:
        month = 0
    if not 1 <= month <= 12:
        raise InvalidInput("Invalid month. Month should be between 1 and 12.")
    return _render_month(year, month)


@views_bp.route("/calendar/view/<year>")
def year_view(year):
    year = configured_year(year)
    form = _region_form()
    region = form.region.data
    resolver = current_resolver()
    months = [
        {"number": m, "name": MONTH_NAMES[m - 1], "weeks": month_grid(year, m, region)}
        for m in range(1, 13)
    ]
    return render_template(
        "calendar/year.html",
        year=year,
        months=months,
        weekday_headers=WEEKDAY_HEADERS,
        seasons=resolver.season_windows(year, region),
        feast_days=resolver.feast_days(year, region),
        region=region,
        form=form,
    )
