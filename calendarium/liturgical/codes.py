"""Season codes: compact tokens for the week and weekday within a season.

A token reads ``<prefix><week>-<weekday><abbr>``, for example ``OW14-3Wed``
(Wednesday of the 14th week of Ordinary Time) or ``AW03-0Sun`` (Third Sunday
of Advent).  The weekday digit counts Sunday as 0 and Saturday as 6.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta

from .errors import InternalInvariantViolation
from .seasons import Season, liturgical_year

DAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Precedence of the season indicator: below every feast.
SEASON_RANK = 13.4

EASTER_SEASON_WEEKS = 7


@dataclass(frozen=True)
class SeasonCode:
    prefix: str
    week: int
    weekday: int  # 0=Sunday ... 6=Saturday
    abbreviation: str

    def __str__(self):
        return f"{self.prefix}{self.week:02d}-{self.weekday}{self.abbreviation}"


@dataclass(frozen=True)
class SeasonPosition:
    week: int
    day_of_season: int


def sunday_based_weekday(d):
    return d.isoweekday() % 7


def season_position(d, season, anchors=None):
    """Return the liturgical week and the day index of ``d`` within ``season``."""
    anchors = anchors or liturgical_year(d.year)

    if season is Season.ORDINARY_TIME_PRE_LENT:
        days = (d - anchors.baptism_of_the_lord).days
        return SeasonPosition(week=days // 7 + 1, day_of_season=days + 1)

    if season is Season.ORDINARY_TIME_POST_PENTECOST:
        # One continuous Ordinary Time count across the Lent/Easter interruption.
        carried = anchors.pre_lent_weeks
        days = (d - (anchors.pentecost + timedelta(days=1))).days
        return SeasonPosition(week=days // 7 + carried + 1, day_of_season=days + 1 + carried * 7)

    if season is Season.LENT:
        # Ash Wednesday to Saturday is week 0; week 1 opens on the First Sunday of Lent.
        days = (d - anchors.ash_wednesday).days
        return SeasonPosition(week=(days + 3) // 7, day_of_season=days + 1)

    if season is Season.EASTER:
        days = (d - anchors.easter).days
        return SeasonPosition(week=min(days // 7 + 1, EASTER_SEASON_WEEKS), day_of_season=days + 1)

    if season is Season.ADVENT:
        days = (d - anchors.advent_start).days
        return SeasonPosition(week=days // 7 + 1, day_of_season=days + 1)

    if season is Season.CHRISTMAS:
        if d.month == 12:
            day_index = d.day - 24
        else:
            day_index = 7 + (d - date(d.year, 1, 1)).days + 1
        return SeasonPosition(week=math.ceil(day_index / 7), day_of_season=day_index)

    raise InternalInvariantViolation(f"No week numbering rule for season {season!r}.")


def season_code(d, season, week):
    weekday = sunday_based_weekday(d)
    return SeasonCode(
        prefix=season.code_prefix,
        week=week,
        weekday=weekday,
        abbreviation=DAY_ABBREVIATIONS[weekday],
    )


def is_rose_sunday(d, season, week):
    """Gaudete (3rd Sunday of Advent) and Laetare (4th Sunday of Lent)."""
    if d.isoweekday() != 7:
        return False
    return (season is Season.ADVENT and week == 3) or (season is Season.LENT and week == 4)


def season_color(d, season, week):
    if is_rose_sunday(d, season, week):
        return "rose"
    return season.color
