"""Season boundaries of the Roman Rite.

Every civil date belongs to exactly one of six seasons.  The anchors of a
year (Baptism of the Lord, Ash Wednesday, Easter, Pentecost, the First
Sunday of Advent, Christmas) split Jan 1 - Dec 31 into seven windows:
Christmas appears twice, once as the tail of the previous liturgical year
and once as the head of the next.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache

from .easter import easter_date
from .errors import InternalInvariantViolation


class Season(Enum):
    ORDINARY_TIME_PRE_LENT = "ordinary_time_pre_lent"
    LENT = "lent"
    EASTER = "easter"
    ORDINARY_TIME_POST_PENTECOST = "ordinary_time_post_pentecost"
    ADVENT = "advent"
    CHRISTMAS = "christmas"

    @property
    def display_name(self):
        return _SEASON_META[self][0]

    @property
    def abbreviation(self):
        return _SEASON_META[self][1]

    @property
    def code_prefix(self):
        """Letter pair used in season-code tokens (``OW``, ``LW`` ...)."""
        return _SEASON_META[self][2]

    @property
    def color(self):
        return _SEASON_META[self][3]


# display name, abbreviation, code prefix, default color
_SEASON_META = {
    Season.ORDINARY_TIME_PRE_LENT: ("Ordinary Time (Pre-Lent)", "OT", "OW", "green"),
    Season.LENT: ("Lent", "LT", "LW", "purple"),
    Season.EASTER: ("Easter", "ET", "EW", "white"),
    Season.ORDINARY_TIME_POST_PENTECOST: ("Ordinary Time (Post-Pentecost)", "OT", "OW", "green"),
    Season.ADVENT: ("Advent", "AV", "AW", "purple"),
    Season.CHRISTMAS: ("Christmas", "CT", "CW", "white"),
}


@dataclass(frozen=True)
class SeasonWindow:
    season: Season
    start: date
    end: date

    @property
    def name(self):
        return self.season.display_name

    def __contains__(self, d):
        return self.start <= d <= self.end

    @property
    def days(self):
        return (self.end - self.start).days + 1

    def as_dict(self):
        return {
            "name": self.name,
            "startDate": self.start.isoformat(),
            "endDate": self.end.isoformat(),
        }


@dataclass(frozen=True)
class LiturgicalYear:
    """Key anchor dates of one civil year."""

    year: int
    epiphany: date
    baptism_of_the_lord: date
    ash_wednesday: date
    palm_sunday: date
    holy_thursday: date
    good_friday: date
    holy_saturday: date
    easter: date
    divine_mercy_sunday: date
    ascension: date
    pentecost: date
    advent_start: date
    christmas: date

    @property
    def pre_lent_weeks(self):
        """Whole weeks of Ordinary Time between Baptism of the Lord and Ash Wednesday."""
        return (self.ash_wednesday - self.baptism_of_the_lord).days // 7

    def as_dict(self):
        return {
            "epiphany": self.epiphany.isoformat(),
            "baptismOfTheLord": self.baptism_of_the_lord.isoformat(),
            "ashWednesday": self.ash_wednesday.isoformat(),
            "palmSunday": self.palm_sunday.isoformat(),
            "holyThursday": self.holy_thursday.isoformat(),
            "goodFriday": self.good_friday.isoformat(),
            "holySaturday": self.holy_saturday.isoformat(),
            "easter": self.easter.isoformat(),
            "divineMercySunday": self.divine_mercy_sunday.isoformat(),
            "ascension": self.ascension.isoformat(),
            "pentecost": self.pentecost.isoformat(),
            "adventStart": self.advent_start.isoformat(),
            "christmas": self.christmas.isoformat(),
        }


def baptism_of_the_lord(year):
    """Return the date of the Baptism of the Lord.

    Normally the Sunday after Epiphany (Jan 6).  When Epiphany itself falls
    on a Saturday the feast moves to Monday Jan 8; when it falls on a Sunday,
    to Monday Jan 7.
    """
    epiphany = date(year, 1, 6)
    weekday = epiphany.isoweekday()  # 1=Mon ... 7=Sun
    if weekday == 6:
        return epiphany + timedelta(days=2)
    if weekday == 7:
        return epiphany + timedelta(days=1)
    return epiphany + timedelta(days=7 - weekday)


def advent_start(year):
    """Return the First Sunday of Advent.

    Take the Sunday on or before Christmas and count back three weeks.  When
    Christmas is itself a Sunday this gives Dec 4.
    """
    christmas = date(year, 12, 25)
    fourth_sunday = christmas - timedelta(days=christmas.isoweekday() % 7)
    return fourth_sunday - timedelta(days=21)


@lru_cache(maxsize=256)
def liturgical_year(year):
    easter = easter_date(year)
    return LiturgicalYear(
        year=year,
        epiphany=date(year, 1, 6),
        baptism_of_the_lord=baptism_of_the_lord(year),
        ash_wednesday=easter - timedelta(days=46),
        palm_sunday=easter - timedelta(days=7),
        holy_thursday=easter - timedelta(days=3),
        good_friday=easter - timedelta(days=2),
        holy_saturday=easter - timedelta(days=1),
        easter=easter,
        divine_mercy_sunday=easter + timedelta(days=7),
        ascension=easter + timedelta(days=39),
        pentecost=easter + timedelta(days=49),
        advent_start=advent_start(year),
        christmas=date(year, 12, 25),
    )


def season_windows(year, anchors=None):
    """Return the seven season windows partitioning the civil year, in calendar order."""
    anchors = anchors or liturgical_year(year)
    one_day = timedelta(days=1)
    return (
        SeasonWindow(Season.CHRISTMAS, date(year, 1, 1), anchors.baptism_of_the_lord - one_day),
        SeasonWindow(Season.ORDINARY_TIME_PRE_LENT, anchors.baptism_of_the_lord, anchors.ash_wednesday - one_day),
        SeasonWindow(Season.LENT, anchors.ash_wednesday, anchors.easter - one_day),
        SeasonWindow(Season.EASTER, anchors.easter, anchors.pentecost),
        SeasonWindow(Season.ORDINARY_TIME_POST_PENTECOST, anchors.pentecost + one_day, anchors.advent_start - one_day),
        SeasonWindow(Season.ADVENT, anchors.advent_start, anchors.christmas - one_day),
        SeasonWindow(Season.CHRISTMAS, anchors.christmas, date(year, 12, 31)),
    )


def season_for(d, anchors=None):
    """Classify a date into its season."""
    anchors = anchors or liturgical_year(d.year)
    if anchors.year != d.year:
        raise InternalInvariantViolation(f"Anchors of {anchors.year} cannot classify {d.isoformat()}.")

    if d >= anchors.christmas:
        return Season.CHRISTMAS
    if d >= anchors.advent_start:
        return Season.ADVENT
    if d > anchors.pentecost:
        return Season.ORDINARY_TIME_POST_PENTECOST
    if d >= anchors.easter:
        return Season.EASTER
    if d >= anchors.ash_wednesday:
        return Season.LENT
    if d >= anchors.baptism_of_the_lord:
        return Season.ORDINARY_TIME_PRE_LENT
    if d >= date(d.year, 1, 1):
        return Season.CHRISTMAS

    raise InternalInvariantViolation(f"{d.isoformat()} falls outside every season of {anchors.year}.")
