"""Selection of the observance celebrated on a date.

Every date has at least one candidate, the season indicator.  Moveable and
fixed feasts join it when they fall on the date; candidates are ordered by
rank (lower wins) and then by origin (moveable before fixed/regional before
season).  The first candidate is the primary observance unless it is the
season indicator itself.
"""

from dataclasses import dataclass
from datetime import date

from .codes import SEASON_RANK, SeasonCode, season_code, season_color, season_position
from .dates import coerce_date
from .errors import InternalInvariantViolation
from .feasts import Occurrence, Origin
from .seasons import Season, liturgical_year, season_for


@dataclass(frozen=True)
class LiturgicalDayInfo:
    date: date
    region: str
    season: Season
    season_code: SeasonCode
    primary: Occurrence
    occurrences: tuple
    color: str
    week: int
    weekday: int  # ISO: 1=Monday ... 7=Sunday
    day_of_season: int

    @property
    def is_solemnity(self):
        return self.primary is not None and self.primary.grade >= 4

    @property
    def is_holy_day(self):
        return self.primary is not None and self.primary.grade >= 3

    def as_dict(self):
        return {
            "date": self.date.isoformat(),
            "region": self.region,
            "season": {
                "name": self.season.display_name,
                "abbreviation": self.season.abbreviation,
                "color": self.season.color,
            },
            "seasonCode": str(self.season_code),
            "feastDay": self.primary.as_dict() if self.primary else None,
            "color": self.color,
            "week": self.week,
            "weekday": self.weekday,
            "dayOfSeason": self.day_of_season,
            "isHolyDay": self.is_holy_day,
            "isSolemnity": self.is_solemnity,
            "allFeastsForDate": [occurrence.as_dict() for occurrence in self.occurrences],
        }


def _precedence_key(occurrence):
    return (occurrence.rank, occurrence.origin.priority)


def rank_occurrences(candidates):
    """Order candidates by precedence.

    Two candidates sharing both rank and origin priority cannot be ordered
    meaningfully; that is treated as a defect in the feast tables.
    """
    ordered = sorted(candidates, key=_precedence_key)
    for first, second in zip(ordered, ordered[1:]):
        if _precedence_key(first) == _precedence_key(second):
            raise InternalInvariantViolation(
                f"Cannot order {first.name!r} and {second.name!r}: "
                f"both rank {first.rank} with origin {first.origin.value}."
            )
    return tuple(ordered)


class PrecedenceResolver:
    """Resolve dates against one region's feast registry."""

    def __init__(self, registry):
        self.registry = registry

    def candidates(self, d, anchors, season, code):
        found = [
            Occurrence(
                name=str(code),
                rank=SEASON_RANK,
                origin=Origin.SEASON,
                color=season_color(d, season, code.week),
            )
        ]
        moveable = self.registry.moveable_feast(anchors.easter, d)
        if moveable:
            found.append(moveable)
        fixed = self.registry.fixed_feast(d.month, d.day)
        if fixed:
            found.append(fixed)
        return found

    def resolve(self, value):
        d = coerce_date(value)
        anchors = liturgical_year(d.year)
        season = season_for(d, anchors)
        position = season_position(d, season, anchors)
        code = season_code(d, season, position.week)

        occurrences = rank_occurrences(self.candidates(d, anchors, season, code))
        winner = occurrences[0]
        primary = None if winner.origin is Origin.SEASON else winner

        if primary is not None and primary.color:
            color = primary.color
        else:
            color = season_color(d, season, position.week)

        return LiturgicalDayInfo(
            date=d,
            region=self.registry.region,
            season=season,
            season_code=code,
            primary=primary,
            occurrences=occurrences,
            color=color,
            week=position.week,
            weekday=d.isoweekday(),
            day_of_season=position.day_of_season,
        )
