"""Roman Rite liturgical calendar engine."""

from .codes import SeasonCode
from .dates import coerce_date
from .easter import easter_date
from .errors import CalendarError, DataLoadDegraded, InternalInvariantViolation, InvalidInput
from .feasts import FeastRegistry, FeastType, FixedFeastRecord, Occurrence, Origin
from .precedence import LiturgicalDayInfo, PrecedenceResolver
from .resolver import FeastDay, LiturgicalDayResolver
from .seasons import LiturgicalYear, Season, SeasonWindow, liturgical_year, season_windows

__all__ = [
    "CalendarError",
    "DataLoadDegraded",
    "FeastDay",
    "FeastRegistry",
    "FeastType",
    "FixedFeastRecord",
    "InternalInvariantViolation",
    "InvalidInput",
    "LiturgicalDayInfo",
    "LiturgicalDayResolver",
    "LiturgicalYear",
    "Occurrence",
    "Origin",
    "PrecedenceResolver",
    "Season",
    "SeasonCode",
    "SeasonWindow",
    "coerce_date",
    "easter_date",
    "liturgical_year",
    "season_windows",
]
