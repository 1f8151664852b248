"""Fixed and moveable feasts.

A :class:`FeastRegistry` is built once per region from the general
fixed-feast table, an optional regional overlay and the table of
Easter-relative feasts.  It is read-only after construction, so a single
instance may serve any number of threads.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from pathlib import Path

from .errors import DataLoadDegraded

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"

GENERAL_REGION = "general"

# Region -> overlay table file name.  The general table is always loaded.
GENERAL_TABLE = "fixed_feasts_general.json"
REGION_TABLES = {
    "india": "fixed_feasts_india.json",
}

# Names in regional tables may carry a marker identifying their origin.
REGION_MARKERS = {
    "india": "IN ",
}

RED_KEYWORDS = ("martyr", "passion", "blood", "cross")

# Apostles are red too, unless the name also honours a virgin.
APOSTLE_KEYWORD = "apostle"
APOSTLE_EXCLUDED = "virgin"


class FeastType(Enum):
    SOLEMNITY = "Solemnity"
    FEAST_LORD = "Feast-Lord"
    FEAST = "Feast"
    MEMORIAL = "Memorial"
    MEMORIAL_MARIAN = "Memorial-Marian"
    OPTIONAL_MEMORIAL = "OptionalMemorial"
    SPECIAL = "Special"

    @classmethod
    def from_tag(cls, tag):
        """Parse a type tag, accepting the short tags used by older tables."""
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str):
            raise ValueError(f"Invalid feast type {tag!r}")
        tag = tag.strip()
        try:
            return cls(tag)
        except ValueError:
            pass
        if tag in _TAG_ALIASES:
            return _TAG_ALIASES[tag]
        if tag.startswith("Solemnity"):
            return cls.SOLEMNITY
        raise ValueError(f"Invalid feast type {tag!r}")


_TAG_ALIASES = {
    "Mem": FeastType.MEMORIAL,
    "Mem-Mary": FeastType.MEMORIAL_MARIAN,
    "OpMem": FeastType.OPTIONAL_MEMORIAL,
}

# Precedence (lower wins) and default color per fixed-feast type.  A color of
# None means the day keeps the color of its season.
TYPE_TABLE = {
    FeastType.SOLEMNITY: (3.1, "white"),
    FeastType.FEAST_LORD: (5, "white"),
    FeastType.FEAST: (7, "white"),
    FeastType.MEMORIAL: (10.2, "white"),
    FeastType.MEMORIAL_MARIAN: (10.2, "white"),
    FeastType.OPTIONAL_MEMORIAL: (12, None),
}

# Fixed feasts whose precedence is not the one of their type.
NAMED_RANKS = {
    "Nativity of the Lord": 2,
    "Epiphany": 2,
    "All Souls": 3.2,
}


class Origin(Enum):
    SEASON = "season"
    MOVEABLE = "moveable"
    FIXED = "fixed"
    REGIONAL = "regional"

    @property
    def priority(self):
        """Tie-break order when two candidates share a rank; lower wins."""
        return _ORIGIN_PRIORITY[self]


_ORIGIN_PRIORITY = {
    Origin.MOVEABLE: 0,
    Origin.FIXED: 1,
    Origin.REGIONAL: 1,
    Origin.SEASON: 2,
}


def grade_for_rank(rank):
    """Map a precedence number onto the 1-5 importance grade (higher is more important).

    The grade only summarises a rank for display and for ``is_solemnity``;
    occurrences are always ordered by ``rank``.
    """
    if rank <= 3.2:
        return 5
    if rank <= 5:
        return 4
    if rank <= 7:
        return 3
    if rank <= 10.2:
        return 2
    return 1


@dataclass(frozen=True)
class Occurrence:
    """One candidate observance of a date."""

    name: str
    rank: float
    origin: Origin
    feast_type: FeastType = None
    color: str = None
    localized_name: str = ""

    @property
    def grade(self):
        if self.origin is Origin.SEASON:
            return 0
        return grade_for_rank(self.rank)

    @property
    def is_regional(self):
        return self.origin is Origin.REGIONAL

    def as_dict(self):
        return {
            "name": self.name,
            "localizedName": self.localized_name,
            "rank": self.rank,
            "grade": self.grade,
            "type": self.feast_type.value if self.feast_type else None,
            "color": self.color,
            "origin": self.origin.value,
            "isRegional": self.is_regional,
        }


@dataclass(frozen=True)
class FixedFeastRecord:
    month: int
    day: int
    name: str
    feast_type: FeastType
    localized_name: str = ""
    is_regional: bool = False
    color: str = None

    @property
    def key(self):
        return (self.month, self.day)

    @property
    def rank(self):
        if self.name in NAMED_RANKS:
            return NAMED_RANKS[self.name]
        return TYPE_TABLE[self.feast_type][0]

    @property
    def effective_color(self):
        if self.color:
            return self.color
        lowered = self.name.lower()
        if any(keyword in lowered for keyword in RED_KEYWORDS):
            return "red"
        if APOSTLE_KEYWORD in lowered and APOSTLE_EXCLUDED not in lowered:
            return "red"
        return TYPE_TABLE[self.feast_type][1]

    def occurrence(self):
        return Occurrence(
            name=self.name,
            rank=self.rank,
            origin=Origin.REGIONAL if self.is_regional else Origin.FIXED,
            feast_type=self.feast_type,
            color=self.effective_color,
            localized_name=self.localized_name,
        )

    def as_dict(self):
        return {
            "month": self.month,
            "day": self.day,
            "name": self.name,
            "localized_name": self.localized_name,
            "type": self.feast_type.value,
            "rank": self.rank,
            "color": self.effective_color,
            "isRegional": self.is_regional,
        }


@dataclass(frozen=True)
class MoveableFeastRecord:
    offset: int  # days from Easter Sunday
    name: str
    feast_type: FeastType
    rank: float
    color: str

    def date_for(self, easter):
        return easter + timedelta(days=self.offset)

    def occurrence(self):
        return Occurrence(
            name=self.name,
            rank=self.rank,
            origin=Origin.MOVEABLE,
            feast_type=self.feast_type,
            color=self.color,
        )


MOVEABLE_FEASTS = (
    MoveableFeastRecord(-46, "Ash Wednesday", FeastType.SPECIAL, 2.2, "purple"),
    MoveableFeastRecord(-7, "Palm Sunday", FeastType.FEAST, 2.3, "red"),
    MoveableFeastRecord(-3, "Holy Thursday", FeastType.SOLEMNITY, 1.1, "white"),
    MoveableFeastRecord(-2, "Good Friday", FeastType.SOLEMNITY, 1.1, "red"),
    MoveableFeastRecord(-1, "Holy Saturday", FeastType.SOLEMNITY, 1.1, "white"),
    MoveableFeastRecord(0, "Easter Sunday", FeastType.SOLEMNITY, 1, "white"),
    MoveableFeastRecord(7, "Divine Mercy Sunday", FeastType.FEAST, 5, "white"),
    MoveableFeastRecord(39, "Ascension of the Lord", FeastType.SOLEMNITY, 2, "white"),
    MoveableFeastRecord(49, "Pentecost", FeastType.SOLEMNITY, 2, "red"),
)


# Principal solemnities used when the backing tables cannot be read.
MINIMAL_FEASTS = (
    FixedFeastRecord(1, 1, "Solemnity of Mary, Mother of God", FeastType.SOLEMNITY),
    FixedFeastRecord(3, 19, "Solemnity of Saint Joseph", FeastType.SOLEMNITY),
    FixedFeastRecord(3, 25, "Annunciation of the Lord", FeastType.SOLEMNITY),
    FixedFeastRecord(6, 24, "Birth of Saint John the Baptist", FeastType.SOLEMNITY),
    FixedFeastRecord(6, 29, "Saints Peter and Paul", FeastType.SOLEMNITY, color="red"),
    FixedFeastRecord(8, 15, "Assumption of the Blessed Virgin Mary", FeastType.SOLEMNITY),
    FixedFeastRecord(11, 1, "All Saints", FeastType.SOLEMNITY),
    FixedFeastRecord(12, 8, "Immaculate Conception", FeastType.SOLEMNITY),
    FixedFeastRecord(12, 25, "Nativity of the Lord", FeastType.SOLEMNITY),
)

MINIMAL_REGIONAL_FEASTS = {
    "india": (
        FixedFeastRecord(7, 3, "Saint Thomas the Apostle", FeastType.SOLEMNITY, is_regional=True),
        FixedFeastRecord(12, 3, "Saint Francis Xavier", FeastType.SOLEMNITY, is_regional=True),
    ),
}


def _parse_record(raw, marker=None, regional=False):
    month = int(raw["month"])
    day = int(raw["day"])
    # Validates the slot; 2000 is a leap year so Feb 29 is accepted.
    date(2000, month, day)

    name = raw["name"]
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Feast on {month}/{day} has no name")
    name = name.strip()
    is_regional = regional
    if marker and name.startswith(marker):
        name = name[len(marker):].strip()
        is_regional = True

    return FixedFeastRecord(
        month=month,
        day=day,
        name=name,
        feast_type=FeastType.from_tag(raw["type"]),
        localized_name=raw.get("localized_name") or "",
        is_regional=is_regional,
    )


def load_feast_table(path, marker=None, regional=False):
    """Read a JSON feast table, raising DataLoadDegraded if it is missing or malformed."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as exc:
        raise DataLoadDegraded(f"Cannot read feast table {path.name}: {exc}") from exc

    if not isinstance(payload, list):
        raise DataLoadDegraded(f"Feast table {path.name} must be a list of records")

    records = []
    seen = set()
    for index, raw in enumerate(payload):
        try:
            record = _parse_record(raw, marker=marker, regional=regional)
        except (KeyError, TypeError, ValueError) as exc:
            raise DataLoadDegraded(f"Malformed record #{index} in {path.name}: {exc}") from exc
        if record.key in seen:
            raise DataLoadDegraded(f"Duplicate entry for {record.month}/{record.day} in {path.name}")
        seen.add(record.key)
        records.append(record)

    if any(r.feast_type not in TYPE_TABLE for r in records):
        raise DataLoadDegraded(f"Feast table {path.name} uses a type reserved for moveable feasts")
    return tuple(records)


class FeastRegistry:
    """Fixed and moveable feasts of one region."""

    def __init__(self, region, general, overlay=(), moveable=MOVEABLE_FEASTS, degraded=()):
        self.region = region
        self._general = {record.key: record for record in general}
        self._overlay = {record.key: record for record in overlay}
        self._moveable = {record.offset: record for record in moveable}
        self.degraded = tuple(degraded)

    def __repr__(self):
        return (
            f"<FeastRegistry {self.region} general={len(self._general)} "
            f"overlay={len(self._overlay)} degraded={bool(self.degraded)}>"
        )

    @classmethod
    def load(cls, region=GENERAL_REGION, data_dir=None):
        """Build a registry from the JSON tables in ``data_dir``.

        Never raises on bad data: a broken general table falls back to the
        minimal solemnities, a broken overlay to the minimal regional entries.
        """
        data_dir = Path(data_dir) if data_dir else DATA_DIR
        degraded = []

        try:
            general = load_feast_table(data_dir / GENERAL_TABLE)
        except DataLoadDegraded as exc:
            logger.warning("Falling back to minimal feast set for region %s: %s", region, exc)
            degraded.append(str(exc))
            general = MINIMAL_FEASTS

        overlay = ()
        table = REGION_TABLES.get(region)
        if table:
            try:
                overlay = load_feast_table(
                    data_dir / table,
                    marker=REGION_MARKERS.get(region),
                    regional=True,
                )
            except DataLoadDegraded as exc:
                logger.warning("Falling back to minimal overlay for region %s: %s", region, exc)
                degraded.append(str(exc))
                overlay = MINIMAL_REGIONAL_FEASTS.get(region, ())

        registry = cls(region, general, overlay, degraded=degraded)
        logger.debug("Loaded %r", registry)
        return registry

    def fixed_record(self, month, day):
        key = (month, day)
        if key in self._overlay:
            return self._overlay[key]
        return self._general.get(key)

    def fixed_feast(self, month, day):
        """Return the fixed-date occurrence for a slot; the overlay replaces the general entry."""
        record = self.fixed_record(month, day)
        return record.occurrence() if record else None

    def moveable_record(self, easter, d):
        return self._moveable.get((d - easter).days)

    def moveable_feast(self, easter, d):
        record = self.moveable_record(easter, d)
        return record.occurrence() if record else None

    def fixed_records(self):
        """Effective fixed-feast table of this region, ordered by month and day."""
        keys = sorted(set(self._general) | set(self._overlay))
        return [self.fixed_record(*key) for key in keys]

    def moveable_records(self):
        return sorted(self._moveable.values(), key=lambda record: record.offset)
