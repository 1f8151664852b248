"""Public entry point of the liturgical engine."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import date

from .dates import check_year, coerce_date, iter_days, year_days
from .errors import InvalidInput
from .feasts import GENERAL_REGION, REGION_TABLES, FeastRegistry
from .precedence import PrecedenceResolver
from .seasons import liturgical_year, season_windows

logger = logging.getLogger(__name__)

DEFAULT_REGIONS = (GENERAL_REGION, *REGION_TABLES)


@dataclass(frozen=True)
class FeastDay:
    name: str
    date: date
    rank: float
    feast_type: str
    color: str

    def as_dict(self):
        return {
            "name": self.name,
            "date": self.date.isoformat(),
            "rank": self.rank,
            "type": self.feast_type,
            "color": self.color,
        }


class LiturgicalDayResolver:
    """Answer single-date, range and whole-year queries for a closed set of regions.

    One feast registry is built per region at construction.  Pass
    ``registries`` to inject prebuilt ones (tests, custom overlays); otherwise
    they are loaded from ``data_dir``.  With ``max_workers`` above 1, batch
    queries resolve dates on a thread pool and merge the results by date.
    """

    def __init__(self, regions=DEFAULT_REGIONS, data_dir=None, registries=None, max_workers=1):
        if registries is None:
            registries = {region: FeastRegistry.load(region, data_dir) for region in regions}
        if GENERAL_REGION not in registries:
            registries = {GENERAL_REGION: FeastRegistry.load(GENERAL_REGION, data_dir), **registries}
        self._registries = dict(registries)
        self._resolvers = {region: PrecedenceResolver(registry) for region, registry in self._registries.items()}
        self.max_workers = max(1, int(max_workers or 1))

    @property
    def regions(self):
        return tuple(self._registries)

    @property
    def degraded(self):
        """Regions whose feast tables fell back to the built-in minimal set."""
        return {region: registry.degraded for region, registry in self._registries.items() if registry.degraded}

    def normalize_region(self, region):
        if region is None:
            return GENERAL_REGION
        if not isinstance(region, str):
            raise InvalidInput(f"Invalid region {region!r}.")
        key = region.strip()
        for name in self._registries:
            if name.lower() == key.lower():
                return name
        logger.debug("Unknown region %r, using %s.", region, GENERAL_REGION)
        return GENERAL_REGION

    def registry(self, region=GENERAL_REGION):
        return self._registries[self.normalize_region(region)]

    def day_info(self, value, region=GENERAL_REGION):
        return self._resolvers[self.normalize_region(region)].resolve(value)

    def season_windows(self, year, region=GENERAL_REGION):
        # Seasons do not vary by region; the argument keeps the query surface uniform.
        self.normalize_region(region)
        year = check_year(year)
        return list(season_windows(year))

    def anchors(self, year):
        return liturgical_year(check_year(year))

    def full_year(self, year, region=GENERAL_REGION):
        year = check_year(year)
        return self._resolve_many(list(year_days(year)), region)

    def date_range(self, start, end, region=GENERAL_REGION):
        start = coerce_date(start)
        end = coerce_date(end)
        if start > end:
            raise InvalidInput("Start date must not be after end date.")
        return self._resolve_many(list(iter_days(start, end)), region)

    def feast_days(self, year, region=GENERAL_REGION):
        feasts = []
        for info in self.full_year(year, region):
            if info.primary is None:
                continue
            feasts.append(
                FeastDay(
                    name=info.primary.name,
                    date=info.date,
                    rank=info.primary.rank,
                    feast_type=info.primary.feast_type.value if info.primary.feast_type else None,
                    color=info.color,
                )
            )
        return feasts

    def _resolve_many(self, days, region):
        resolver = self._resolvers[self.normalize_region(region)]
        if self.max_workers == 1 or len(days) < 2:
            return [resolver.resolve(d) for d in days]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(resolver.resolve, d) for d in days]
            results = [future.result() for future in as_completed(futures)]
        results.sort(key=lambda info: info.date)
        return results
