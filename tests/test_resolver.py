"""Single-date, range and whole-year queries."""

from datetime import date, datetime

import pytest

from calendarium.liturgical import FeastRegistry, FeastType, InvalidInput, LiturgicalDayResolver
from calendarium.liturgical.feasts import FixedFeastRecord


def test_day_info_is_idempotent(resolver):
    assert resolver.day_info("2024-07-03") == resolver.day_info(date(2024, 7, 3))


def test_datetime_input_discards_time(resolver):
    assert resolver.day_info(datetime(2024, 3, 31, 23, 59)).date == date(2024, 3, 31)


@pytest.mark.parametrize("value", ["2024-13-45", "not-a-date", "", 20240101, None])
def test_invalid_dates_are_rejected(resolver, value):
    with pytest.raises(InvalidInput):
        resolver.day_info(value)


def test_year_outside_gregorian_range_is_rejected(resolver):
    with pytest.raises(InvalidInput):
        resolver.full_year(1500)


def test_india_overlay(resolver):
    info = resolver.day_info("2024-07-03", "india")
    assert info.region == "india"
    assert info.primary.name == "Saint Thomas the Apostle"
    assert info.primary.is_regional
    assert info.primary.rank == 3.1
    assert info.is_solemnity

    general = resolver.day_info("2024-07-03")
    assert general.primary.rank == 7
    assert not general.is_solemnity
    assert general.is_holy_day


def test_unknown_region_falls_back_to_general(resolver):
    info = resolver.day_info("2024-07-03", "atlantis")
    assert info.region == "general"
    assert info.primary.feast_type is FeastType.FEAST


def test_region_names_are_case_insensitive(resolver):
    assert resolver.normalize_region(" India ") == "india"
    assert resolver.normalize_region(None) == "general"


def test_non_string_region_is_rejected(resolver):
    with pytest.raises(InvalidInput):
        resolver.day_info("2024-07-03", 42)


def test_custom_region_overlay():
    general = [FixedFeastRecord(7, 3, "Saint Thomas the Apostle", FeastType.FEAST)]
    resolver = LiturgicalDayResolver(
        registries={
            "general": FeastRegistry("general", general),
            "regionA": FeastRegistry(
                "regionA",
                general,
                overlay=[FixedFeastRecord(7, 3, "Patron of Region A", FeastType.SOLEMNITY, is_regional=True)],
            ),
        }
    )
    assert resolver.day_info("2024-07-03", "REGIONA").primary.name == "Patron of Region A"
    assert resolver.day_info("2024-07-03").primary.name == "Saint Thomas the Apostle"


def test_full_year_covers_every_day_in_order(resolver):
    days = resolver.full_year(2024)
    assert len(days) == 366
    assert days[0].date == date(2024, 1, 1)
    assert days[-1].date == date(2024, 12, 31)
    assert all(a.date < b.date for a, b in zip(days, days[1:]))


def test_parallel_resolution_matches_sequential(resolver):
    parallel = LiturgicalDayResolver(max_workers=4)
    assert parallel.full_year(2025, "india") == resolver.full_year(2025, "india")


def test_date_range(resolver):
    days = resolver.date_range("2024-12-24", "2025-01-02")
    assert [d.date.day for d in days] == [24, 25, 26, 27, 28, 29, 30, 31, 1, 2]
    assert days[1].primary.name == "Nativity of the Lord"


def test_date_range_single_day(resolver):
    assert len(resolver.date_range("2024-02-29", "2024-02-29")) == 1


def test_date_range_rejects_reversed_bounds(resolver):
    with pytest.raises(InvalidInput):
        resolver.date_range("2024-02-01", "2024-01-01")


def test_feast_days(resolver):
    feasts = resolver.feast_days(2024, "india")
    by_date = {feast.date: feast for feast in feasts}
    assert by_date[date(2024, 3, 31)].name == "Easter Sunday"
    assert by_date[date(2024, 12, 3)].name == "Saint Francis Xavier, priest"
    assert by_date[date(2024, 12, 3)].feast_type == "Solemnity"
    # Laetare Sunday carries no feast.
    assert date(2024, 3, 10) not in by_date
    assert by_date[date(2024, 1, 13)].color == "green"
    assert by_date[date(2024, 5, 19)].as_dict() == {
        "name": "Pentecost",
        "date": "2024-05-19",
        "rank": 2,
        "type": "Solemnity",
        "color": "red",
    }


def test_season_windows_ignore_region(resolver):
    assert resolver.season_windows(2024, "india") == resolver.season_windows(2024)
    assert len(resolver.season_windows(2024)) == 7


def test_degraded_regions_are_reported(tmp_path):
    resolver = LiturgicalDayResolver(data_dir=tmp_path)
    assert set(resolver.degraded) == {"general", "india"}
    assert resolver.day_info("2024-12-25").primary.name == "Nativity of the Lord"


def test_christmas_in_full_year(resolver):
    christmas = resolver.full_year(2024)[359]
    assert christmas.date == date(2024, 12, 25)
    assert christmas.primary.name == "Nativity of the Lord"
    assert christmas.color == "white"
