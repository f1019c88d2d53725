"""Tests for season resolution and the tiling of the liturgical year."""

from datetime import date, timedelta

import pytest

from missal.liturgical.easter import ash_wednesday, pentecost
from missal.liturgical.models import LiturgicalColor, SeasonName
from missal.liturgical.seasons import baptism_of_the_lord, resolve_season, season_intervals, season_week
from missal.liturgical.year import first_sunday_of_advent

ONE_DAY = timedelta(days=1)


def _days(start, end):
    day = start
    while day <= end:
        yield day
        day += ONE_DAY


@pytest.mark.parametrize(
    "year, expected",
    [
        (2019, date(2019, 1, 7)),   # Epiphany on a Sunday: Baptism moves to Monday
        (2024, date(2024, 1, 7)),   # Epiphany on a Saturday
        (2025, date(2025, 1, 12)),  # Epiphany on a Monday
    ],
)
def test_baptism_of_the_lord(year, expected):
    assert baptism_of_the_lord(year) == expected


@pytest.mark.parametrize(
    "day, name, color",
    [
        (date(2024, 12, 1), SeasonName.ADVENT, LiturgicalColor.PURPLE),
        (date(2024, 12, 24), SeasonName.ADVENT, LiturgicalColor.PURPLE),
        (date(2024, 12, 25), SeasonName.CHRISTMAS, LiturgicalColor.WHITE),
        (date(2025, 1, 1), SeasonName.CHRISTMAS, LiturgicalColor.WHITE),
        (date(2025, 1, 12), SeasonName.CHRISTMAS, LiturgicalColor.WHITE),
        (date(2025, 1, 13), SeasonName.ORDINARY_TIME, LiturgicalColor.GREEN),
        (date(2024, 2, 13), SeasonName.ORDINARY_TIME, LiturgicalColor.GREEN),
        (date(2024, 2, 14), SeasonName.LENT, LiturgicalColor.PURPLE),
        (date(2024, 3, 30), SeasonName.LENT, LiturgicalColor.PURPLE),
        (date(2024, 3, 31), SeasonName.EASTER, LiturgicalColor.WHITE),
        (date(2024, 5, 19), SeasonName.EASTER, LiturgicalColor.WHITE),
        (date(2024, 5, 20), SeasonName.ORDINARY_TIME, LiturgicalColor.GREEN),
        (date(2024, 11, 30), SeasonName.ORDINARY_TIME, LiturgicalColor.GREEN),
        (date(2022, 11, 27), SeasonName.ORDINARY_TIME, LiturgicalColor.GREEN),
        (date(2022, 12, 4), SeasonName.ADVENT, LiturgicalColor.PURPLE),
    ],
)
def test_resolve_season_boundaries(day, name, color):
    season = resolve_season(day)
    assert season.name == name
    assert season.color == color
    assert season.start_date <= day <= season.end_date


def test_advent_interval_2024():
    season = resolve_season(date(2024, 12, 10))
    assert season.start_date == date(2024, 12, 1)
    assert season.end_date == date(2024, 12, 24)


def test_christmas_interval_spans_new_year():
    season = resolve_season(date(2025, 1, 5))
    assert season.start_date == date(2024, 12, 25)
    assert season.end_date == date(2025, 1, 12)


def test_ordinary_time_stretches_2024():
    early = resolve_season(date(2024, 1, 20))
    late = resolve_season(date(2024, 8, 1))
    assert (early.start_date, early.end_date) == (date(2024, 1, 8), date(2024, 2, 13))
    assert (late.start_date, late.end_date) == (date(2024, 5, 20), date(2024, 11, 30))


@pytest.mark.parametrize("ordinal", range(1990, 2041))
def test_intervals_tile_the_liturgical_year(ordinal):
    intervals = season_intervals(ordinal)
    names = [interval.name for interval in intervals]
    assert names == [
        SeasonName.ADVENT,
        SeasonName.CHRISTMAS,
        SeasonName.ORDINARY_TIME,
        SeasonName.LENT,
        SeasonName.EASTER,
        SeasonName.ORDINARY_TIME,
    ]
    assert intervals[0].start_date == first_sunday_of_advent(ordinal - 1)
    assert intervals[-1].end_date == first_sunday_of_advent(ordinal) - ONE_DAY
    for current, following in zip(intervals, intervals[1:]):
        assert current.start_date <= current.end_date
        assert following.start_date == current.end_date + ONE_DAY


@pytest.mark.parametrize("ordinal", [2008, 2024, 2038])
def test_lent_and_easter_bounds_follow_the_computus(ordinal):
    lent = season_intervals(ordinal)[3]
    easter = season_intervals(ordinal)[4]
    assert lent.start_date == ash_wednesday(ordinal)
    assert easter.end_date == pentecost(ordinal)


@pytest.mark.parametrize("ordinal", [2000, 2011, 2019, 2024, 2038])
def test_every_day_resolves_to_exactly_one_season(ordinal):
    intervals = season_intervals(ordinal)
    for day in _days(intervals[0].start_date, intervals[-1].end_date):
        matching = [interval for interval in intervals if day in interval]
        assert len(matching) == 1
        assert resolve_season(day) == matching[0]


def test_season_week_advent():
    advent = resolve_season(date(2024, 12, 1))
    assert season_week(date(2024, 12, 1), advent) == 1
    assert season_week(date(2024, 12, 7), advent) == 1
    assert season_week(date(2024, 12, 22), advent) == 4


def test_season_week_lent_counts_from_first_sunday():
    lent = resolve_season(date(2024, 2, 14))
    assert season_week(date(2024, 2, 14), lent) == 0
    assert season_week(date(2024, 2, 17), lent) == 0
    assert season_week(date(2024, 2, 18), lent) == 1
    assert season_week(date(2024, 3, 24), lent) == 6


def test_season_week_easter():
    easter = resolve_season(date(2024, 3, 31))
    assert season_week(date(2024, 3, 31), easter) == 1
    assert season_week(date(2024, 4, 7), easter) == 2


def test_season_week_absent_for_christmas_and_ordinary_time():
    for day in (date(2024, 12, 26), date(2024, 7, 4)):
        assert season_week(day, resolve_season(day)) is None
