"""Small date helpers used around the calendar engine."""

from datetime import timedelta

from .seasons import resolve_season
from .year import resolve_liturgical_year

# Years a caller may hand to the engine.  The lower bound is the first full
# Gregorian year; the upper bound leaves room for the following Advent.
MIN_YEAR = 1583
MAX_YEAR = 9998

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def weekday_index(day):
    """Return the day of the week with Sunday=0 .. Saturday=6."""
    return day.isoweekday() % 7


def weekday_name(day):
    return WEEKDAY_NAMES[weekday_index(day)]


def is_sunday(day):
    return weekday_index(day) == 0


def next_sunday(day):
    """Return the first Sunday strictly after *day*."""
    return day + timedelta(days=7 - weekday_index(day))


def previous_sunday(day):
    """Return the last Sunday strictly before *day*."""
    return day - timedelta(days=weekday_index(day) or 7)


def is_supported_year(year):
    return MIN_YEAR <= year <= MAX_YEAR


def format_long_date(day):
    return f"{weekday_name(day)}, {MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def format_liturgical_date(day):
    """Return e.g. ``Wednesday, December 25, 2024 • Christmas • Year A``."""
    season = resolve_season(day)
    year = resolve_liturgical_year(day)
    return f"{format_long_date(day)} • {season.name} • Year {year.sunday_cycle}"
