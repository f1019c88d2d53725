"""Liturgical year boundaries and lectionary cycles."""

from datetime import date, timedelta

from .easter import compute_easter
from .models import LiturgicalYear

SUNDAY_CYCLES = ("A", "B", "C")


def first_sunday_of_advent(year):
    """Return the First Sunday of Advent falling in the given civil year.

    Walk back from December 25 to the Sunday on or before it, then three
    more weeks.  When Christmas is itself a Sunday the walk back is zero
    days, so Advent falls between November 28 and December 4.
    """
    christmas = date(year, 12, 25)
    # Sunday=0 .. Saturday=6
    days_since_sunday = christmas.isoweekday() % 7
    return christmas - timedelta(days=days_since_sunday + 21)


def liturgical_year_ordinal(day):
    """Return the ordinal of the liturgical year containing *day*.

    The First Sunday of Advent itself already belongs to the new year.
    """
    if day < first_sunday_of_advent(day.year):
        return day.year
    return day.year + 1


def sunday_cycle(ordinal):
    return SUNDAY_CYCLES[ordinal % 3]


def weekday_cycle(ordinal):
    return "I" if ordinal % 2 == 1 else "II"


def liturgical_year_for_ordinal(ordinal):
    return LiturgicalYear(
        ordinal=ordinal,
        sunday_cycle=sunday_cycle(ordinal),
        weekday_cycle=weekday_cycle(ordinal),
        easter_date=compute_easter(ordinal),
    )


def resolve_liturgical_year(day):
    """Return the :class:`LiturgicalYear` that *day* belongs to."""
    return liturgical_year_for_ordinal(liturgical_year_ordinal(day))
