"""Season boundaries of the Roman Rite.

One liturgical year, identified by its ordinal ``L``, runs from the First
Sunday of Advent in civil year ``L - 1`` up to the day before the First
Sunday of Advent in civil year ``L``.  It is tiled by six intervals:

    Advent          First Sunday of Advent .. December 24
    Christmas       December 25 .. Baptism of the Lord
    Ordinary Time   day after the Baptism .. day before Ash Wednesday
    Lent            Ash Wednesday .. Holy Saturday
    Easter          Easter Sunday .. Pentecost
    Ordinary Time   day after Pentecost .. day before the next Advent
"""

from datetime import date, timedelta

from .easter import ash_wednesday, compute_easter, pentecost
from .models import SEASON_COLORS, SeasonInterval, SeasonName
from .year import first_sunday_of_advent, liturgical_year_ordinal

ONE_DAY = timedelta(days=1)

# Order in which the fixed seasons are tested; anything left is Ordinary Time.
SEASON_PRIORITY = (
    SeasonName.ADVENT,
    SeasonName.CHRISTMAS,
    SeasonName.LENT,
    SeasonName.EASTER,
)


def baptism_of_the_lord(year):
    """Return the Baptism of the Lord for the given civil year.

    Normally the Sunday after Epiphany (January 6).  When Epiphany itself
    falls on a Sunday the Baptism moves to Monday, January 7.
    """
    epiphany = date(year, 1, 6)
    days_after_sunday = epiphany.isoweekday() % 7
    if days_after_sunday == 0:
        return date(year, 1, 7)
    return epiphany + timedelta(days=7 - days_after_sunday)


def _interval(name, start, end):
    return SeasonInterval(name=name, color=SEASON_COLORS[name], start_date=start, end_date=end)


def season_intervals(ordinal):
    """Return the six season intervals of liturgical year *ordinal*, in date order."""
    advent_start = first_sunday_of_advent(ordinal - 1)
    christmas = date(ordinal - 1, 12, 25)
    baptism = baptism_of_the_lord(ordinal)
    easter = compute_easter(ordinal)
    lent_start = ash_wednesday(ordinal)
    easter_end = pentecost(ordinal)
    next_advent = first_sunday_of_advent(ordinal)

    return (
        _interval(SeasonName.ADVENT, advent_start, christmas - ONE_DAY),
        _interval(SeasonName.CHRISTMAS, christmas, baptism),
        _interval(SeasonName.ORDINARY_TIME, baptism + ONE_DAY, lent_start - ONE_DAY),
        _interval(SeasonName.LENT, lent_start, easter - ONE_DAY),
        _interval(SeasonName.EASTER, easter, easter_end),
        _interval(SeasonName.ORDINARY_TIME, easter_end + ONE_DAY, next_advent - ONE_DAY),
    )


def resolve_season(day):
    """Return the :class:`SeasonInterval` containing *day*."""
    intervals = season_intervals(liturgical_year_ordinal(day))
    for name in SEASON_PRIORITY:
        for interval in intervals:
            if interval.name == name and day in interval:
                return interval

    # Ordinary Time: whichever of the two residual stretches holds the day
    return next(interval for interval in intervals if day in interval)


def season_week(day, season):
    """Return the week of *season* that *day* falls in, or None.

    Advent and Easter count weeks from their opening Sunday.  Lent counts
    from its First Sunday, so Ash Wednesday through the following Saturday
    is week 0.  Christmas and Ordinary Time are not numbered.
    """
    if season.name in (SeasonName.ADVENT, SeasonName.EASTER):
        return (day - season.start_date).days // 7 + 1
    if season.name == SeasonName.LENT:
        first_sunday = season.start_date + timedelta(days=4)
        if day < first_sunday:
            return 0
        return (day - first_sunday).days // 7 + 1
    return None
