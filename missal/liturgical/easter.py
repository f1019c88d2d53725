"""Date of Easter and the dates that hang off it."""

from datetime import date, timedelta

ASH_WEDNESDAY_OFFSET = 46
PENTECOST_OFFSET = 49


def compute_easter(year):
    """Return the date of Easter Sunday for the given year.

    Uses the anonymous Gregorian algorithm (also known as the
    Meeus/Jones/Butcher algorithm).  Results are only meaningful for
    years of the Gregorian calendar (1583 onwards); earlier years are
    not rejected.
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def ash_wednesday(year):
    return compute_easter(year) - timedelta(days=ASH_WEDNESDAY_OFFSET)


def pentecost(year):
    return compute_easter(year) + timedelta(days=PENTECOST_OFFSET)
