"""Month grids for calendar navigation."""

from datetime import date, timedelta

from .dates import weekday_index
from .seasons import resolve_season

GRID_WEEKS = 6
GRID_SIZE = GRID_WEEKS * 7


def build_month_grid(year, month_index):
    """Return the 42 dates of a six-week grid for a month.

    *month_index* is zero-based (January is 0).  The grid starts on the
    Sunday on or before the 1st, so the leading cells are the trailing
    days of the previous month and the remaining cells after the month's
    last day are filled from the next month.
    """
    first = date(year, month_index + 1, 1)
    start = first - timedelta(days=weekday_index(first))
    return [start + timedelta(days=offset) for offset in range(GRID_SIZE)]


def get_month_grid(year, month):
    """Return the grid for a 1-based *month*."""
    return build_month_grid(year, month - 1)


def month_grid_cells(year, month):
    """Grid cells annotated with their season, for the navigation widget."""
    cells = []
    for day in get_month_grid(year, month):
        season = resolve_season(day)
        cells.append({
            "date": day,
            "in_month": day.month == month,
            "season": season.name,
            "color": season.color,
        })
    return cells
