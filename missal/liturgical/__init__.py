"""Liturgical calendar engine for the Roman Rite.

Everything in this package is a pure function of a ``datetime.date`` or a
year; nothing here touches Flask, the network or the clock.
"""

from .celebrations import FIXED_CELEBRATIONS, resolve_celebrations
from .dates import MAX_YEAR, MIN_YEAR, format_liturgical_date, is_supported_year
from .day import assemble_liturgical_day, get_liturgical_day
from .easter import compute_easter
from .grid import build_month_grid, get_month_grid, month_grid_cells
from .models import Celebration, LiturgicalColor, LiturgicalDay, LiturgicalYear, Rank, SeasonInterval, SeasonName
from .seasons import resolve_season, season_intervals
from .year import first_sunday_of_advent, resolve_liturgical_year

__all__ = [
    "FIXED_CELEBRATIONS",
    "MAX_YEAR",
    "MIN_YEAR",
    "Celebration",
    "LiturgicalColor",
    "LiturgicalDay",
    "LiturgicalYear",
    "Rank",
    "SeasonInterval",
    "SeasonName",
    "assemble_liturgical_day",
    "build_month_grid",
    "compute_easter",
    "first_sunday_of_advent",
    "format_liturgical_date",
    "get_liturgical_day",
    "get_month_grid",
    "is_supported_year",
    "month_grid_cells",
    "resolve_celebrations",
    "resolve_liturgical_year",
    "resolve_season",
    "season_intervals",
]
