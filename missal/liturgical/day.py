"""Assembly of the full liturgical description of a single day."""

from functools import lru_cache

from .celebrations import day_color, primary_celebration, resolve_celebrations
from .dates import weekday_name
from .models import LiturgicalDay
from .seasons import resolve_season, season_week
from .year import resolve_liturgical_year


def assemble_liturgical_day(day):
    """Compose season, celebrations and color into a :class:`LiturgicalDay`.

    Total over every supported date and free of side effects; the same date
    always yields an equal result.
    """
    season = resolve_season(day)
    celebrations = resolve_celebrations(day)
    primary = primary_celebration(celebrations)
    return LiturgicalDay(
        date=day,
        season=season,
        weekday=weekday_name(day),
        color=day_color(season.color, primary),
        liturgical_year=resolve_liturgical_year(day),
        season_week=season_week(day, season),
        celebrations=celebrations,
        primary_celebration=primary,
    )


@lru_cache(maxsize=2048)
def get_liturgical_day(day):
    """Cached entry point used by the web and API layers.

    Results are immutable, so sharing one instance between callers is safe.
    """
    return assemble_liturgical_day(day)
