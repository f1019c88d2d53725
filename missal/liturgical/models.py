"""Value types shared by the liturgical calendar engine."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class SeasonName(StrEnum):
    ADVENT = "Advent"
    CHRISTMAS = "Christmas"
    ORDINARY_TIME = "Ordinary Time"
    LENT = "Lent"
    EASTER = "Easter"


class LiturgicalColor(StrEnum):
    WHITE = "White"
    RED = "Red"
    GREEN = "Green"
    PURPLE = "Purple"
    ROSE = "Rose"
    BLACK = "Black"


class Rank(StrEnum):
    SOLEMNITY = "Solemnity"
    FEAST = "Feast"
    MEMORIAL = "Memorial"
    OPTIONAL_MEMORIAL = "Optional Memorial"
    WEEKDAY = "Weekday"
    SUNDAY = "Sunday"


SEASON_COLORS = {
    SeasonName.ADVENT: LiturgicalColor.PURPLE,
    SeasonName.CHRISTMAS: LiturgicalColor.WHITE,
    SeasonName.ORDINARY_TIME: LiturgicalColor.GREEN,
    SeasonName.LENT: LiturgicalColor.PURPLE,
    SeasonName.EASTER: LiturgicalColor.WHITE,
}


@dataclass(frozen=True)
class LiturgicalYear:
    ordinal: int
    sunday_cycle: str
    weekday_cycle: str
    easter_date: date


@dataclass(frozen=True)
class SeasonInterval:
    """A season with its concrete boundaries. Both ends are inclusive."""

    name: SeasonName
    color: LiturgicalColor
    start_date: date
    end_date: date

    def __contains__(self, day):
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Celebration:
    name: str
    rank: Rank
    color: LiturgicalColor
    description: str | None = None

    @property
    def has_proper_readings(self):
        return self.rank in (Rank.SOLEMNITY, Rank.FEAST)


@dataclass(frozen=True)
class LiturgicalDay:
    date: date
    season: SeasonInterval
    weekday: str
    color: LiturgicalColor
    liturgical_year: LiturgicalYear
    season_week: int | None = None
    celebrations: tuple = field(default_factory=tuple)
    primary_celebration: Celebration | None = None
