"""Daily Mass readings as returned by a readings provider.

The season/color/rank carried here are advisory; the calendar engine is
the authority for a day's liturgical metadata.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Reading:
    title: str
    citation: str
    text: str
    response: str | None = None


@dataclass(frozen=True)
class DailyReadings:
    date: str
    liturgical_date: str
    season: str
    color: str
    rank: str
    first_reading: Reading
    psalm: Reading
    gospel: Reading
    second_reading: Reading | None = None
    saint: str | None = None

    def to_dict(self):
        return asdict(self)
