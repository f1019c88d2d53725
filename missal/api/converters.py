"""Conversions from engine and provider types to the public API shape."""

from datetime import UTC, datetime

USCCB_SOURCE = "USCCB (United States Conference of Catholic Bishops)"
CALENDAR_SOURCE = "Internal liturgical calendar calculations"
SHORT_TEXT_LIMIT = 500


def _utcnow_iso():
    return datetime.now(UTC).isoformat()


def celebration_to_dict(celebration):
    data = {
        "name": celebration.name,
        "rank": str(celebration.rank),
        "color": str(celebration.color),
        "proper_readings": celebration.has_proper_readings,
    }
    if celebration.description:
        data["description"] = celebration.description
    return data


def liturgical_day_to_dict(day, now=None):
    """Serialize a :class:`LiturgicalDay` for the calendar API."""
    data = {
        "date": day.date.isoformat(),
        "season": str(day.season.name),
        "weekday": day.weekday,
        "celebrations": [celebration_to_dict(c) for c in day.celebrations],
        "color": str(day.color),
        "liturgical_year": {
            "year": day.liturgical_year.ordinal,
            "sunday_cycle": day.liturgical_year.sunday_cycle,
            "weekday_cycle": day.liturgical_year.weekday_cycle,
            "easter": day.liturgical_year.easter_date.isoformat(),
        },
        "season_start": day.season.start_date.isoformat(),
        "season_end": day.season.end_date.isoformat(),
        "source": CALENDAR_SOURCE,
        "last_updated": now or _utcnow_iso(),
    }
    if day.season_week is not None:
        data["season_week"] = day.season_week
    if day.primary_celebration is not None:
        data["primary_celebration"] = celebration_to_dict(day.primary_celebration)
    return data


def reading_to_api(reading):
    return {
        "reference": reading.citation,
        "citation": reading.citation,
        "text": reading.text,
        "short_text": (reading.text[:SHORT_TEXT_LIMIT] + "...") if len(reading.text) > SHORT_TEXT_LIMIT else None,
        "source": USCCB_SOURCE,
    }


def psalm_to_api(psalm):
    return {
        "reference": psalm.citation,
        "citation": psalm.citation,
        "text": psalm.text,
        "refrain": psalm.response,
        "verses": [line for line in psalm.text.split("\n") if line.strip() and not line.startswith("R.")],
        "source": USCCB_SOURCE,
    }


def daily_readings_to_api(readings, now=None):
    return {
        "date": readings.date,
        "first_reading": reading_to_api(readings.first_reading),
        "responsorial_psalm": psalm_to_api(readings.psalm),
        "second_reading": reading_to_api(readings.second_reading) if readings.second_reading else None,
        # Not extracted from the USCCB page
        "gospel_acclamation": None,
        "gospel": reading_to_api(readings.gospel),
        "source": USCCB_SOURCE,
        "last_updated": now or _utcnow_iso(),
    }


def liturgical_day_with_readings(day, readings):
    data = liturgical_day_to_dict(day)
    data["readings"] = daily_readings_to_api(readings)
    return data


def grid_cell_to_dict(cell):
    return {
        "date": cell["date"].isoformat(),
        "in_month": cell["in_month"],
        "season": str(cell["season"]),
        "color": str(cell["color"]),
    }


def source_attribution():
    return (
        "Readings sourced from USCCB (United States Conference of Catholic Bishops) "
        "and other official Catholic sources. Liturgical calendar calculations based on "
        "official Church documents. Used in accordance with fair use and educational purposes. "
        "For commercial use, please ensure proper licensing."
    )
