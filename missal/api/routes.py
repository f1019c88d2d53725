"""Read-only JSON API: liturgical calendar and daily readings."""

import re
from datetime import UTC, date, datetime

from flask import Blueprint, current_app, jsonify

from .. import limiter
from ..liturgical import MAX_YEAR, MIN_YEAR, get_liturgical_day, is_supported_year, month_grid_cells
from ..readings import ReadingsUnavailable, get_readings
from .converters import (
    daily_readings_to_api,
    grid_cell_to_dict,
    liturgical_day_to_dict,
    source_attribution,
)

api_bp = Blueprint("api", __name__)

API_NAME = "Catholic Missal API"
API_VERSION = "1.0.0"
READINGS_RATE_LIMIT = "60 per minute"
FALLBACK_ATTRIBUTION_SUFFIX = " (Fallback readings due to source unavailability)"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

ENDPOINTS = [
    "/api/v1/info",
    "/api/v1/calendar/today",
    "/api/v1/calendar/{date}",
    "/api/v1/calendar/{year}/{month}",
    "/api/v1/readings/today",
    "/api/v1/readings/{date}",
]


class InvalidRequest(ValueError):
    def __init__(self, error, detail):
        super().__init__(detail)
        self.error = error
        self.detail = detail


@api_bp.errorhandler(InvalidRequest)
def _invalid_request(exc):
    return jsonify({"success": False, "error": exc.error, "detail": exc.detail}), 400


def _today():
    return date.today()


def parse_date(date_str):
    """Validate a ``YYYY-MM-DD`` path segment and return the date."""
    if not _DATE_RE.match(date_str or ""):
        raise InvalidRequest(
            "Invalid date format",
            "Date must be in YYYY-MM-DD format (e.g., 2024-12-25)",
        )
    try:
        day = date.fromisoformat(date_str)
    except ValueError:
        raise InvalidRequest("Invalid date", "The provided date is not valid") from None
    if not is_supported_year(day.year):
        raise InvalidRequest(
            "Invalid date",
            f"Year must be between {MIN_YEAR} and {MAX_YEAR}",
        )
    return day


def _calendar_response(day, cacheable):
    response = jsonify({
        "success": True,
        "liturgical_day": liturgical_day_to_dict(get_liturgical_day(day)),
        "source_attribution": source_attribution(),
    })
    if cacheable:
        max_age = current_app.config["CALENDAR_CACHE_MAX_AGE"]
        response.headers["Cache-Control"] = f"public, max-age={max_age}"
    return response


def _readings_response(day):
    attribution = source_attribution()
    try:
        readings, _cached = get_readings(day)
    except ReadingsUnavailable as exc:
        readings = exc.fallback
        attribution += FALLBACK_ATTRIBUTION_SUFFIX

    return jsonify({
        "success": True,
        "readings": daily_readings_to_api(readings),
        "liturgical_day": liturgical_day_to_dict(get_liturgical_day(day)),
        "source_attribution": attribution,
    })


@api_bp.route("/api/v1/info")
def info():
    return jsonify({
        "name": API_NAME,
        "version": API_VERSION,
        "description": (
            "API for Catholic liturgical data including daily Mass readings "
            "and liturgical calendar information."
        ),
        "sources": [
            "USCCB (United States Conference of Catholic Bishops)",
            "Liturgical Calendar Calculations",
        ],
        "endpoints": ENDPOINTS,
    })


@api_bp.route("/api/v1/calendar/today")
def calendar_today():
    return _calendar_response(_today(), cacheable=False)


@api_bp.route("/api/v1/calendar/<date_str>")
def calendar_for_date(date_str):
    return _calendar_response(parse_date(date_str), cacheable=True)


@api_bp.route("/api/v1/calendar/<int:year>/<int:month>")
def calendar_month(year, month):
    if not is_supported_year(year):
        raise InvalidRequest("Invalid year", f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not 1 <= month <= 12:
        raise InvalidRequest("Invalid month", "Month must be between 1 and 12")

    first_of_month = get_liturgical_day(date(year, month, 1))
    response = jsonify({
        "success": True,
        "year": year,
        "month": month,
        "liturgical_year": first_of_month.liturgical_year.ordinal,
        "sunday_cycle": first_of_month.liturgical_year.sunday_cycle,
        "days": [grid_cell_to_dict(cell) for cell in month_grid_cells(year, month)],
    })
    response.headers["Cache-Control"] = f"public, max-age={current_app.config['CALENDAR_CACHE_MAX_AGE']}"
    return response


@api_bp.route("/api/v1/readings/today")
@limiter.limit(READINGS_RATE_LIMIT)
def readings_today():
    return _readings_response(_today())


@api_bp.route("/api/v1/readings/<date_str>")
@limiter.limit(READINGS_RATE_LIMIT)
def readings_for_date(date_str):
    return _readings_response(parse_date(date_str))


@api_bp.route("/api/readings/<date_str>")
@limiter.limit(READINGS_RATE_LIMIT)
def legacy_readings(date_str):
    """Raw provider readings, limited to a window around the current year."""
    if not _DATE_RE.match(date_str):
        return jsonify({"error": "Invalid date format. Use YYYY-MM-DD."}), 400
    try:
        day = date.fromisoformat(date_str)
    except ValueError:
        return jsonify({"error": "Invalid date provided."}), 400

    today = _today()
    window = current_app.config["READINGS_RANGE_YEARS"]
    min_date = date(today.year - window, 1, 1)
    max_date = date(today.year + window, 12, 31)
    if not min_date <= day <= max_date:
        return jsonify({
            "error": "Date is outside the available liturgical range.",
            "availableRange": {"start": min_date.isoformat(), "end": max_date.isoformat()},
        }), 400

    try:
        readings, cached = get_readings(day)
    except ReadingsUnavailable as exc:
        return jsonify({"error": str(exc), "fallback": exc.fallback.to_dict(), "cached": False}), 500

    response = jsonify({
        "readings": readings.to_dict(),
        "cached": cached,
        "timestamp": datetime.now(UTC).isoformat(),
    })
    response.headers["Cache-Control"] = "public, s-maxage=3600, stale-while-revalidate=86400"
    return response
