from .models import DailyReadings, Reading
from .provider import ReadingsUnavailable, USCCBReadingsProvider, fallback_readings
from .service import get_readings, init_readings

__all__ = [
    "DailyReadings",
    "Reading",
    "ReadingsUnavailable",
    "USCCBReadingsProvider",
    "fallback_readings",
    "get_readings",
    "init_readings",
]
