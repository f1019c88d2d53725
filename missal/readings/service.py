"""Cached access to the configured readings provider.

Readings change at most once per day, so each result is kept in a
process-local cache.  Failures are cached too, for a shorter time, so a
struggling upstream site is not hammered on every page view.
"""

import logging
import threading
import time
from typing import NamedTuple

from flask import current_app

from .provider import ReadingsUnavailable, USCCBReadingsProvider

logger = logging.getLogger(__name__)

EXTENSION_KEY = "missal.readings"


class FailedFetch(NamedTuple):
    """A provider failure as stored in the cache."""

    message: str
    fallback: object


class ReadingsCache:
    """Thread-safe TTL cache keyed by date."""

    def __init__(self, max_entries=512, clock=time.monotonic):
        self.max_entries = max_entries
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, key):
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= now:
                del self._entries[key]
                return None
            return value

    def set(self, key, value, ttl):
        now = self._clock()
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                self._evict(now)
            self._entries[key] = (now + ttl, value)

    def _evict(self, now):
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]
        if len(self._entries) >= self.max_entries:
            # Drop the entry closest to expiry
            oldest = min(self._entries, key=lambda k: self._entries[k][0])
            del self._entries[oldest]

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)


def init_readings(app):
    """Attach a provider and cache to *app*."""
    provider = USCCBReadingsProvider(
        base_url=app.config["READINGS_SOURCE_URL"],
        timeout=app.config["READINGS_REQUEST_TIMEOUT_SECONDS"],
        retries=app.config["READINGS_MAX_RETRIES"],
    )
    cache = ReadingsCache(max_entries=app.config["READINGS_CACHE_MAX_ENTRIES"])
    app.extensions[EXTENSION_KEY] = {"provider": provider, "cache": cache}


def _state():
    return current_app.extensions[EXTENSION_KEY]


def get_cache():
    return _state()["cache"]


def get_readings(day):
    """Return ``(readings, cached)`` for *day*.

    Raises :class:`ReadingsUnavailable` (possibly replayed from the cache)
    when the provider could not deliver; its ``fallback`` attribute holds
    placeholder readings.
    """
    state = _state()
    cache = state["cache"]
    key = day.isoformat()

    cached = cache.get(key)
    if cached is not None:
        logger.debug("Using cached readings for %s", key)
        if isinstance(cached, FailedFetch):
            raise ReadingsUnavailable(cached.message, cached.fallback)
        return cached, True

    try:
        readings = state["provider"].fetch(day)
    except ReadingsUnavailable as exc:
        cache.set(key, FailedFetch(str(exc), exc.fallback), current_app.config["READINGS_ERROR_TTL_SECONDS"])
        raise

    cache.set(key, readings, current_app.config["READINGS_CACHE_TTL_SECONDS"])
    return readings, False


def prefetch_readings(days):
    """Warm the cache for *days*.  Returns the number fetched successfully."""
    fetched = 0
    for day in days:
        try:
            get_readings(day)
        except ReadingsUnavailable:
            continue
        fetched += 1
    return fetched
