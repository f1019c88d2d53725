"""Fetches daily Mass readings from the USCCB website.

The page is located by date (``MMDDYY.cfm``), downloaded with requests and
parsed with BeautifulSoup.  Any failure is reported as
:class:`ReadingsUnavailable`, which carries placeholder readings the caller
can show instead.
"""

import logging
import re

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..liturgical import get_liturgical_day
from .models import DailyReadings, Reading

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://bible.usccb.org/bible/readings/"
REQUEST_TIMEOUT = 10  # seconds
USER_AGENT = "missal/1.0 (+https://bible.usccb.org)"

# Page names carry a two-digit year, so only one century is addressable.
USCCB_FIRST_YEAR = 2000
USCCB_LAST_YEAR = 2099

RETRY_TOTAL = 3
RETRY_STATUSES = (429, 500, 502, 503, 504)

FIRST_READING = "Reading I"
PSALM = "Responsorial Psalm"
SECOND_READING = "Reading II"
GOSPEL = "Gospel"

# USCCB headings vary between "Reading I" and "Reading 1".
_SECTION_PATTERNS = {
    FIRST_READING: re.compile(r"^\s*reading\s+(?:i|1)\b", re.IGNORECASE),
    PSALM: re.compile(r"^\s*responsorial\s+psalm\b", re.IGNORECASE),
    SECOND_READING: re.compile(r"^\s*reading\s+(?:ii|2)\b", re.IGNORECASE),
    GOSPEL: re.compile(r"^\s*gospel\b", re.IGNORECASE),
}
_RESPONSE_RE = re.compile(r"^R\.\s*(?:\([^)]*\)\s*)?(.+)$")
_TITLE_SUFFIX_RE = re.compile(r"\s*[|-]\s*(?:USCCB|Daily Readings).*$", re.IGNORECASE)
_SAINT_RE = re.compile(r"(?:memorial|feast|solemnity)\s+of\s+(?:saint\s+|st\.\s+)?([^,|]+)", re.IGNORECASE)
_MIN_TEXT_LENGTH = 10


class ReadingsUnavailable(Exception):
    """Raised when readings for a date could not be obtained."""

    def __init__(self, message, fallback):
        super().__init__(message)
        self.fallback = fallback


def usccb_page_name(day):
    return day.strftime("%m%d%y") + ".cfm"


def build_session(retries=RETRY_TOTAL, backoff_factor=0.5):
    """Return a requests session that retries transient upstream errors."""
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def fallback_readings(day):
    """Placeholder readings shown when the source cannot be reached."""
    return DailyReadings(
        date=day.isoformat(),
        liturgical_date="Unable to fetch liturgical information",
        season="Ordinary Time",
        color="Green",
        rank="Weekday",
        first_reading=Reading(
            title="First Reading",
            citation="Unable to fetch",
            text=(
                "Readings are currently unavailable. Please check the USCCB "
                "website directly at bible.usccb.org."
            ),
        ),
        psalm=Reading(
            title="Responsorial Psalm",
            citation="Unable to fetch",
            text="Psalm is currently unavailable.",
            response="Lord, hear our prayer.",
        ),
        gospel=Reading(
            title="Gospel",
            citation="Unable to fetch",
            text="Gospel reading is currently unavailable.",
        ),
    )


def _clean_text(text):
    lines = [re.sub(r"[ \t\xa0]+", " ", line).strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


def _section_container(heading):
    """Return the element holding one reading, given its heading."""
    for parent in heading.parents:
        classes = parent.get("class") or []
        if "b-verse" in classes or "innerblock" in classes:
            return parent
    return heading.parent


def extract_reading(soup, section_title):
    """Pull one reading out of a parsed USCCB page, or None if absent."""
    pattern = _SECTION_PATTERNS[section_title]
    heading = soup.find(["h3", "h4"], string=lambda s: bool(s and pattern.match(s)))
    if heading is None:
        logger.debug("Section %r not found", section_title)
        return None

    container = _section_container(heading)
    link = container.find("a", href=re.compile("bible", re.IGNORECASE))
    citation = link.get_text(strip=True) if link else "Citation not found"

    body = container.find(class_="content-body")
    if body is None:
        # Older markup: everything after the heading up to the next heading
        parts = []
        for sibling in heading.find_next_siblings():
            if sibling.name in ("h3", "h4"):
                break
            if sibling is link or sibling.find("a", href=re.compile("bible", re.IGNORECASE)):
                continue
            parts.append(sibling.get_text("\n"))
        text = _clean_text("\n".join(parts))
    else:
        text = _clean_text(body.get_text("\n"))

    if len(text) < _MIN_TEXT_LENGTH:
        logger.debug("Section %r has no substantial text", section_title)
        return None

    response = None
    if section_title == PSALM:
        for line in text.splitlines():
            match = _RESPONSE_RE.match(line)
            if match:
                response = match.group(1).strip()
                break

    return Reading(title=section_title, citation=citation, text=text, response=response)


def _advisory_rank(title):
    lowered = title.lower()
    if "solemnity" in lowered:
        return "Solemnity"
    if "feast" in lowered:
        return "Feast"
    if "optional memorial" in lowered:
        return "Optional Memorial"
    if "memorial" in lowered:
        return "Memorial"
    return "Weekday"


def parse_readings_page(html, day):
    """Parse a USCCB readings page into :class:`DailyReadings`.

    Raises ValueError when any of the required readings is missing.
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    liturgical_date = _TITLE_SUFFIX_RE.sub("", title_tag.get_text(strip=True)) if title_tag else ""
    liturgical_date = liturgical_date.strip() or "Weekday"
    saint_match = _SAINT_RE.search(liturgical_date)

    first_reading = extract_reading(soup, FIRST_READING)
    psalm = extract_reading(soup, PSALM)
    second_reading = extract_reading(soup, SECOND_READING)
    gospel = extract_reading(soup, GOSPEL)
    if not first_reading or not psalm or not gospel:
        raise ValueError("Missing required readings from USCCB page")

    calendar_day = get_liturgical_day(day)
    return DailyReadings(
        date=day.isoformat(),
        liturgical_date=liturgical_date,
        season=str(calendar_day.season.name),
        color=str(calendar_day.color),
        rank=_advisory_rank(liturgical_date),
        first_reading=first_reading,
        psalm=psalm,
        second_reading=second_reading,
        gospel=gospel,
        saint=saint_match.group(1).strip() if saint_match else None,
    )


class USCCBReadingsProvider:
    """Readings provider backed by bible.usccb.org."""

    def __init__(self, base_url=DEFAULT_BASE_URL, timeout=REQUEST_TIMEOUT, session=None, retries=RETRY_TOTAL):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = session or build_session(retries)
        self.session.headers.update({"User-Agent": USER_AGENT})

    def url_for(self, day):
        return self.base_url + usccb_page_name(day)

    def fetch(self, day):
        """Return :class:`DailyReadings` for *day*.

        Raises :class:`ReadingsUnavailable` on any network or parse failure,
        and for dates outside the years the site can address.
        """
        if not USCCB_FIRST_YEAR <= day.year <= USCCB_LAST_YEAR:
            logger.info("No USCCB readings page for %s", day)
            raise ReadingsUnavailable(
                f"USCCB readings are only published for {USCCB_FIRST_YEAR}-{USCCB_LAST_YEAR}",
                fallback_readings(day),
            )

        url = self.url_for(day)
        logger.info("Fetching USCCB readings from %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Readings fetch failed for %s: %s", day, exc)
            raise ReadingsUnavailable(
                f"Failed to fetch readings from USCCB: {exc}", fallback_readings(day)
            ) from exc

        try:
            readings = parse_readings_page(resp.text, day)
        except ValueError as exc:
            logger.warning("Readings page for %s could not be parsed: %s", day, exc)
            raise ReadingsUnavailable(
                f"Failed to fetch readings from USCCB: {exc}", fallback_readings(day)
            ) from exc

        logger.info("Fetched readings for %s", day)
        return readings
