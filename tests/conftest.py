import pytest

from missal.readings import DailyReadings, Reading, ReadingsUnavailable, fallback_readings
from missal.readings.service import EXTENSION_KEY


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing (session-scoped)."""
    from missal import create_app

    _app = create_app("testing")
    yield _app


@pytest.fixture()
def client(app):
    return app.test_client()


def _make_readings(day, liturgical_date="Tuesday of the Thirty-third Week in Ordinary Time", second_reading=True):
    """Build a DailyReadings value for *day*."""
    return DailyReadings(
        date=day.isoformat(),
        liturgical_date=liturgical_date,
        season="Ordinary Time",
        color="Green",
        rank="Weekday",
        first_reading=Reading(title="Reading I", citation="Is 7:10-14", text="The Lord spoke to Ahaz, saying..."),
        psalm=Reading(
            title="Responsorial Psalm",
            citation="Ps 24:1-2, 3-4, 5-6",
            text="R. Let the Lord enter; he is king of glory.\nThe LORD's are the earth and its fullness;\nthe world and those who dwell in it.",
            response="Let the Lord enter; he is king of glory.",
        ),
        second_reading=(
            Reading(title="Reading II", citation="Rom 1:1-7", text="Paul, a slave of Christ Jesus, called to be an apostle.")
            if second_reading
            else None
        ),
        gospel=Reading(title="Gospel", citation="Mt 1:18-24", text="This is how the birth of Jesus Christ came about."),
    )


class StubProvider:
    """Stands in for the USCCB provider; records requested dates."""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def fetch(self, day):
        self.calls.append(day)
        if self.fail:
            raise ReadingsUnavailable("Failed to fetch readings from USCCB: boom", fallback_readings(day))
        return _make_readings(day)


@pytest.fixture(autouse=True)
def stub_provider(app):
    """Keep every test off the network and start with an empty readings cache."""
    state = app.extensions[EXTENSION_KEY]
    original = state["provider"]
    provider = StubProvider()
    state["provider"] = provider
    state["cache"].clear()
    yield provider
    state["provider"] = original
    state["cache"].clear()


@pytest.fixture()
def failing_provider(stub_provider):
    stub_provider.fail = True
    return stub_provider
