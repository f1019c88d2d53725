"""Tests for scheduler initialization and in-memory job telemetry."""

from datetime import UTC, date, datetime

import pytest


class _FakeJob:
    def __init__(self, job_id):
        self.id = job_id
        self.next_run_time = datetime.now(UTC)


class _FakeScheduler:
    def __init__(self):
        self.jobs = {}
        self.running = False

    def add_job(self, func, trigger, id, **kwargs):
        self.jobs[id] = {
            "func": func,
            "trigger": trigger,
            "id": id,
            "kwargs": kwargs,
        }

    def start(self):
        self.running = True

    def get_jobs(self):
        return [_FakeJob(job_id) for job_id in self.jobs]


@pytest.fixture(autouse=True)
def _restore_scheduler_attrs(app):
    saved = {name: getattr(app, name) for name in ("scheduler", "scheduler_state", "scheduler_state_lock") if hasattr(app, name)}
    yield
    for name in ("scheduler", "scheduler_state", "scheduler_state_lock"):
        if name in saved:
            setattr(app, name, saved[name])
        elif hasattr(app, name):
            delattr(app, name)


@pytest.fixture()
def fake_scheduler(monkeypatch):
    from missal.readings import scheduler as scheduler_module

    scheduler = _FakeScheduler()
    monkeypatch.setattr(scheduler_module, "BackgroundScheduler", lambda: scheduler)
    return scheduler


def test_init_scheduler_registers_prefetch_job(app, fake_scheduler):
    from missal.readings.scheduler import init_scheduler

    init_scheduler(app)

    assert app.scheduler is fake_scheduler
    assert app.scheduler.running is True
    assert set(fake_scheduler.jobs) == {"prefetch_readings"}
    job = fake_scheduler.jobs["prefetch_readings"]
    assert job["trigger"] == "interval"
    assert job["kwargs"]["minutes"] == 60
    assert job["kwargs"]["max_instances"] == 1
    assert job["kwargs"]["coalesce"] is True


def test_prefetch_job_success_updates_state(app, fake_scheduler, stub_provider):
    from missal.readings.scheduler import init_scheduler
    from missal.readings.service import get_cache

    init_scheduler(app)
    fake_scheduler.jobs["prefetch_readings"]["func"]()

    state = app.scheduler_state["jobs"]["prefetch_readings"]
    assert state["last_status"] == "ok"
    assert state["consecutive_failures"] == 0
    assert state["last_success_at"] is not None
    assert isinstance(state["last_duration_ms"], float)

    today = date.today()
    assert today in stub_provider.calls
    with app.app_context():
        assert len(get_cache()) == 2


def test_prefetch_job_failure_increments_counter(app, fake_scheduler, failing_provider):
    from missal.readings.scheduler import init_scheduler
    from missal.readings.service import get_cache

    init_scheduler(app)
    fake_scheduler.jobs["prefetch_readings"]["func"]()
    # Failures are cached, so clear between runs to force a refetch
    with app.app_context():
        get_cache().clear()
    fake_scheduler.jobs["prefetch_readings"]["func"]()

    state = app.scheduler_state["jobs"]["prefetch_readings"]
    assert state["last_status"] == "error"
    assert state["consecutive_failures"] == 2
    assert state["last_error"] == "Prefetched 0 of 2 days"


def test_prefetch_recovery_resets_counter(app, fake_scheduler, stub_provider):
    from missal.readings.scheduler import init_scheduler
    from missal.readings.service import get_cache

    init_scheduler(app)
    stub_provider.fail = True
    fake_scheduler.jobs["prefetch_readings"]["func"]()
    stub_provider.fail = False
    with app.app_context():
        get_cache().clear()
    fake_scheduler.jobs["prefetch_readings"]["func"]()

    state = app.scheduler_state["jobs"]["prefetch_readings"]
    assert state["last_status"] == "ok"
    assert state["consecutive_failures"] == 0
    assert state["last_error"] is None
