"""Tests for /ping and /health endpoints."""

from datetime import date


def test_ping_returns_200(client):
    rv = client.get("/ping")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["status"] == "ok"


def test_ping_content_type_is_json(client):
    rv = client.get("/ping")
    assert rv.content_type.startswith("application/json")


def test_health_scheduler_disabled(client):
    rv = client.get("/health")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["status"] == "ok"
    assert data["scheduler"]["running"] is False
    assert data["scheduler"]["reason"] == "disabled"


def test_health_reports_readings_cache_size(app, client):
    from missal.readings import get_readings

    with app.app_context():
        get_readings(date(2024, 12, 3))

    data = client.get("/health").get_json()
    assert data["readings_cache"]["entries"] == 1


def test_health_scheduler_failure_threshold_marks_degraded(app, client, monkeypatch):
    class _DummyJob:
        id = "prefetch_readings"
        next_run_time = None

    class _DummyScheduler:
        running = True

        @staticmethod
        def get_jobs():
            return [_DummyJob()]

    monkeypatch.setitem(app.config, "SCHEDULER_MAX_CONSECUTIVE_FAILURES", 3)
    monkeypatch.setattr(app, "scheduler", _DummyScheduler(), raising=False)
    monkeypatch.setattr(app, "scheduler_state_lock", None, raising=False)
    monkeypatch.setattr(
        app,
        "scheduler_state",
        {
            "updated_at": "2026-02-10T00:00:00+00:00",
            "jobs": {
                "prefetch_readings": {
                    "last_status": "error",
                    "last_run_at": "2026-02-10T00:00:00+00:00",
                    "last_error": "Prefetched 0 of 2 days",
                    "consecutive_failures": 3,
                }
            },
        },
        raising=False,
    )

    rv = client.get("/health")
    data = rv.get_json()
    assert rv.status_code == 503
    assert data["status"] == "degraded"
    assert data["scheduler"]["running"] is True
    assert data["scheduler"]["failing_jobs"] == ["prefetch_readings"]


def test_health_scheduler_below_failure_threshold_is_ok(app, client, monkeypatch):
    class _DummyJob:
        id = "prefetch_readings"
        next_run_time = None

    class _DummyScheduler:
        running = True

        @staticmethod
        def get_jobs():
            return [_DummyJob()]

    monkeypatch.setitem(app.config, "SCHEDULER_MAX_CONSECUTIVE_FAILURES", 3)
    monkeypatch.setattr(app, "scheduler", _DummyScheduler(), raising=False)
    monkeypatch.setattr(app, "scheduler_state_lock", None, raising=False)
    monkeypatch.setattr(
        app,
        "scheduler_state",
        {
            "updated_at": "2026-02-10T00:00:00+00:00",
            "jobs": {
                "prefetch_readings": {
                    "last_status": "error",
                    "last_run_at": "2026-02-10T00:00:00+00:00",
                    "last_error": "temporary timeout",
                    "consecutive_failures": 2,
                }
            },
        },
        raising=False,
    )

    rv = client.get("/health")
    data = rv.get_json()
    assert rv.status_code == 200
    assert data["status"] == "ok"
    assert data["scheduler"]["failing_jobs"] == []
    assert data["scheduler"]["jobs"] == [{"id": "prefetch_readings", "next_run": None}]


def test_health_scheduler_probe_failure_is_sanitized(app, client, monkeypatch):
    class _BrokenScheduler:
        @property
        def running(self):
            raise RuntimeError("scheduler probe crash")

    monkeypatch.setattr(app, "scheduler", _BrokenScheduler(), raising=False)

    rv = client.get("/health")
    data = rv.get_json()
    assert rv.status_code == 503
    assert data["status"] == "degraded"
    assert data["scheduler"]["reason"] == "probe_failed"
