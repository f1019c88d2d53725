import threading
import time
from datetime import UTC, date, datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler

PREFETCH_JOB_ID = "prefetch_readings"


def prefetch_upcoming():
    """Fetch today's and tomorrow's readings into the cache."""
    from .service import prefetch_readings

    today = date.today()
    days = [today, today + timedelta(days=1)]
    fetched = prefetch_readings(days)
    if fetched < len(days):
        raise RuntimeError(f"Prefetched {fetched} of {len(days)} days")


def init_scheduler(app):
    scheduler = BackgroundScheduler()
    prefetch_interval_minutes = max(1, int(app.config.get("SCHEDULER_PREFETCH_INTERVAL_MINUTES", 60)))
    state_lock = threading.Lock()
    app.scheduler_state_lock = state_lock
    app.scheduler_state = {"updated_at": None, "jobs": {}}

    def _record_job_result(job_id, *, status, duration_ms, error=None):
        now = datetime.now(UTC).isoformat()
        with state_lock:
            jobs = app.scheduler_state.setdefault("jobs", {})
            entry = jobs.setdefault(job_id, {"consecutive_failures": 0})
            entry["last_status"] = status
            entry["last_run_at"] = now
            entry["last_duration_ms"] = round(duration_ms, 2)
            if status == "ok":
                entry["last_success_at"] = now
                entry["last_error"] = None
                entry["consecutive_failures"] = 0
            else:
                entry["last_error_at"] = now
                entry["last_error"] = (error or "unknown")[:500]
                entry["consecutive_failures"] = int(entry.get("consecutive_failures", 0)) + 1
            app.scheduler_state["updated_at"] = now

    def _run_job(job_id, fn, *, success_log_message):
        started = time.perf_counter()
        try:
            fn()
        except Exception as exc:
            # Scheduler jobs must never crash the scheduler thread.
            app.logger.exception("Scheduler job %s failed.", job_id)
            _record_job_result(
                job_id,
                status="error",
                duration_ms=(time.perf_counter() - started) * 1000,
                error=str(exc) or "Unhandled exception",
            )
            return

        duration_ms = (time.perf_counter() - started) * 1000
        _record_job_result(job_id, status="ok", duration_ms=duration_ms)
        app.logger.info(success_log_message, duration_ms)

    def run_prefetch():
        with app.app_context():
            _run_job(
                PREFETCH_JOB_ID,
                prefetch_upcoming,
                success_log_message="Scheduler job prefetch_readings completed in %.2f ms.",
            )

    scheduler.add_job(
        func=run_prefetch,
        trigger="interval",
        minutes=prefetch_interval_minutes,
        id=PREFETCH_JOB_ID,
        next_run_time=datetime.now(UTC),
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    app.scheduler = scheduler
