import logging
import os
import secrets
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, g
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

from .config import config_by_name

# In-memory storage; counters reset on process restart. Acceptable for the
# single-worker deployment. For multi-worker setups use Redis storage.
limiter = Limiter(key_func=get_remote_address)
csrf = CSRFProtect()


def create_app(config_name=None):
    # Load .env so gunicorn (production) picks up env vars too
    from dotenv import load_dotenv

    load_dotenv(Path(__file__).resolve().parent.parent / ".env")

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    config_cls = config_by_name.get(config_name, config_by_name["development"])
    app.config.from_object(config_cls)
    if hasattr(config_cls, "init_app"):
        config_cls.init_app(app)

    if app.config.get("TRUST_PROXY"):
        from werkzeug.middleware.proxy_fix import ProxyFix

        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    _configure_logging(app)

    # Init extensions
    limiter.init_app(app)
    csrf.init_app(app)

    from .readings import init_readings

    init_readings(app)

    # Register blueprints
    from .api.routes import api_bp
    from .main.routes import main_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)
    # The API is read-only and token-free
    csrf.exempt(api_bp)

    from .errors import register_error_handlers

    register_error_handlers(app)

    # Generate a per-request CSP nonce for inline scripts that need template vars
    @app.before_request
    def generate_csp_nonce():
        g.csp_nonce = secrets.token_urlsafe(16)

    # Security headers
    @app.after_request
    def set_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not app.debug:
            nonce = getattr(g, "csp_nonce", "")
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                f"script-src 'self' 'nonce-{nonce}'; "
                f"style-src 'self' 'nonce-{nonce}'; "
                "img-src 'self' data:; "
                "connect-src 'self'; "
                "frame-ancestors 'self'; "
                "object-src 'none'; "
                "base-uri 'self'; "
                "form-action 'self'"
            )
        return response

    @app.context_processor
    def inject_site_branding():
        return {
            "site_name": app.config["SITE_NAME"],
            "csp_nonce": getattr(g, "csp_nonce", ""),
        }

    # Start scheduler for readings prefetch
    if app.config.get("SCHEDULER_ENABLED"):
        from .readings.scheduler import init_scheduler

        init_scheduler(app)

    # Health check endpoints
    @app.route("/ping")
    def ping():
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
        }, 200

    @app.route("/health")
    def health():
        from .readings.service import get_cache

        result = {"timestamp": datetime.now(UTC).isoformat()}
        result["readings_cache"] = {"entries": len(get_cache())}

        scheduler_ok = True
        scheduler = getattr(app, "scheduler", None)
        if scheduler is not None:
            try:
                running = scheduler.running
                jobs = []
                for job in scheduler.get_jobs():
                    jobs.append({
                        "id": job.id,
                        "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
                    })
            except Exception:
                app.logger.exception("Health check scheduler probe failed.")
                result["scheduler"] = {"running": False, "reason": "probe_failed"}
                scheduler_ok = False
            else:
                failing_jobs = _failing_jobs(app)
                result["scheduler"] = {"running": running, "jobs": jobs, "failing_jobs": failing_jobs}
                scheduler_ok = running and not failing_jobs
        else:
            result["scheduler"] = {"running": False, "reason": "disabled"}

        result["status"] = "ok" if scheduler_ok else "degraded"
        return result, 200 if scheduler_ok else 503

    return app


def _failing_jobs(app):
    """Return ids of scheduler jobs at or past the consecutive-failure threshold."""
    threshold = max(1, int(app.config.get("SCHEDULER_MAX_CONSECUTIVE_FAILURES", 3)))
    state = getattr(app, "scheduler_state", None) or {}
    lock = getattr(app, "scheduler_state_lock", None)
    if lock is not None:
        with lock:
            jobs = dict(state.get("jobs", {}))
    else:
        jobs = dict(state.get("jobs", {}))
    return sorted(
        job_id for job_id, entry in jobs.items()
        if int(entry.get("consecutive_failures", 0)) >= threshold
    )


def _configure_logging(app):
    """Set up file-based logging with rotation for production."""
    if app.debug or app.testing:
        return

    log_dir = Path(app.root_path).parent / "logs"
    log_dir.mkdir(exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / "missal.log",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=5,
    )
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
