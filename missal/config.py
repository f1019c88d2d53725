import os


def _env_flag(name, default):
    return os.environ.get(name, default).lower() == "true"


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or os.urandom(32).hex()
    SITE_NAME = os.environ.get("SITE_NAME", "Catholic Missal")
    JSON_SORT_KEYS = False

    # Security
    TRUST_PROXY = _env_flag("TRUST_PROXY", "false")

    # Rate limiting
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "300 per hour")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")

    # Readings provider
    READINGS_SOURCE_URL = os.environ.get("READINGS_SOURCE_URL", "https://bible.usccb.org/bible/readings/")
    READINGS_REQUEST_TIMEOUT_SECONDS = int(os.environ.get("READINGS_REQUEST_TIMEOUT_SECONDS", "10"))
    READINGS_MAX_RETRIES = int(os.environ.get("READINGS_MAX_RETRIES", "3"))
    READINGS_CACHE_TTL_SECONDS = int(os.environ.get("READINGS_CACHE_TTL_SECONDS", str(24 * 3600)))
    READINGS_ERROR_TTL_SECONDS = int(os.environ.get("READINGS_ERROR_TTL_SECONDS", str(30 * 60)))
    READINGS_CACHE_MAX_ENTRIES = int(os.environ.get("READINGS_CACHE_MAX_ENTRIES", "512"))
    READINGS_RANGE_YEARS = int(os.environ.get("READINGS_RANGE_YEARS", "2"))

    # Calendar responses are deterministic per date
    CALENDAR_CACHE_MAX_AGE = int(os.environ.get("CALENDAR_CACHE_MAX_AGE", str(24 * 3600)))

    # Scheduler
    SCHEDULER_ENABLED = _env_flag("SCHEDULER_ENABLED", "true")
    SCHEDULER_PREFETCH_INTERVAL_MINUTES = int(os.environ.get("SCHEDULER_PREFETCH_INTERVAL_MINUTES", "60"))
    SCHEDULER_MAX_CONSECUTIVE_FAILURES = int(os.environ.get("SCHEDULER_MAX_CONSECUTIVE_FAILURES", "3"))


class DevelopmentConfig(Config):
    DEBUG = True

    @classmethod
    def init_app(cls, app):
        if not os.environ.get("SECRET_KEY"):
            app.logger.warning("SECRET_KEY not set; using an ephemeral key.")


class ProductionConfig(Config):
    DEBUG = False
    TRUST_PROXY = _env_flag("TRUST_PROXY", "true")

    @classmethod
    def init_app(cls, app):
        secret_key = os.environ.get("SECRET_KEY", "").strip()
        if not secret_key:
            raise RuntimeError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise RuntimeError(
                "SECRET_KEY is too short for production (minimum 32 characters). "
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )
        lowered_secret = secret_key.lower()
        weak_markers = ("changeme", "change-this", "replace", "secret", "example", "default")
        if any(marker in lowered_secret for marker in weak_markers):
            raise RuntimeError(
                "SECRET_KEY appears to be a placeholder and is not allowed in production. "
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )

        # The readings cache, the prefetch scheduler and the limiter state all
        # live in process memory; more than one worker would split them.
        web_concurrency = os.environ.get("WEB_CONCURRENCY")
        if web_concurrency:
            try:
                worker_count = int(web_concurrency)
            except ValueError as exc:
                raise RuntimeError("WEB_CONCURRENCY must be an integer when set.") from exc
            if worker_count <= 0:
                raise RuntimeError("WEB_CONCURRENCY must be at least 1 when set.")
        else:
            worker_count = 1

        if worker_count > 1:
            raise RuntimeError(
                f"WEB_CONCURRENCY is set to {web_concurrency} but this application "
                "requires a single worker (in-process cache and scheduler). "
                "Set WEB_CONCURRENCY=1 or remove it."
            )


class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    SCHEDULER_ENABLED = False
    SERVER_NAME = "localhost"
    SECRET_KEY = "testing-secret-key"
    READINGS_SOURCE_URL = "https://readings.test/bible/readings/"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
