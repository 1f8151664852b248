import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _regions_from_env():
    raw = os.environ.get("CALENDAR_REGIONS", "general,india")
    return tuple(region.strip().lower() for region in raw.split(",") if region.strip())


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or os.urandom(32).hex()

    # Calendar engine
    CALENDAR_REGIONS = _regions_from_env()
    CALENDAR_DEFAULT_REGION = os.environ.get("CALENDAR_DEFAULT_REGION", "general").strip().lower()
    CALENDAR_MIN_YEAR = int(os.environ.get("CALENDAR_MIN_YEAR", "1970"))
    CALENDAR_MAX_YEAR = int(os.environ.get("CALENDAR_MAX_YEAR", "2100"))
    CALENDAR_MAX_RANGE_DAYS = int(os.environ.get("CALENDAR_MAX_RANGE_DAYS", "366"))
    CALENDAR_MAX_WORKERS = int(os.environ.get("CALENDAR_MAX_WORKERS", "1"))
    FEAST_DATA_DIR = os.environ.get("FEAST_DATA_DIR") or None

    # Rate limiting
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "200 per hour")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")

    # Logging
    LOG_TO_FILE = os.environ.get("LOG_TO_FILE", "true").lower() == "true"
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))

    # Branding
    SITE_NAME = os.environ.get("SITE_NAME", "Calendarium")


class DevelopmentConfig(Config):
    DEBUG = True

    @classmethod
    def init_app(cls, app):
        if not os.environ.get("SECRET_KEY"):
            app.logger.warning("SECRET_KEY not set, using an ephemeral key.")


class ProductionConfig(Config):
    DEBUG = False

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

        min_year = app.config["CALENDAR_MIN_YEAR"]
        max_year = app.config["CALENDAR_MAX_YEAR"]
        if not 1583 <= min_year <= max_year <= 9999:
            raise RuntimeError(
                f"CALENDAR_MIN_YEAR/CALENDAR_MAX_YEAR ({min_year}-{max_year}) must be an "
                "ascending range within 1583-9999."
            )

        regions = app.config["CALENDAR_REGIONS"]
        if app.config["CALENDAR_DEFAULT_REGION"] not in regions:
            raise RuntimeError(
                f"CALENDAR_DEFAULT_REGION {app.config['CALENDAR_DEFAULT_REGION']!r} "
                f"is not one of CALENDAR_REGIONS ({', '.join(regions)})."
            )

        # In-memory limiter counters are per process; more than one worker
        # would split them.
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

        if worker_count > 1 and app.config["RATELIMIT_STORAGE_URI"].startswith("memory://"):
            raise RuntimeError(
                f"WEB_CONCURRENCY is set to {web_concurrency} but rate limiting uses in-memory "
                "storage. Set RATELIMIT_STORAGE_URI to a shared backend or use a single worker."
            )


class TestingConfig(Config):
    TESTING = True
    RATELIMIT_ENABLED = False
    LOG_TO_FILE = False
    CALENDAR_REGIONS = ("general", "india")
    CALENDAR_DEFAULT_REGION = "general"
    CALENDAR_MAX_WORKERS = 1
    FEAST_DATA_DIR = None
    SERVER_NAME = "localhost"
    SECRET_KEY = "testing-secret-key"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
