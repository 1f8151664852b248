import logging
import os
import secrets
from datetime import UTC
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import config_by_name
from .liturgical import LiturgicalDayResolver

# In-memory storage by default; counters reset on process restart. For
# multi-worker setups point RATELIMIT_STORAGE_URI at Redis.
limiter = Limiter(key_func=get_remote_address)

EXTENSION_KEY = "calendarium"


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

    from werkzeug.middleware.proxy_fix import ProxyFix

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    _configure_logging(app)

    limiter.init_app(app)

    resolver = LiturgicalDayResolver(
        regions=app.config["CALENDAR_REGIONS"],
        data_dir=app.config["FEAST_DATA_DIR"],
        max_workers=app.config["CALENDAR_MAX_WORKERS"],
    )
    app.extensions[EXTENSION_KEY] = resolver
    for region, reasons in resolver.degraded.items():
        app.logger.warning("Feast tables for %s are degraded: %s", region, "; ".join(reasons))

    # Register blueprints
    from .api.routes import api_bp, docs_bp
    from .views.routes import views_bp

    app.register_blueprint(api_bp, url_prefix="/api/calendar")
    app.register_blueprint(docs_bp, url_prefix="/api")
    app.register_blueprint(views_bp)

    # Register error handlers
    from .errors import register_error_handlers

    register_error_handlers(app)

    from .commands import register_commands

    register_commands(app)

    # Generate a per-request CSP nonce for inline scripts that need template vars
    @app.before_request
    def generate_csp_nonce():
        from flask import g

        g.csp_nonce = secrets.token_urlsafe(16)

    # Security headers
    @app.after_request
    def set_security_headers(response):
        from flask import g

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
    def inject_site_context():
        from flask import g

        return {
            "site_name": app.config["SITE_NAME"],
            "csp_nonce": getattr(g, "csp_nonce", ""),
        }

    # Health check endpoints
    @app.route("/ping")
    def ping():
        from datetime import datetime

        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
        }, 200

    @app.route("/health")
    def health():
        from datetime import datetime

        result = {"timestamp": datetime.now(UTC).isoformat()}

        degraded = current_resolver().degraded
        result["feastTables"] = {
            "regions": list(current_resolver().regions),
            "degraded": degraded,
        }

        all_ok = not degraded
        result["status"] = "ok" if all_ok else "degraded"
        return result, 200 if all_ok else 503

    return app


def current_resolver():
    """The LiturgicalDayResolver of the running application."""
    return current_app.extensions[EXTENSION_KEY]


def _configure_logging(app):
    """Set up file-based logging with rotation for production."""
    if app.debug or not app.config.get("LOG_TO_FILE"):
        return

    log_dir = Path(app.config["LOG_DIR"])
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / "calendarium.log",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=5,
    )
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
