"""Configuration hardening tests."""

import pytest

from calendarium.config import Config, ProductionConfig

STRONG_KEY = "StrongProductionKey0123456789ABCDEF"


class _DummyApp:
    def __init__(self, **overrides):
        self.config = {
            "CALENDAR_MIN_YEAR": Config.CALENDAR_MIN_YEAR,
            "CALENDAR_MAX_YEAR": Config.CALENDAR_MAX_YEAR,
            "CALENDAR_REGIONS": ("general", "india"),
            "CALENDAR_DEFAULT_REGION": "general",
            "RATELIMIT_STORAGE_URI": "memory://",
        }
        self.config.update(overrides)


@pytest.fixture()
def production_env(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", STRONG_KEY)
    monkeypatch.delenv("WEB_CONCURRENCY", raising=False)


def test_production_accepts_valid_settings(production_env):
    # Should not raise.
    ProductionConfig.init_app(_DummyApp())


def test_production_requires_secret_key(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError, match="SECRET_KEY environment variable must be set"):
        ProductionConfig.init_app(_DummyApp())


def test_production_rejects_short_secret_key(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "too-short")
    with pytest.raises(RuntimeError, match="SECRET_KEY is too short"):
        ProductionConfig.init_app(_DummyApp())


def test_production_rejects_inverted_year_bounds(production_env):
    with pytest.raises(RuntimeError, match="CALENDAR_MIN_YEAR"):
        ProductionConfig.init_app(_DummyApp(CALENDAR_MIN_YEAR=2100, CALENDAR_MAX_YEAR=1970))


def test_production_rejects_pre_gregorian_years(production_env):
    with pytest.raises(RuntimeError, match="within 1583-9999"):
        ProductionConfig.init_app(_DummyApp(CALENDAR_MIN_YEAR=1500))


def test_production_rejects_unknown_default_region(production_env):
    with pytest.raises(RuntimeError, match="CALENDAR_DEFAULT_REGION"):
        ProductionConfig.init_app(_DummyApp(CALENDAR_DEFAULT_REGION="atlantis"))


def test_production_rejects_non_integer_web_concurrency(production_env, monkeypatch):
    monkeypatch.setenv("WEB_CONCURRENCY", "many")
    with pytest.raises(RuntimeError, match="WEB_CONCURRENCY must be an integer"):
        ProductionConfig.init_app(_DummyApp())


def test_production_rejects_zero_web_concurrency(production_env, monkeypatch):
    monkeypatch.setenv("WEB_CONCURRENCY", "0")
    with pytest.raises(RuntimeError, match="WEB_CONCURRENCY must be at least 1"):
        ProductionConfig.init_app(_DummyApp())


def test_production_rejects_workers_with_memory_rate_limits(production_env, monkeypatch):
    monkeypatch.setenv("WEB_CONCURRENCY", "4")
    with pytest.raises(RuntimeError, match="in-memory"):
        ProductionConfig.init_app(_DummyApp())


def test_production_allows_workers_with_shared_rate_limits(production_env, monkeypatch):
    monkeypatch.setenv("WEB_CONCURRENCY", "4")
    ProductionConfig.init_app(_DummyApp(RATELIMIT_STORAGE_URI="redis://localhost:6379"))


def test_testing_config(app):
    assert app.config["TESTING"] is True
    assert app.config["RATELIMIT_ENABLED"] is False
    assert app.config["LOG_TO_FILE"] is False
