import pytest

from calendarium.liturgical import LiturgicalDayResolver


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing (session-scoped)."""
    from calendarium import create_app

    _app = create_app("testing")
    yield _app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture(scope="session")
def resolver():
    """Resolver over the bundled general and India tables."""
    return LiturgicalDayResolver()


def _write_table(path, records):
    """Write a feast table for loader tests. Callable multiple times per test."""
    import json

    path.write_text(json.dumps(records), encoding="utf-8")
    return path
