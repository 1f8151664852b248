"""Security header tests."""


def test_pages_include_security_headers(client):
    rv = client.get("/calendar/view/2024/1")
    assert rv.status_code == 200
    assert rv.headers.get("X-Content-Type-Options") == "nosniff"
    assert rv.headers.get("X-Frame-Options") == "SAMEORIGIN"
    assert rv.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"
    csp = rv.headers.get("Content-Security-Policy", "")
    assert "script-src 'self' 'nonce-" in csp


def test_csp_nonce_changes_per_request(client):
    first = client.get("/ping").headers["Content-Security-Policy"]
    second = client.get("/ping").headers["Content-Security-Policy"]
    assert first != second
