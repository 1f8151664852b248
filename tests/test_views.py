"""Tests for the HTML calendar views."""


def test_index(client):
    rv = client.get("/")
    assert rv.status_code == 200
    assert b"Liturgical Calendar" in rv.data


def test_current_month(client):
    rv = client.get("/calendar/view")
    assert rv.status_code == 200
    assert b"class=\"month\"" in rv.data


def test_month_view_shows_season_codes_and_feasts(client):
    rv = client.get("/calendar/view/2024/3")
    html = rv.get_data(as_text=True)
    assert rv.status_code == 200
    assert "March 2024" in html
    assert "LW04-0Sun" in html
    assert "Easter Sunday" in html
    assert "color-rose" in html


def test_month_grid_starts_on_sunday(app):
    from calendarium.views.routes import month_grid

    with app.app_context():
        weeks = month_grid(2024, 3, "general")
    # March 1st 2024 is a Friday.
    assert weeks[0][0]["info"].date.isoformat() == "2024-02-25"
    assert not weeks[0][0]["in_month"]
    assert all(len(week) == 7 for week in weeks)
    assert weeks[-1][-1]["info"].date.isoformat() == "2024-04-06"


def test_month_navigation_wraps_the_year(client):
    html = client.get("/calendar/view/2024/12").get_data(as_text=True)
    assert "/calendar/view/2025/1" in html
    assert "/calendar/view/2024/11" in html


def test_month_view_region(client):
    html = client.get("/calendar/view/2024/12?region=india").get_data(as_text=True)
    assert "Saint Francis Xavier, priest" in html


def test_invalid_month_is_a_400(client):
    rv = client.get("/calendar/view/2024/13")
    assert rv.status_code == 400
    assert b"Invalid month" in rv.data


def test_invalid_year_is_a_400(client):
    rv = client.get("/calendar/view/1969")
    assert rv.status_code == 400


def test_year_view(client):
    rv = client.get("/calendar/view/2024")
    html = rv.get_data(as_text=True)
    assert rv.status_code == 200
    assert "Liturgical Calendar 2024" in html
    assert "Ordinary Time (Post-Pentecost)" in html
    assert "Nativity of the Lord" in html


def test_html_404(client):
    rv = client.get("/no/such/page")
    assert rv.status_code == 404
    assert b"Page Not Found" in rv.data
