import re
from unittest.mock import MagicMock

from app.api.routes.analytics import get_aggregator
from app.core.exceptions import DataAccessError
from app.main import app
from tests.factories import create_access_token, make_booking, make_provider, make_review, make_service, make_user

DASHBOARD_URL = "/analytics/admin/dashboard"
EXPORT_URL = "/analytics/admin/dashboard/export"


def _seed(db):
    x = make_provider(db, name="Xavier", location="NY")
    y = make_provider(db, name="Yara", location="LA")
    a = make_service(db, x, title="Deep clean", price=10.0)
    b = make_service(db, y, title="Boiler fix", price=20.0)
    make_booking(db, a)
    make_booking(db, a)
    make_booking(db, b)
    make_review(db, x, 4)
    make_review(db, y, 5)


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Service Booking Platform API running"}


def test_dashboard_requires_token(client):
    resp = client.get(DASHBOARD_URL)
    assert resp.status_code == 401


def test_dashboard_rejects_bad_token(client):
    resp = client.get(DASHBOARD_URL, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_dashboard_rejects_deleted_admin(client, db):
    ghost = make_user(db, role="admin", is_deleted=True)
    token = create_access_token(ghost.email)
    resp = client.get(DASHBOARD_URL, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_dashboard_is_admin_only(client, db):
    provider = make_provider(db)
    token = create_access_token(provider.email)
    resp = client.get(DASHBOARD_URL, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Admin only"


def test_dashboard_payload_uses_camel_case(client, db, admin_headers):
    _seed(db)

    resp = client.get(DASHBOARD_URL, headers=admin_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"metrics", "topServices", "topProviders", "locationTrends"}
    assert body["metrics"]["totalBookings"] == 3
    assert body["metrics"]["totalRevenue"] == 40.0
    assert body["metrics"]["activeServices"] == 2
    assert body["metrics"]["avgRating"] == 4.5
    assert [s["title"] for s in body["topServices"]] == ["Deep clean", "Boiler fix"]
    assert body["topServices"][0]["bookingCount"] == 2
    assert [p["name"] for p in body["topProviders"]] == ["Yara", "Xavier"]
    assert body["topProviders"][1]["totalEarnings"] == 20.0
    assert body["locationTrends"] == [
        {"location": "NY", "bookingCount": 2},
        {"location": "LA", "bookingCount": 1},
    ]


def test_dashboard_data_access_failure_is_500(client, admin_headers):
    failing = MagicMock()
    failing.compute_dashboard.side_effect = DataAccessError("could not load bookings")
    app.dependency_overrides[get_aggregator] = lambda: failing

    resp = client.get(DASHBOARD_URL, headers=admin_headers)

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to fetch analytics data"}


def test_export_csv(client, db, admin_headers):
    _seed(db)

    resp = client.get(EXPORT_URL, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    disposition = resp.headers["content-disposition"]
    match = re.search(r"Analytics_Report_(\d{4}-\d{2}-\d{2})\.csv", disposition)
    assert match is not None
    today = match.group(1)

    lines = resp.text.splitlines()
    assert lines[0] == f"Analytics Report,{today}"
    assert "Total Revenue,40.0" in lines
    assert "Average Rating,4.50" in lines
    assert lines[lines.index("TOP SERVICES") + 2] == "Deep clean,2"
    assert lines[lines.index("TOP PROVIDERS") + 2] == "Yara,5.00,1,20.0"
    assert lines[lines.index("LOCATION TRENDS") + 1:] == ["Location,Booking Count", "NY,2", "LA,1"]


def test_export_is_admin_only(client, db):
    customer = make_user(db)
    token = create_access_token(customer.email)
    resp = client.get(EXPORT_URL, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
