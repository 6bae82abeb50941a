from __future__ import annotations

from datetime import date

from app.auth.jwt import create_access_token
from app.core.config import get_config
from app.models import LeadStatus

API = "/api/v1"


def test_required_routes_are_registered(client):
    paths = set(client.app.openapi()["paths"])
    for fragment in (
        "/health",
        "/auth/me",
        "/users/sales-people",
        "/users/{user_id}/lead-assignments",
        "/leads",
        "/leads/{lead_id}",
        "/leads/{lead_id}/assignment",
        "/leads/{lead_id}/quote-requests",
        "/quote-requests",
        "/quote-requests/{quote_request_id}/start",
        "/quote-requests/{quote_request_id}/complete",
        "/deals",
        "/deals/{order_id}",
        "/dashboard/summary",
        "/charts/monthly-orders",
        "/charts/lead-source",
        "/charts/sales-person",
        "/charts/cash-flow",
    ):
        assert f"{API}{fragment}" in paths


def test_health_needs_no_token(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_missing_or_bad_token_is_unauthenticated(client, users):
    response = client.get(f"{API}/leads")
    assert response.status_code == 401
    assert response.json()["status"] == "error"
    assert response.json()["error_code"] == "unauthenticated"

    response = client.get(f"{API}/leads", headers={"Authorization": "Bearer abc.def.ghi"})
    assert response.status_code == 401


def test_token_for_unknown_user_is_unauthenticated(client):
    token = create_access_token("no-such-user", get_config().JWT_SECRET)
    response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_me_returns_resolved_role(client, users, auth_headers):
    response = client.get(f"{API}/auth/me", headers=auth_headers("quote_maker"))
    assert response.status_code == 200
    assert response.json() == {
        "user_id": users["quote_maker"].id,
        "role": "quote_maker",
        "full_name": users["quote_maker"].full_name,
    }


def test_create_and_list_leads(client, users, auth_headers, lead_data):
    response = client.post(
        f"{API}/leads",
        json=lead_data(assigned_user_id=users["rep"].id),
        headers=auth_headers("assigner"),
    )
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["status"] == "new"
    assert created["assigned_user_id"] == users["rep"].id

    listing = client.get(f"{API}/leads", headers=auth_headers("rep")).json()["data"]
    assert [item["id"] for item in listing["items"]] == [created["id"]]
    assert listing["total"] == 1
    assert listing["has_more"] is False

    other = client.get(f"{API}/leads", headers=auth_headers("rep2")).json()["data"]
    assert other["items"] == []


def test_create_lead_validation_error_envelope(client, auth_headers):
    response = client.post(f"{API}/leads", json={"name": "Only"}, headers=auth_headers("admin"))
    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "validation_error"
    assert "Missing required fields" in body["detail"]


def test_sales_rep_cannot_win_lead_over_http(client, make_lead, auth_headers, lead_data):
    lead = make_lead()
    response = client.patch(
        f"{API}/leads/{lead.id}",
        json=lead_data(status="won"),
        headers=auth_headers("rep"),
    )
    assert response.status_code == 403
    assert lead.id in response.json()["detail"]


def test_quote_request_workflow_over_http(client, session, make_lead, auth_headers):
    lead = make_lead()

    submitted = client.post(
        f"{API}/leads/{lead.id}/quote-requests", json={"quote_type": "fresh"}, headers=auth_headers("rep")
    )
    assert submitted.status_code == 201
    request_id = submitted.json()["data"]["id"]

    forbidden = client.get(f"{API}/quote-requests", headers=auth_headers("rep"))
    assert forbidden.status_code == 403

    started = client.post(
        f"{API}/quote-requests/{request_id}/start",
        json={"quote_number": "Q-77", "lead_id": lead.id},
        headers=auth_headers("quote_maker"),
    )
    assert started.status_code == 200
    assert started.json()["data"]["status"] == "active"

    again = client.post(
        f"{API}/quote-requests/{request_id}/start",
        json={"quote_number": "Q-78"},
        headers=auth_headers("quote_maker"),
    )
    assert again.status_code == 409
    assert again.json()["error_code"] == "invalid_transition"

    zero = client.post(
        f"{API}/quote-requests/{request_id}/complete", json={"quote_value": 0}, headers=auth_headers("quote_maker")
    )
    assert zero.status_code == 422

    done = client.post(
        f"{API}/quote-requests/{request_id}/complete",
        json={"quote_value": 2500, "quote_type": "revisal"},
        headers=auth_headers("quote_maker"),
    )
    assert done.status_code == 200
    assert done.json()["data"]["quote_value"] == 2500.0
    assert done.json()["data"]["lead"]["name"] == lead.name

    listing = client.get(f"{API}/quote-requests", headers=auth_headers("viewer")).json()["data"]
    assert listing["counts"] == {"pending": 0, "active": 0, "completed": 1}

    session.expire_all()
    assert lead.status == LeadStatus.QUOTE_MADE
    assert lead.quote_number == "Q-77"


def test_deal_endpoints(client, users, make_lead, auth_headers):
    lead = make_lead(status=LeadStatus.NEGOTIATION)

    denied = client.post(f"{API}/deals", json={"lead_id": lead.id, "amount_in": 100}, headers=auth_headers("manager"))
    assert denied.status_code == 403

    created = client.post(
        f"{API}/deals",
        json={"lead_id": lead.id, "amount_in": 1000, "tax_amount": "180", "middleman_cut": 20, "order_date": "2026-03-14"},
        headers=auth_headers("admin"),
    )
    assert created.status_code == 201
    deal = created.json()["data"]
    assert deal["total_value"] == 1200.0
    assert deal["sales_rep"]["full_name"] == users["rep"].full_name

    duplicate = client.post(f"{API}/deals", json={"lead_id": lead.id}, headers=auth_headers("admin"))
    assert duplicate.status_code == 409

    patched = client.patch(f"{API}/deals/{deal['id']}", json={"amount_received": 600}, headers=auth_headers("admin"))
    assert patched.status_code == 200
    assert patched.json()["data"]["amount_received"] == 600.0

    bad = client.patch(f"{API}/deals/{deal['id']}", json={"status": "shipped"}, headers=auth_headers("admin"))
    assert bad.status_code == 422

    assert client.get(f"{API}/deals/{deal['id']}", headers=auth_headers("rep")).status_code == 200
    assert client.get(f"{API}/deals/{deal['id']}", headers=auth_headers("rep2")).status_code == 403
    assert client.get(f"{API}/deals/missing", headers=auth_headers("admin")).status_code == 404

    rep2_deals = client.get(f"{API}/deals", headers=auth_headers("rep2")).json()["data"]
    assert rep2_deals == []
    march = client.get(f"{API}/deals", params={"year": "2026", "month": "3"}, headers=auth_headers("viewer"))
    assert [row["id"] for row in march.json()["data"]] == [deal["id"]]


def test_dashboard_and_charts(client, make_lead, make_deal, auth_headers):
    make_lead()
    make_deal(order_date=date(2026, 3, 14), final_size_date="2026-07-01")

    summary = client.get(f"{API}/dashboard/summary", headers=auth_headers("admin")).json()["data"]
    assert summary == {"total_leads": 2, "total_deals": 1, "total_revenue": 1200.0, "conversion_rate": 50.0}

    monthly = client.get(f"{API}/charts/monthly-orders", params={"year": "2026"}, headers=auth_headers("admin"))
    assert monthly.status_code == 200
    assert monthly.json()[2]["Total Value"] == 1200.0

    fallback = client.get(f"{API}/charts/monthly-orders", params={"year": "bogus"}, headers=auth_headers("admin"))
    assert fallback.status_code == 200
    assert len(fallback.json()) == 12

    sources = client.get(f"{API}/charts/lead-source", params={"month": "2026-03"}, headers=auth_headers("admin"))
    assert sources.json() == [{"name": "Architect", "value": 1200.0}]

    people = client.get(f"{API}/charts/sales-person", params={"month": "2026-03"}, headers=auth_headers("rep2"))
    assert people.json() == []

    cash = client.get(f"{API}/charts/cash-flow", params={"year": "2026"}, headers=auth_headers("admin")).json()
    assert cash[6] == {"month": "Jul", "Expected Cash Flow": 420.0}


def test_user_lookups(client, users, make_lead, auth_headers):
    lead = make_lead(assignee="rep2")

    people = client.get(f"{API}/users/sales-people", headers=auth_headers("assigner")).json()["data"]
    assert {person["role"] for person in people} == {"sales_rep", "sales_manager"}

    assignments = client.get(
        f"{API}/users/{users['rep2'].id}/lead-assignments", headers=auth_headers("rep2")
    ).json()["data"]
    assert assignments["lead_ids"] == [lead.id]

    other = client.get(f"{API}/users/{users['rep2'].id}/lead-assignments", headers=auth_headers("rep"))
    assert other.status_code == 403

    assignment = client.get(f"{API}/leads/{lead.id}/assignment", headers=auth_headers("viewer")).json()["data"]
    assert assignment["user_id"] == users["rep2"].id
