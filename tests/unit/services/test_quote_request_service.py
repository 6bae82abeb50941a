from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.core.exceptions import AuthorizationError, DatabaseError, ValidationError
from app.models import LeadStatus, QuoteRequest, QuoteRequestStatus, QuoteType
from app.orchestration.state_machine import InvalidTransitionError
from app.services.quote_request_service import QuoteRequestFilters, QuoteRequestService


def _count_requests(session) -> int:
    return session.scalar(select(func.count()).select_from(QuoteRequest))


def test_submit_creates_pending_request_for_assignee(session, users, principals, make_lead):
    lead = make_lead(assignee="rep")
    request = QuoteRequestService(db=session).submit(lead.id, "revisal", principals["rep"])

    assert request.status == QuoteRequestStatus.PENDING
    assert request.quote_value == Decimal("0")
    assert request.sales_rep_id == users["rep"].id
    assert request.type == QuoteType.REVISAL
    assert request.quote_maker_id is None


def test_submit_requires_assignment(session, principals, make_lead):
    lead = make_lead(assignee=None, status=LeadStatus.UNQUALIFIED)
    with pytest.raises(ValidationError, match="no assigned sales person"):
        QuoteRequestService(db=session).submit(lead.id, "fresh", principals["admin"])
    assert _count_requests(session) == 0


def test_sales_rep_submits_only_for_own_leads(session, principals, make_lead):
    lead = make_lead(assignee="rep2")
    with pytest.raises(AuthorizationError):
        QuoteRequestService(db=session).submit(lead.id, "fresh", principals["rep"])
    with pytest.raises(AuthorizationError):
        QuoteRequestService(db=session).submit(lead.id, "fresh", principals["quote_maker"])
    assert _count_requests(session) == 0


def test_start_working_claims_request_and_updates_lead(session, users, principals, make_lead):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])

    claimed = service.start_working(request.id, " Q-2041 ", principals["quote_maker"], lead_id=lead.id)

    assert claimed.status == QuoteRequestStatus.ACTIVE
    assert claimed.quote_maker_id == users["quote_maker"].id
    session.refresh(lead)
    assert lead.quote_number == "Q-2041"
    assert lead.status == LeadStatus.QUOTE_MADE


def test_start_working_requires_quote_number_and_pending_state(session, principals, make_lead):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])

    with pytest.raises(ValidationError, match="Quote number"):
        service.start_working(request.id, "  ", principals["quote_maker"])
    service.start_working(request.id, "Q-1", principals["quote_maker"])
    with pytest.raises(InvalidTransitionError):
        service.start_working(request.id, "Q-2", principals["admin"])


def test_start_working_rolls_back_when_commit_fails(session, principals, make_lead, monkeypatch):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])

    def _failing_commit():
        raise OperationalError("UPDATE leads", {}, Exception("connection lost"))

    monkeypatch.setattr(session, "commit", _failing_commit)
    with pytest.raises(DatabaseError, match="connection lost"):
        service.start_working(request.id, "Q-9", principals["quote_maker"])
    monkeypatch.undo()

    session.expire_all()
    assert request.status == QuoteRequestStatus.PENDING
    assert request.quote_maker_id is None
    assert lead.quote_number is None
    assert lead.status == LeadStatus.NEW


def test_complete_validates_value_before_any_write(session, principals, make_lead):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])
    service.start_working(request.id, "Q-3", principals["quote_maker"])

    for bad_value in (0, "-5", "abc", None):
        with pytest.raises(ValidationError):
            service.complete(request.id, bad_value, principals["quote_maker"])

    session.expire_all()
    assert request.status == QuoteRequestStatus.ACTIVE
    assert request.quoted_at is None


def test_complete_requires_active_request(session, principals, make_lead):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])

    with pytest.raises(InvalidTransitionError):
        service.complete(request.id, "1500", principals["quote_maker"])


def test_complete_cascades_value_to_lead(session, users, principals, make_lead):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])
    service.start_working(request.id, "Q-4", principals["quote_maker"])

    completed = service.complete(request.id, "1500.50", principals["admin"], quote_type="revisal", lead_id=lead.id)

    assert completed.status == QuoteRequestStatus.COMPLETED
    assert completed.quote_value == Decimal("1500.50")
    assert completed.quoted_at is not None
    assert completed.quote_maker_id == users["admin"].id
    assert completed.type == QuoteType.REVISAL
    session.refresh(lead)
    assert lead.quote_value == Decimal("1500.50")
    assert lead.status == LeadStatus.QUOTE_MADE

    with pytest.raises(InvalidTransitionError):
        service.start_working(request.id, "Q-5", principals["quote_maker"])


def test_lead_pairing_mismatch_is_rejected(session, principals, make_lead):
    lead = make_lead()
    other = make_lead(name="Other")
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])

    with pytest.raises(ValidationError, match="does not belong"):
        service.start_working(request.id, "Q-6", principals["quote_maker"], lead_id=other.id)


def test_listing_orders_by_status_and_counts(session, principals, make_lead):
    service = QuoteRequestService(db=session)
    completed = service.submit(make_lead(name="A").id, "fresh", principals["rep"])
    active = service.submit(make_lead(name="B").id, "fresh", principals["rep"])
    pending = service.submit(make_lead(name="C").id, "revisal", principals["rep"])
    service.start_working(completed.id, "Q-A", principals["quote_maker"])
    service.complete(completed.id, 900, principals["quote_maker"])
    service.start_working(active.id, "Q-B", principals["quote_maker"])

    listing = service.list_quote_requests(QuoteRequestFilters(), principals["quote_maker"])

    assert [row.id for row in listing.items] == [pending.id, active.id, completed.id]
    assert listing.counts == {"pending": 1, "active": 1, "completed": 1}

    revisals = service.list_quote_requests(QuoteRequestFilters(quote_type="revisal"), principals["viewer"])
    assert [row.id for row in revisals.items] == [pending.id]


def test_listing_is_gated_to_quote_roles(session, principals):
    service = QuoteRequestService(db=session)
    for key in ("rep", "manager", "assigner"):
        with pytest.raises(AuthorizationError):
            service.list_quote_requests(QuoteRequestFilters(), principals[key])


def test_listing_date_filter_prefers_quoted_date(session, principals, make_lead):
    service = QuoteRequestService(db=session)
    quoted = service.submit(make_lead(name="Quoted in 2024").id, "fresh", principals["rep"])
    unquoted = service.submit(make_lead(name="Requested now").id, "fresh", principals["rep"])
    quoted.quoted_at = datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)
    session.commit()

    by_year = service.list_quote_requests(QuoteRequestFilters(year="2024"), principals["admin"])
    assert [row.id for row in by_year.items] == [quoted.id]

    march = service.list_quote_requests(QuoteRequestFilters(year="2024", month="3"), principals["admin"])
    assert [row.id for row in march.items] == [quoted.id]

    today = date.today()
    current_month = service.list_quote_requests(
        QuoteRequestFilters(month=str(today.month)), principals["admin"], today=today
    )
    assert [row.id for row in current_month.items] == [unquoted.id]


def test_listing_search_matches_lead_name_and_address(session, principals, make_lead):
    service = QuoteRequestService(db=session)
    harbor = service.submit(make_lead(name="Harbor Offices").id, "fresh", principals["rep"])
    service.submit(make_lead(name="Hill House", address="9 Ridge Lane").id, "fresh", principals["rep"])

    listing = service.list_quote_requests(QuoteRequestFilters(search="HARBOR"), principals["admin"])
    assert [row.id for row in listing.items] == [harbor.id]
    ridge = service.list_quote_requests(QuoteRequestFilters(search="ridge"), principals["admin"])
    assert len(ridge.items) == 1


def test_rep_with_a_won_lead_requests_quote_for_open_lead(session, users, principals, make_lead):
    make_lead(name="Closed", status=LeadStatus.WON)
    target = make_lead(name="Open A")
    make_lead(name="Open B")

    request = QuoteRequestService(db=session).submit(target.id, "fresh", principals["rep"])

    assert request.status == QuoteRequestStatus.PENDING
    assert request.sales_rep_id == principals["rep"].user_id
    assert request.quote_value == 0


def test_admin_completes_quote_for_1500(session, principals, make_lead):
    lead = make_lead()
    service = QuoteRequestService(db=session)
    request = service.submit(lead.id, "fresh", principals["rep"])
    service.start_working(request.id, "Q-1500", principals["admin"])

    completed = service.complete(request.id, 1500, principals["admin"])

    assert completed.status == QuoteRequestStatus.COMPLETED
    assert completed.quoted_at is not None
    session.refresh(lead)
    assert lead.status == LeadStatus.QUOTE_MADE
    assert lead.quote_value == Decimal("1500")
