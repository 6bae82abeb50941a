from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.identity import Principal
from app.auth.jwt import create_access_token
from app.core.config import get_config
from app.core.dependencies import get_db_session
from app.main import app
from app.models import Base, LeadSource, LeadStatus, PropertyType, User, UserRole
from app.services.deal_service import DealService
from app.services.lead_service import LeadService

SEED_USERS = {
    "admin": ("Asha Admin", UserRole.ADMIN),
    "manager": ("Manoj Manager", UserRole.SALES_MANAGER),
    "rep": ("Riya Rep", UserRole.SALES_REP),
    "rep2": ("Rohan Rep", UserRole.SALES_REP),
    "assigner": ("Lalit Assigner", UserRole.LEAD_ASSIGNER),
    "quote_maker": ("Qadir Quotes", UserRole.QUOTE_MAKER),
    "viewer": ("Vani Viewer", UserRole.VIEWER),
}


def _principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, role=user.role, full_name=user.full_name)


def _lead_payload(**overrides) -> dict:
    payload = {
        "name": "Greenview Villas",
        "address": "12 Lake Road",
        "property_type": PropertyType.RESIDENTIAL.value,
        "phone_number": "9800000001",
        "lead_found_through": LeadSource.ARCHITECT.value,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def users(session) -> dict[str, User]:
    seeded = {key: User(full_name=name, role=role) for key, (name, role) in SEED_USERS.items()}
    session.add_all(seeded.values())
    session.commit()
    return seeded


@pytest.fixture
def principals(users) -> dict[str, Principal]:
    return {key: _principal_for(user) for key, user in users.items()}


@pytest.fixture
def make_lead(session, users, principals):
    """Create a lead as admin; ``status`` other than new/unqualified is applied by an admin update."""

    def _make_lead(assignee: str | None = "rep", status: LeadStatus | None = None, **fields):
        service = LeadService(db=session)
        data = _lead_payload(**fields)
        if assignee is not None:
            data["assigned_user_id"] = users[assignee].id
        if status == LeadStatus.UNQUALIFIED:
            data["status"] = status.value
        lead = service.create_lead(data, principals["admin"])
        if status is not None and status not in {LeadStatus.NEW, LeadStatus.UNQUALIFIED}:
            lead = service.update_lead(lead.id, {**data, "status": status.value}, principals["admin"])
        return lead

    return _make_lead


@pytest.fixture
def client(session_factory):
    def _override_get_db_session():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db_session] = _override_get_db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(users):
    secret = get_config().JWT_SECRET

    def _headers(key: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(users[key].id, secret)}"}

    return _headers


@pytest.fixture
def lead_data():
    return _lead_payload


@pytest.fixture
def make_deal(session, principals, make_lead):
    """Create a won lead with an order; amounts default to 1000 + 180 + 20."""

    def _make_deal(assignee: str = "rep", order_date: date = date(2026, 3, 14), lead_fields=None, **fields):
        lead = make_lead(assignee=assignee, status=LeadStatus.NEGOTIATION, **(lead_fields or {}))
        data = {"amount_in": "1000", "tax_amount": "180", "middleman_cut": "20", "order_date": order_date.isoformat()}
        data.update(fields)
        return DealService(db=session).create_deal(lead.id, data, principals["admin"])

    return _make_deal
