"""Seed demo users, leads and one deal for local development."""

import sys
from datetime import date
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import select

from app.auth.identity import Principal
from app.auth.jwt import create_access_token
from app.core.config import get_config
from app.database.db import SessionLocal, get_engine
from app.models import Base, LeadSource, PropertyType, User, UserRole
from app.services.deal_service import DealService
from app.services.lead_service import LeadService

DEMO_USERS = (
    ("Asha Admin", UserRole.ADMIN),
    ("Manoj Manager", UserRole.SALES_MANAGER),
    ("Riya Rep", UserRole.SALES_REP),
    ("Lalit Assigner", UserRole.LEAD_ASSIGNER),
    ("Qadir Quotes", UserRole.QUOTE_MAKER),
    ("Vani Viewer", UserRole.VIEWER),
)


def seed() -> None:
    Base.metadata.create_all(bind=get_engine())
    db = SessionLocal()
    try:
        if db.scalar(select(User).limit(1)) is not None:
            print("Seed users already exist.")
            return

        users = {role: User(full_name=name, role=role) for name, role in DEMO_USERS}
        db.add_all(users.values())
        db.commit()

        admin = Principal(user_id=users[UserRole.ADMIN].id, role=UserRole.ADMIN)
        rep_id = users[UserRole.SALES_REP].id
        leads = LeadService(db)
        first = leads.create_lead(
            {
                "name": "Greenview Villas",
                "address": "12 Lake Road",
                "property_type": PropertyType.RESIDENTIAL.value,
                "phone_number": "9800000001",
                "lead_found_through": LeadSource.ARCHITECT.value,
                "architect_name": "S. Mehta",
                "assigned_user_id": rep_id,
            },
            admin,
        )
        leads.create_lead(
            {
                "name": "Harbor Offices",
                "address": "4 Dock Street",
                "property_type": PropertyType.COMMERCIAL.value,
                "phone_number": "9800000002",
                "lead_found_through": LeadSource.SOCIAL_MEDIA.value,
                "assigned_user_id": users[UserRole.SALES_MANAGER].id,
            },
            admin,
        )
        DealService(db).create_deal(
            first.id,
            {"amount_in": "150000", "tax_amount": "27000", "middleman_cut": "5000", "order_date": date.today()},
            admin,
        )

        secret = get_config().JWT_SECRET
        for role, user in users.items():
            print(f"{role.value:<14} {user.id}  token={create_access_token(user.id, secret)}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
