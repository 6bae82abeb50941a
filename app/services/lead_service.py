"""Lead lifecycle: creation, guarded updates, reassignment, and role-scoped listing."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import selectinload

from app.auth.identity import Principal
from app.auth.rbac import is_allowed, require
from app.core.config import get_config
from app.core.exceptions import AuthorizationError, ValidationError
from app.models import Lead, LeadAssignment, User
from app.models.enums import (
    CLOSED_LEAD_STATUSES,
    LEAD_STATUS_ORDER,
    SALES_ROLES,
    LeadSource,
    LeadStatus,
    PropertyType,
    UserRole,
)
from app.services.base_service import BaseService
from app.services.query_filters import normalize_choice, ordinal_case
from app.utils.validators import optional_text, parse_amount, parse_date, parse_enum, require_fields, sanitize_text

logger = logging.getLogger(__name__)

LEAD_REQUIRED_FIELDS = ("name", "address", "property_type", "phone_number", "lead_found_through")
LEAD_SORT_FIELDS = ("status", "next_follow_up_date", "lead_created_date")


@dataclass(frozen=True)
class LeadFilters:
    sales_person_id: str | None = None
    status: str | None = None
    search: str | None = None
    sort_by: str = "status"
    sort_dir: str = "asc"


@dataclass
class LeadPage:
    items: list[Lead] = field(default_factory=list)
    page: int = 1
    page_size: int = 25
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


class LeadService(BaseService):
    """Service for lead CRUD, status guards and assignment changes."""

    def create_lead(self, data: Mapping[str, Any], actor: Principal) -> Lead:
        require(actor.role, "lead.create")

        requested_status = optional_text(data.get("status"))
        status = LeadStatus.NEW
        if requested_status and parse_enum(LeadStatus, requested_status, "status") == LeadStatus.UNQUALIFIED:
            status = LeadStatus.UNQUALIFIED

        required = LEAD_REQUIRED_FIELDS
        if status != LeadStatus.UNQUALIFIED:
            required = (*LEAD_REQUIRED_FIELDS, "assigned_user_id")
        require_fields(data, required)

        values = self._parse_lead_fields(data)
        assignee_id = optional_text(data.get("assigned_user_id"))
        if assignee_id is not None:
            self._validate_assignee(assignee_id)

        lead = Lead(status=status, **values)
        self.db.add(lead)
        if assignee_id is not None:
            lead.assignment = LeadAssignment(user_id=assignee_id)
        self.commit("lead.create", actor_id=actor.user_id)
        self.db.refresh(lead)

        logger.info(
            "lead.created",
            extra={"event": "lead.created", "lead_id": lead.id, "actor_id": actor.user_id, "assignee_id": assignee_id},
        )
        return lead

    def update_lead(self, lead_id: str, data: Mapping[str, Any], actor: Principal) -> Lead:
        lead = self.get_or_404(Lead, lead_id, "Lead")
        require(actor.role, "lead.update")
        require_fields(data, LEAD_REQUIRED_FIELDS)

        target_status = lead.status
        if optional_text(data.get("status")):
            target_status = parse_enum(LeadStatus, data.get("status"), "status")
        require(
            actor.role,
            "lead.update",
            current_status=lead.status,
            target_status=target_status,
            detail=f"Lead {lead_id}: role '{actor.role.value}' cannot move a lead to '{target_status.value}'.",
        )

        values = {
            key: value
            for key, value in self._parse_lead_fields(data).items()
            if key in data or key in LEAD_REQUIRED_FIELDS
        }
        if "quote_value" in data and sanitize_text(data.get("quote_value")):
            values["quote_value"] = parse_amount(data.get("quote_value"), "quote_value")
        if "next_follow_up_date" in data:
            values["next_follow_up_date"] = parse_date(data.get("next_follow_up_date"), "next_follow_up_date")

        current_assignee = lead.assigned_user_id
        new_assignee = current_assignee
        if "assigned_user_id" in data:
            new_assignee = optional_text(data.get("assigned_user_id"))
        reassigning = new_assignee != current_assignee
        if reassigning and not is_allowed(actor.role, "lead.reassign"):
            raise AuthorizationError(
                f"Lead {lead_id}: role '{actor.role.value}' is not allowed to change the lead assignment."
            )
        if new_assignee is None and target_status != LeadStatus.UNQUALIFIED:
            raise ValidationError(f"Lead {lead_id}: an assigned sales person is required.")
        if reassigning and new_assignee is not None:
            self._validate_assignee(new_assignee)

        for key, value in values.items():
            setattr(lead, key, value)
        lead.status = target_status

        if reassigning:
            # Replace rather than update the row; the unique lead_id constraint
            # needs the delete flushed before the insert.
            if lead.assignment is not None:
                self.db.delete(lead.assignment)
                self.db.flush()
            if new_assignee is not None:
                self.db.add(LeadAssignment(lead_id=lead.id, user_id=new_assignee))

        self.commit("lead.update", lead_id=lead_id, actor_id=actor.user_id)
        self.db.refresh(lead)

        logger.info(
            "lead.updated",
            extra={
                "event": "lead.updated",
                "lead_id": lead_id,
                "actor_id": actor.user_id,
                "status": target_status.value,
                "reassigned": reassigning,
            },
        )
        return lead

    def get_lead(self, lead_id: str) -> Lead | None:
        return self.db.get(Lead, lead_id)

    def list_leads(self, filters: LeadFilters, actor: Principal, page: int = 1) -> LeadPage:
        """Return one page of the leads visible to ``actor``."""
        require(actor.role, "lead.read")
        if page < 1:
            raise ValidationError("page must be >= 1")
        page_size = get_config().LEADS_PAGE_SIZE

        query = self._visible_leads_query(filters, actor)
        total = self.db.scalar(select(func.count()).select_from(query.order_by(None).subquery())) or 0

        rows = self.db.scalars(
            self._apply_sort(query, filters)
            .options(selectinload(Lead.assignment))
            .offset((page - 1) * page_size)
            .limit(page_size)
        ).all()
        return LeadPage(items=list(rows), page=page, page_size=page_size, total=int(total))

    def get_more_leads(self, page: int, filters: LeadFilters, actor: Principal) -> list[Lead]:
        return self.list_leads(filters, actor, page=page).items

    def count_visible_leads(self, actor: Principal) -> int:
        """Leads in the actor's row scope, won and lost included."""
        query = self._visible_leads_query(LeadFilters(), actor, include_closed=True)
        return int(self.db.scalar(select(func.count()).select_from(query.subquery())) or 0)

    def get_sales_users(self) -> list[User]:
        return list(
            self.db.scalars(select(User).where(User.role.in_(SALES_ROLES)).order_by(User.full_name)).all()
        )

    def get_lead_assignment(self, lead_id: str, actor: Principal) -> LeadAssignment | None:
        require(actor.role, "lead.read")
        self.get_or_404(Lead, lead_id, "Lead")
        return self.db.scalar(select(LeadAssignment).where(LeadAssignment.lead_id == lead_id))

    def get_lead_assignments(self, user_id: str, actor: Principal) -> list[str]:
        require(actor.role, "lead.read")
        if actor.role == UserRole.SALES_REP and user_id != actor.user_id:
            raise AuthorizationError("Sales reps can only list their own lead assignments.")
        return list(self.db.scalars(select(LeadAssignment.lead_id).where(LeadAssignment.user_id == user_id)).all())

    def _visible_leads_query(self, filters: LeadFilters, actor: Principal, include_closed: bool = False) -> Select:
        query = select(Lead)

        assignee_filter = normalize_choice(filters.sales_person_id)
        if actor.role == UserRole.SALES_REP:
            assignee_filter = actor.user_id
        if assignee_filter is not None:
            query = query.where(
                Lead.id.in_(select(LeadAssignment.lead_id).where(LeadAssignment.user_id == assignee_filter))
            )

        if not include_closed and not is_allowed(actor.role, "lead.read_closed"):
            query = query.where(Lead.status.not_in(list(CLOSED_LEAD_STATUSES)))

        status = normalize_choice(filters.status)
        if status is not None:
            query = query.where(Lead.status == parse_enum(LeadStatus, status, "status"))

        term = sanitize_text(filters.search, max_len=200)
        if term:
            query = query.where(
                or_(
                    Lead.name.icontains(term, autoescape=True),
                    Lead.address.icontains(term, autoescape=True),
                    Lead.phone_number.icontains(term, autoescape=True),
                    Lead.notes.icontains(term, autoescape=True),
                )
            )
        return query

    @staticmethod
    def _apply_sort(query: Select, filters: LeadFilters) -> Select:
        sort_by = filters.sort_by if filters.sort_by in LEAD_SORT_FIELDS else "status"
        descending = (filters.sort_dir or "asc").lower() == "desc"

        if sort_by == "status":
            primary = ordinal_case(Lead.status, LEAD_STATUS_ORDER)
            primary = primary.desc() if descending else primary.asc()
        else:
            column = getattr(Lead, sort_by)
            primary = (column.desc() if descending else column.asc()).nulls_last()

        # Creation date then id keep page boundaries deterministic.
        return query.order_by(primary, Lead.lead_created_date.desc(), Lead.id.asc())

    @staticmethod
    def _parse_lead_fields(data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "name": sanitize_text(data.get("name"), max_len=255),
            "address": sanitize_text(data.get("address"), max_len=500),
            "property_type": parse_enum(PropertyType, data.get("property_type"), "property_type"),
            "company": optional_text(data.get("company"), max_len=255),
            "architect_name": optional_text(data.get("architect_name"), max_len=255),
            "phone_number": sanitize_text(data.get("phone_number"), max_len=50),
            "lead_found_through": parse_enum(LeadSource, data.get("lead_found_through"), "lead_found_through"),
            "notes": optional_text(data.get("notes")),
        }

    def _validate_assignee(self, user_id: str) -> None:
        user = self.db.get(User, user_id)
        if user is None:
            raise ValidationError(f"Assigned user not found: {user_id}")
        if user.role not in SALES_ROLES:
            raise ValidationError(f"User {user_id} is not a sales rep or sales manager and cannot own leads.")
