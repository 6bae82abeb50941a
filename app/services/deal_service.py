"""Deal (order) service: creation from a won lead, partial financial edits, and listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy import Select, extract, select
from sqlalchemy.orm import joinedload

from app.auth.identity import Principal
from app.auth.rbac import is_allowed, require
from app.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.models import Lead, LeadAssignment, Order, User
from app.models.enums import SALES_ROLES, LeadStatus, OrderStatus
from app.services.base_service import BaseService
from app.services.query_filters import month_range, normalize_choice, parse_month, parse_year, year_range
from app.utils.validators import optional_text, parse_amount, parse_date, parse_enum

logger = logging.getLogger(__name__)

AMOUNT_FIELDS = ("amount_in", "tax_amount", "middleman_cut", "amount_received")
DATE_FIELDS = ("order_date", "final_size_date")


@dataclass(frozen=True)
class DealFilters:
    sales_person_id: str | None = None
    year: str | None = None
    month: str | None = None


class DealService(BaseService):
    """Service for order CRUD. ``total_value`` is derived by the database."""

    def create_deal(self, lead_id: str, data: Mapping[str, Any], actor: Principal) -> Order:
        """Record an order for ``lead_id`` and mark the lead won in the same transaction."""
        require(actor.role, "deal.create")
        lead = self.get_or_404(Lead, lead_id, "Lead")
        require(
            actor.role,
            "lead.update",
            current_status=lead.status,
            target_status=LeadStatus.WON,
            detail=f"Lead {lead_id}: role '{actor.role.value}' cannot mark a lead as won.",
        )
        if self.db.scalar(select(Order.id).where(Order.lead_id == lead_id)) is not None:
            raise ConflictError(f"Lead {lead_id} already has a deal.")

        amounts = {name: parse_amount(data.get(name) or 0, name) for name in ("amount_in", "tax_amount", "middleman_cut")}
        sales_rep_id = optional_text(data.get("sales_rep_id"))
        if sales_rep_id is None:
            sales_rep_id = self.db.scalar(select(LeadAssignment.user_id).where(LeadAssignment.lead_id == lead_id))
        if sales_rep_id is None:
            raise ValidationError(f"Lead {lead_id} has no assigned sales person; specify sales_rep_id.")
        rep = self.db.get(User, sales_rep_id)
        if rep is None or rep.role not in SALES_ROLES:
            raise ValidationError(f"User {sales_rep_id} is not a sales rep or sales manager.")

        order = Order(
            lead_id=lead.id,
            sales_rep_id=sales_rep_id,
            status=OrderStatus.PENDING,
            notes=optional_text(data.get("notes")),
            **amounts,
        )
        order_date = parse_date(data.get("order_date"), "order_date")
        if order_date is not None:
            order.order_date = order_date
        order.final_size_date = parse_date(data.get("final_size_date"), "final_size_date")
        self.db.add(order)
        lead.status = LeadStatus.WON

        self.commit("deal.create", lead_id=lead_id, actor_id=actor.user_id)
        self.db.refresh(order)
        logger.info(
            "deal.created",
            extra={"event": "deal.created", "order_id": order.id, "lead_id": lead_id, "sales_rep_id": sales_rep_id},
        )
        return order

    def update_deal(self, order_id: str, data: Mapping[str, Any], actor: Principal) -> Order:
        """Write only the supplied fields; nothing is written if any field is invalid."""
        require(actor.role, "deal.update")
        order = self.get_or_404(Order, order_id, "Deal")

        updates: dict[str, Any] = {}
        for name in AMOUNT_FIELDS:
            if data.get(name) is not None:
                updates[name] = parse_amount(data[name], name)
        for name in DATE_FIELDS:
            if name in data:
                updates[name] = parse_date(data[name], name)
        if "order_date" in updates and updates["order_date"] is None:
            raise ValidationError("order_date cannot be cleared")
        if data.get("status") is not None:
            updates["status"] = parse_enum(OrderStatus, data["status"], "status")
        if "notes" in data:
            updates["notes"] = optional_text(data["notes"])

        if not updates:
            raise ValidationError("No deal fields supplied")

        for name, value in updates.items():
            setattr(order, name, value)
        self.commit("deal.update", order_id=order_id, actor_id=actor.user_id)
        self.db.refresh(order)

        logger.info(
            "deal.updated",
            extra={"event": "deal.updated", "order_id": order_id, "fields": sorted(updates)},
        )
        return order

    def get_deal(self, order_id: str, actor: Principal) -> Order:
        require(actor.role, "deal.read")
        order = self.db.scalar(self._base_query().where(Order.id == order_id))
        if order is None:
            raise NotFoundError(f"Deal not found: {order_id}")
        if not is_allowed(actor.role, "deal.read_all") and order.sales_rep_id != actor.user_id:
            raise AuthorizationError("Insufficient permissions")
        return order

    def list_deals(self, actor: Principal, filters: DealFilters | None = None) -> list[Order]:
        """Orders visible to ``actor``.

        A month without a year matches that month in every year.
        """
        require(actor.role, "deal.read", detail="Insufficient permissions")
        filters = filters or DealFilters()
        query = self._base_query()

        if not is_allowed(actor.role, "deal.read_all"):
            query = query.where(Order.sales_rep_id == actor.user_id)
        else:
            sales_person_id = normalize_choice(filters.sales_person_id)
            if sales_person_id is not None and is_allowed(actor.role, "deal.filter_by_rep"):
                query = query.where(Order.sales_rep_id == sales_person_id)

        year, month = parse_year(filters.year), parse_month(filters.month)
        if year is not None:
            bounds = month_range(year, month) if month is not None else year_range(year)
            query = query.where(Order.order_date >= bounds.start, Order.order_date < bounds.end)
        elif month is not None:
            query = query.where(extract("month", Order.order_date) == month)

        query = query.order_by(Order.order_date.desc(), Order.id.asc())
        return list(self.db.scalars(query).unique().all())

    @staticmethod
    def _base_query() -> Select:
        return select(Order).options(joinedload(Order.lead), joinedload(Order.sales_rep))
