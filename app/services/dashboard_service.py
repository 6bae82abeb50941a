"""Dashboard summary and chart aggregates over role-scoped rows."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from app.auth.identity import Principal
from app.auth.rbac import is_allowed, require
from app.core.config import get_config
from app.models import Order
from app.services.base_service import BaseService
from app.services.deal_service import DealFilters, DealService
from app.services.lead_service import LeadService
from app.services.query_filters import MONTH_LABELS, chart_month, chart_year, humanize

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _money(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else ZERO


def _as_number(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01")))


def _empty_months() -> list[dict[str, Decimal]]:
    return [defaultdict(lambda: ZERO) for _ in MONTH_LABELS]


class DashboardService(BaseService):
    """Summary statistics and chart buckets.

    Rows are fetched through the lead and deal services so every figure uses
    the same visibility rules as the lists it summarises, then reduced here.
    """

    def dashboard_summary(self, actor: Principal) -> dict[str, Any]:
        require(actor.role, "dashboard.read")
        total_leads = LeadService(self.db).count_visible_leads(actor)
        deals = self._visible_deals(actor)
        total_revenue = sum((_money(order.total_value) for order in deals), ZERO)
        conversion_rate = (len(deals) / total_leads) * 100 if total_leads > 0 else 0.0

        logger.debug(
            "dashboard.summary",
            extra={"event": "dashboard.summary", "actor_id": actor.user_id, "leads": total_leads, "deals": len(deals)},
        )
        return {
            "total_leads": total_leads,
            "total_deals": len(deals),
            "total_revenue": _as_number(total_revenue),
            "conversion_rate": round(conversion_rate, 2),
        }

    def monthly_orders(self, actor: Principal, year: str | None = None, today: date | None = None) -> list[dict]:
        """Twelve buckets of total value and amount in by order date."""
        require(actor.role, "dashboard.read")
        selected = chart_year(year, today=today)
        buckets = _empty_months()
        for order in self._visible_deals(actor, DealFilters(year=str(selected))):
            bucket = buckets[order.order_date.month - 1]
            bucket["total"] += _money(order.total_value)
            bucket["amount_in"] += _money(order.amount_in)
        return [
            {"month": label, "Total Value": _as_number(bucket["total"]), "Amount In": _as_number(bucket["amount_in"])}
            for label, bucket in zip(MONTH_LABELS, buckets)
        ]

    def lead_source_breakdown(self, actor: Principal, month: str | None = None, today: date | None = None) -> list[dict]:
        require(actor.role, "dashboard.read")
        orders = self._orders_in_month(actor, month, today)
        return self._breakdown(
            orders, lambda order: humanize(order.lead.lead_found_through.value if order.lead else None)
        )

    def sales_person_breakdown(
        self, actor: Principal, month: str | None = None, today: date | None = None
    ) -> list[dict]:
        require(actor.role, "dashboard.read")
        orders = self._orders_in_month(actor, month, today)
        return self._breakdown(
            orders, lambda order: (order.sales_rep.full_name if order.sales_rep else None) or "Unknown"
        )

    def cash_flow(self, actor: Principal, year: str | None = None, today: date | None = None) -> list[dict]:
        """Expected cash flow per month of ``final_size_date``."""
        require(actor.role, "dashboard.read")
        selected = chart_year(year, today=today)
        ratio = Decimal(str(get_config().CASH_FLOW_RATIO))
        totals = [ZERO for _ in MONTH_LABELS]
        for order in self._visible_deals(actor):
            if order.final_size_date is None or order.final_size_date.year != selected:
                continue
            totals[order.final_size_date.month - 1] += _money(order.total_value) * ratio
        return [
            {"month": label, "Expected Cash Flow": _as_number(total)}
            for label, total in zip(MONTH_LABELS, totals)
        ]

    def _visible_deals(self, actor: Principal, filters: DealFilters | None = None) -> list[Order]:
        if not is_allowed(actor.role, "deal.read"):
            return []
        return DealService(self.db).list_deals(actor, filters)

    def _orders_in_month(self, actor: Principal, month: str | None, today: date | None) -> list[Order]:
        year, month_number = chart_month(month, today=today)
        return self._visible_deals(actor, DealFilters(year=str(year), month=str(month_number)))

    @staticmethod
    def _breakdown(orders: Iterable[Order], key) -> list[dict]:
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for order in orders:
            totals[key(order)] += _money(order.total_value)
        return [
            {"name": name, "value": _as_number(value)}
            for name, value in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        ]
