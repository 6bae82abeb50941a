"""Role-based authorization policy.

Every service operation asks this module before touching rows; no other module
branches on role names to decide *whether* something is allowed.
"""

from __future__ import annotations

from app.core.exceptions import AuthorizationError
from app.models.enums import CLOSED_LEAD_STATUSES, LeadStatus, UserRole

ALL_ROLES = frozenset(UserRole)
LEAD_EDITORS = frozenset(
    {UserRole.ADMIN, UserRole.SALES_MANAGER, UserRole.SALES_REP, UserRole.LEAD_ASSIGNER}
)

ACTION_ROLES: dict[str, frozenset[UserRole]] = {
    "lead.read": ALL_ROLES,
    "lead.read_closed": frozenset({UserRole.ADMIN, UserRole.VIEWER}),
    "lead.create": LEAD_EDITORS,
    "lead.update": LEAD_EDITORS,
    "lead.reassign": frozenset({UserRole.ADMIN, UserRole.LEAD_ASSIGNER}),
    "lead.close": frozenset({UserRole.ADMIN}),
    "quote_request.submit": frozenset({UserRole.ADMIN, UserRole.SALES_MANAGER, UserRole.SALES_REP}),
    "quote_request.read": frozenset({UserRole.ADMIN, UserRole.QUOTE_MAKER, UserRole.VIEWER}),
    "quote_request.claim": frozenset({UserRole.ADMIN, UserRole.QUOTE_MAKER}),
    "quote_request.complete": frozenset({UserRole.ADMIN, UserRole.QUOTE_MAKER}),
    "deal.read": frozenset({UserRole.ADMIN, UserRole.SALES_MANAGER, UserRole.SALES_REP, UserRole.VIEWER}),
    "deal.read_all": frozenset({UserRole.ADMIN, UserRole.SALES_MANAGER, UserRole.VIEWER}),
    "deal.filter_by_rep": frozenset({UserRole.ADMIN}),
    "deal.create": frozenset({UserRole.ADMIN}),
    "deal.update": frozenset({UserRole.ADMIN}),
    "dashboard.read": ALL_ROLES,
    "users.read": ALL_ROLES,
}


def _coerce_role(role: UserRole | str | None) -> UserRole | None:
    if role is None:
        return None
    try:
        return UserRole(role)
    except ValueError:
        return None


def is_closing_transition(current_status: LeadStatus | None, target_status: LeadStatus | None) -> bool:
    """True when a lead moves *into* won/lost from a different status."""
    if target_status is None or target_status not in CLOSED_LEAD_STATUSES:
        return False
    return current_status != target_status


def is_allowed(
    role: UserRole | str | None,
    action: str,
    current_status: LeadStatus | None = None,
    target_status: LeadStatus | None = None,
) -> bool:
    """Decide whether ``role`` may perform ``action`` on a resource in the given state.

    ``lead.update`` is state-aware: moving a lead into won/lost additionally
    requires ``lead.close``, while an update that keeps it in the same closed
    status is a plain edit.
    """
    resolved = _coerce_role(role)
    if resolved is None:
        return False
    if resolved not in ACTION_ROLES.get(action, frozenset()):
        return False
    if action in {"lead.create", "lead.update"} and is_closing_transition(current_status, target_status):
        return resolved in ACTION_ROLES["lead.close"]
    return True


def require(
    role: UserRole | str | None,
    action: str,
    current_status: LeadStatus | None = None,
    target_status: LeadStatus | None = None,
    detail: str | None = None,
) -> None:
    """Raise when the policy denies the action."""
    if is_allowed(role, action, current_status=current_status, target_status=target_status):
        return
    role_name = role.value if isinstance(role, UserRole) else str(role)
    raise AuthorizationError(detail or f"Role '{role_name}' is not permitted to perform {action}.")
