"""Canonical state transition helpers for workflow entities."""

from __future__ import annotations

from app.core.exceptions import ValidationError
from app.models.enums import QuoteRequestStatus


class InvalidTransitionError(ValidationError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Lookup-table state machine; holds no entity state of its own."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {_label(current)} -> {_label(target)}")


def _label(value: str) -> str:
    return str(getattr(value, "value", value))


QUOTE_REQUEST_FLOW = StateMachine(
    {
        QuoteRequestStatus.PENDING: {QuoteRequestStatus.ACTIVE},
        QuoteRequestStatus.ACTIVE: {QuoteRequestStatus.COMPLETED},
        QuoteRequestStatus.COMPLETED: set(),
    }
)
