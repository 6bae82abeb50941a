"""Deterministic validators and sanitizers for flat form payloads."""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, TypeVar

from app.core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def sanitize_text(value: Any, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    return cleaned[:max_len]


def optional_text(value: Any, max_len: int = 20000) -> str | None:
    """Blank strings are stored as NULL."""
    cleaned = sanitize_text(value, max_len=max_len)
    return cleaned or None


def require_fields(payload: Mapping[str, Any], fields: tuple[str, ...] | list[str]) -> None:
    missing = [name for name in fields if not sanitize_text(payload.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def parse_enum(enum_cls: type[E], value: Any, field: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(sanitize_text(value))
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field}: {value!r}. Expected one of: {allowed}") from exc


def parse_amount(value: Any, field: str, allow_zero: bool = True) -> Decimal:
    """Parse a non-negative money amount; ``allow_zero=False`` requires > 0."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Invalid {field}: must be a finite number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {field}: must be a number") from exc
    if not amount.is_finite():
        raise ValidationError(f"Invalid {field}: must be a finite number")
    if amount < 0 or (not allow_zero and amount == 0):
        bound = "zero or greater" if allow_zero else "greater than zero"
        raise ValidationError(f"{field} must be {bound}")
    return amount.quantize(Decimal("0.01"))


def parse_date(value: Any, field: str) -> date | None:
    """Parse ``YYYY-MM-DD``; blank values clear the date."""
    if value is None or isinstance(value, date):
        return value
    text = sanitize_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field}: expected YYYY-MM-DD") from exc
