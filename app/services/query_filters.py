"""Translation of list/chart filter parameters into query bounds."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import case
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import ValidationError

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
ALL = "all"


@dataclass(frozen=True)
class DateRange:
    """Half-open ``[start, end)`` date interval."""

    start: date
    end: date


def normalize_choice(value: str | None) -> str | None:
    """UI filters send ``"all"`` or blanks for "no filter"."""
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == ALL:
        return None
    return value


def parse_year(value: str | int | None) -> int | None:
    value = normalize_choice(str(value)) if value is not None else None
    if value is None:
        return None
    try:
        year = int(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid year: {value!r}") from exc
    if not 1900 <= year <= 9999:
        raise ValidationError(f"Invalid year: {value!r}")
    return year


def parse_month(value: str | int | None) -> int | None:
    value = normalize_choice(str(value)) if value is not None else None
    if value is None:
        return None
    try:
        month = int(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid month: {value!r}") from exc
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {value!r}")
    return month


def month_range(year: int, month: int) -> DateRange:
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return DateRange(start=start, end=end)


def year_range(year: int) -> DateRange:
    return DateRange(start=date(year, 1, 1), end=date(year + 1, 1, 1))


def as_datetime_range(bounds: DateRange) -> tuple[datetime, datetime]:
    return (
        datetime(bounds.start.year, bounds.start.month, bounds.start.day, tzinfo=timezone.utc),
        datetime(bounds.end.year, bounds.end.month, bounds.end.day, tzinfo=timezone.utc),
    )


def chart_year(value: str | None, today: date | None = None) -> int:
    """Year parameter for chart endpoints; malformed input means the current year."""
    today = today or date.today()
    try:
        return parse_year(value) or today.year
    except ValidationError:
        return today.year


def chart_month(value: str | None, today: date | None = None) -> tuple[int, int]:
    """``YYYY-MM`` parameter for chart endpoints; malformed input means the current month."""
    today = today or date.today()
    if not value:
        return today.year, today.month
    parts = value.strip().split("-")
    if len(parts) != 2:
        return today.year, today.month
    try:
        year, month = parse_year(parts[0]), parse_month(parts[1])
    except ValidationError:
        return today.year, today.month
    if year is None or month is None:
        return today.year, today.month
    return year, month


def ordinal_case(column: ColumnElement, order: dict, default: int = 99) -> ColumnElement:
    """SQL CASE mapping enum values to a fixed display ordinal."""
    return case(order, value=column, else_=default)


def humanize(value: str | None) -> str:
    """``social_media`` -> ``Social Media``."""
    if not value:
        return "Unknown"
    return " ".join(word.capitalize() for word in value.replace("_", " ").split())
