from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.models import LeadSource
from app.utils.validators import optional_text, parse_amount, parse_date, parse_enum, require_fields, sanitize_text


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"
    assert optional_text("   ") is None


def test_require_fields_lists_missing_names():
    with pytest.raises(ValidationError, match="address, phone_number"):
        require_fields({"name": "x", "address": " ", "phone_number": None}, ("name", "address", "phone_number"))


def test_parse_enum_accepts_values_and_reports_choices():
    assert parse_enum(LeadSource, " ads ", "lead_found_through") == LeadSource.ADS
    with pytest.raises(ValidationError, match="word_of_mouth"):
        parse_enum(LeadSource, "billboard", "lead_found_through")


def test_parse_amount_bounds():
    assert parse_amount("12.5", "amount_in") == Decimal("12.50")
    assert parse_amount(0, "amount_in") == Decimal("0.00")
    for bad in (True, "-1", "nan", "Infinity", float("inf"), "", "1,000"):
        with pytest.raises(ValidationError):
            parse_amount(bad, "amount_in")
    with pytest.raises(ValidationError, match="greater than zero"):
        parse_amount("0", "quote_value", allow_zero=False)


def test_parse_date_accepts_iso_and_blank():
    assert parse_date("2026-02-28", "order_date") == date(2026, 2, 28)
    assert parse_date("", "order_date") is None
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        parse_date("28/02/2026", "order_date")
