from __future__ import annotations

from datetime import date

import pytest

from app.core.exceptions import ValidationError
from app.services.query_filters import (
    chart_month,
    chart_year,
    humanize,
    month_range,
    normalize_choice,
    parse_month,
    parse_year,
    year_range,
)

TODAY = date(2026, 10, 19)


def test_normalize_choice_treats_all_and_blank_as_no_filter():
    assert normalize_choice("all") is None
    assert normalize_choice(" ALL ") is None
    assert normalize_choice("") is None
    assert normalize_choice(" rep-1 ") == "rep-1"


def test_month_range_is_half_open_and_wraps_december():
    december = month_range(2025, 12)
    assert december.start == date(2025, 12, 1)
    assert december.end == date(2026, 1, 1)
    assert year_range(2026).end == date(2027, 1, 1)


def test_list_filters_reject_malformed_values():
    assert parse_year("2026") == 2026
    assert parse_month("all") is None
    with pytest.raises(ValidationError):
        parse_month("13")
    with pytest.raises(ValidationError):
        parse_year("20x6")


@pytest.mark.parametrize("value", [None, "", "abc", "99999"])
def test_chart_year_falls_back_to_current_year(value):
    assert chart_year(value, today=TODAY) == 2026


@pytest.mark.parametrize("value", [None, "2026", "2026-13", "march", "2026-03-01"])
def test_chart_month_falls_back_to_current_month(value):
    assert chart_month(value, today=TODAY) == (2026, 10)


def test_chart_month_parses_year_month():
    assert chart_month("2025-02", today=TODAY) == (2025, 2)


def test_humanize():
    assert humanize("social_media_ads") == "Social Media Ads"
    assert humanize(None) == "Unknown"
