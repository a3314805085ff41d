"""Unit tests for list-view search, filters and pagination"""

import pytest
from datetime import date, datetime, timezone
from check_gateway.domain.filters import CheckQuery, filter_checks, matches_search, paginate
from check_gateway.domain.models import CheckStatus, CheckType


def test_search_matches_entity_payee_and_notes(make_check):
    """Test free-text search is case-insensitive on names and notes"""
    check = make_check(entity_name="Atlas Trading", fund_name="Sud Logistique", notes="Avance Q2")

    assert matches_search(check, "atlas")
    assert matches_search(check, "LOGISTIQUE")
    assert matches_search(check, "q2")
    assert not matches_search(check, "zeta")
    assert matches_search(check, "")


def test_search_matches_check_number_substring(make_check):
    """Test the check number matches as a substring"""
    check = make_check(check_number="CHQ-004521")

    assert matches_search(check, "4521")
    assert not matches_search(check, "9999")


def test_filter_by_type_and_status(make_check, now):
    """Test type and status criteria combine"""
    target = make_check(type=CheckType.OUTGOING, status=CheckStatus.PAID)
    checks = [
        target,
        make_check(type=CheckType.OUTGOING, status=CheckStatus.PENDING),
        make_check(type=CheckType.INCOMING, status=CheckStatus.PAID),
    ]

    query = CheckQuery(type=CheckType.OUTGOING, status=CheckStatus.PAID)

    assert filter_checks(checks, query, now) == [target]


def test_filter_by_date_range_inclusive(make_check, now):
    """Test date_from and date_to include whole days"""
    checks = [
        make_check(due_date="2025-06-01"),
        make_check(due_date="2025-06-10T23:30:00"),
        make_check(due_date="2025-06-11"),
    ]

    query = CheckQuery(date_from=date(2025, 6, 1), date_to=date(2025, 6, 10))

    assert filter_checks(checks, query, now) == checks[:2]


@pytest.mark.parametrize("period, expected_ids", [
    ("today", {"today"}),
    ("week", {"today", "minus6"}),
    ("15days", {"today", "minus6", "minus12"}),
    ("month", {"today", "minus6", "minus12", "later"}),
])
def test_filter_by_period(make_check, now, period, expected_ids):
    """Test period presets relative to now"""
    checks = [
        make_check(id="today", due_in=0),
        make_check(id="minus6", due_in=-6),
        make_check(id="minus12", due_in=-12),
        make_check(id="later", due_in=10),
        make_check(id="last_month", due_date="2025-05-20"),
    ]

    matched = filter_checks(checks, CheckQuery(period=period), now)

    assert {c.id for c in matched} == expected_ids


def test_bad_due_date_fails_active_date_filter(make_check, now):
    """Test unparseable due dates never match a date filter but pass without one"""
    broken = make_check(due_date="n/a")

    assert filter_checks([broken], CheckQuery(period="month"), now) == []
    assert filter_checks([broken], CheckQuery(), now) == [broken]


def test_paginate():
    """Test slicing and page counts"""
    items = list(range(17))

    page = paginate(items, page=3, page_size=8)

    assert page.items == [16]
    assert page.page == 3
    assert page.total_items == 17
    assert page.total_pages == 3


def test_paginate_clamps_out_of_range_pages():
    """Test pages beyond either end are clamped"""
    items = list(range(10))

    assert paginate(items, page=9, page_size=4).page == 3
    assert paginate(items, page=0, page_size=4).items == [0, 1, 2, 3]


def test_paginate_empty():
    """Test an empty result is a single empty page"""
    page = paginate([], page=2)

    assert page.items == []
    assert page.page == 1
    assert page.total_pages == 0


def test_period_filter_accepts_aware_now(make_check):
    """Test period presets work with an offset-aware now"""
    now = datetime(2025, 6, 15, 10, tzinfo=timezone.utc)
    check = make_check(due_date="2025-06-15")

    assert filter_checks([check], CheckQuery(period="today"), now) == [check]
