"""Unit tests for portfolio totals and operational windows"""

import pytest
from datetime import datetime, timedelta, timezone
from check_gateway.domain.aggregation import (
    amount_of,
    health_index,
    incoming_due_today,
    is_overdue,
    monthly_series,
    net_liquidity,
    outgoing_due_within,
    pending_due_soon,
    recent_checks,
    summarize,
    totals_by_bank,
    totals_by_status,
    totals_by_type,
)
from check_gateway.domain.models import Check, CheckStatus, CheckType


@pytest.mark.parametrize("raw, expected", [
    (1500, 1500.0),
    ("250.5", 250.5),
    (None, 0.0),
    ("abc", 0.0),
    (float("nan"), 0.0),
    (float("inf"), 0.0),
    (-50, 0.0),
])
def test_amount_of_degrades_bad_values_to_zero(make_check, raw, expected):
    """Test missing, negative, non-numeric and non-finite amounts read as 0"""
    assert amount_of(make_check(amount=raw)) == expected


def test_totals_by_type_partition(make_check):
    """Test incoming + outgoing sums equal the grand total for well-typed records"""
    checks = [
        make_check(amount=1000, type=CheckType.INCOMING),
        make_check(amount=300, type=CheckType.INCOMING, status=CheckStatus.RETURNED),
        make_check(amount=500, type=CheckType.OUTGOING, status=CheckStatus.PAID),
    ]

    by_type = totals_by_type(checks)

    assert by_type["incoming"].amount == 1300
    assert by_type["incoming"].count == 2
    assert by_type["outgoing"].amount == 500
    assert by_type["incoming"].amount + by_type["outgoing"].amount == sum(amount_of(c) for c in checks)
    assert net_liquidity(checks) == 800


def test_totals_by_status_lists_every_state(make_check):
    """Test every status bucket is present, empty ones at zero"""
    by_status = totals_by_status([make_check(amount=200, status=CheckStatus.GARANTIE)])

    assert set(by_status) == {"pending", "paid", "returned", "garantie"}
    assert by_status["garantie"].amount == 200
    assert by_status["paid"].count == 0


def test_unknown_status_lands_in_no_bucket():
    """Test a record with an unrecognized status is skipped by status totals"""
    check = Check.from_record({
        "id": "x1",
        "amount": 100,
        "type": "incoming",
        "status": "cancelled",
        "due_date": "2025-06-20",
    })

    by_status = totals_by_status([check])

    assert sum(b.amount for b in by_status.values()) == 0
    assert totals_by_type([check])["incoming"].amount == 100


def test_totals_by_bank_sorted_descending(make_check):
    """Test bank totals come back largest first"""
    checks = [
        make_check(amount=100, bank_name="Small"),
        make_check(amount=900, bank_name="Big"),
        make_check(amount=200, bank_name="Small"),
    ]

    by_bank = totals_by_bank(checks)

    assert list(by_bank) == ["Big", "Small"]
    assert by_bank["Small"].amount == 300
    assert by_bank["Small"].count == 2


def test_incoming_due_today_requires_pending_and_same_day(make_check, now):
    """Test today's receivables exclude other days, statuses and directions"""
    due_today = make_check(amount=400, due_in=0)
    checks = [
        due_today,
        make_check(amount=50, due_in=1),
        make_check(amount=60, due_in=0, status=CheckStatus.PAID),
        make_check(amount=70, due_in=0, type=CheckType.OUTGOING),
    ]

    window = incoming_due_today(checks, now)

    assert window.checks == (due_today,)
    assert window.total == 400
    assert window.count == 1


def test_outgoing_window_uses_day_bounds(make_check, now):
    """Test the 3-day window covers today 00:00 through the end of day +3"""
    this_morning = make_check(type=CheckType.OUTGOING, due_date="2025-06-15T08:00:00")
    day_three = make_check(type=CheckType.OUTGOING, due_in=3)
    day_four = make_check(type=CheckType.OUTGOING, due_in=4)
    yesterday = make_check(type=CheckType.OUTGOING, due_in=-1)

    window = outgoing_due_within([this_morning, day_three, day_four, yesterday], now)

    assert set(c.id for c in window.checks) == {this_morning.id, day_three.id}


def test_outgoing_window_size_is_configurable(make_check, now):
    """Test a wider window picks up later payables"""
    day_five = make_check(type=CheckType.OUTGOING, due_in=5)

    assert outgoing_due_within([day_five], now, days=3).count == 0
    assert outgoing_due_within([day_five], now, days=7).count == 1


def test_pending_due_soon_covers_both_directions(make_check, now):
    """Test the 7-day pending window ignores direction"""
    checks = [
        make_check(type=CheckType.INCOMING, due_in=2),
        make_check(type=CheckType.OUTGOING, due_in=7),
        make_check(type=CheckType.OUTGOING, due_in=8),
    ]

    assert pending_due_soon(checks, now).count == 2


def test_is_overdue(make_check, now):
    """Test overdue requires pending status and a past due date"""
    assert is_overdue(make_check(due_in=-1), now) is True
    assert is_overdue(make_check(due_in=-1, status=CheckStatus.PAID), now) is False
    assert is_overdue(make_check(due_in=1), now) is False
    assert is_overdue(make_check(due_date="not-a-date"), now) is False
    assert is_overdue(make_check(due_date=""), now) is False


def test_windows_skip_unparseable_due_dates(make_check, now):
    """Test a malformed due date is left out of every window instead of raising"""
    bad = make_check(due_date="31/02/2025", type=CheckType.OUTGOING)

    assert outgoing_due_within([bad], now).count == 0
    assert pending_due_soon([bad], now).count == 0


def test_recent_checks_newest_first(make_check):
    """Test recent checks sort by creation time with bad timestamps last"""
    old = make_check(created_at="2025-01-01T00:00:00")
    new = make_check(created_at="2025-06-01T00:00:00")
    broken = make_check(created_at="garbage")

    assert recent_checks([old, broken, new], limit=5) == [new, old, broken]
    assert recent_checks([old, broken, new], limit=1) == [new]


def test_health_index(make_check, now):
    """Test health index is the rounded share of non-overdue checks"""
    checks = [make_check(due_in=-1), make_check(due_in=1), make_check(due_in=2)]

    assert health_index(checks, now) == 67
    assert health_index([], now) == 100


def test_monthly_series_rolls_twelve_months(make_check, now):
    """Test the series ends on the current month and buckets by due month"""
    checks = [
        make_check(amount=100, due_date="2025-06-20"),
        make_check(amount=40, type=CheckType.OUTGOING, due_date="2025-05-02"),
        make_check(amount=999, due_date="2024-06-10"),  # outside the window
    ]

    series = monthly_series(checks, now)

    assert len(series) == 12
    assert (series[0].year, series[0].month) == (2024, 7)
    assert (series[-1].year, series[-1].month) == (2025, 6)
    assert series[-1].label == "Juin"
    assert series[-1].incoming == 100
    assert series[-2].outgoing == 40
    assert sum(p.incoming for p in series) == 100


def test_monthly_series_english_labels(now):
    """Test month labels follow the requested locale"""
    series = monthly_series([], now, months=2, locale="en")

    assert [p.label for p in series] == ["May", "Jun"]


def test_summarize_empty_portfolio(now):
    """Test an empty snapshot yields zero totals and empty windows"""
    summary = summarize([], now)

    assert summary.grand_total == 0
    assert summary.net_liquidity == 0
    assert summary.check_count == 0
    assert summary.outgoing_due_soon.count == 0
    assert summary.recent_checks == []


def test_summarize_accepts_aware_due_dates(make_check):
    """Test offset timestamps are compared in UTC"""
    now = datetime(2025, 6, 15, 10, 0, 0)
    check = make_check(type=CheckType.OUTGOING, due_date="2025-06-16T01:00:00+02:00")

    summary = summarize([check], now)

    assert summary.outgoing_due_soon.count == 1


def test_windows_accept_aware_now(make_check):
    """Test an offset-aware now is compared in UTC instead of raising"""
    now = datetime(2025, 6, 15, 23, 30, tzinfo=timezone(timedelta(hours=-2)))  # 16 Jun 01:30 UTC
    overdue = make_check(due_date="2025-06-16T01:00:00")
    payable = make_check(type=CheckType.OUTGOING, due_date="2025-06-19")

    summary = summarize([overdue, payable], now)

    assert is_overdue(overdue, now) is True
    assert summary.outgoing_due_soon.checks == (payable,)
    assert monthly_series([], now, months=1)[0].month == 6
