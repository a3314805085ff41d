"""Totals, time buckets and operational windows over a check snapshot"""

import math
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from check_gateway.domain.models import (
    BucketTotal,
    Check,
    CheckStatus,
    CheckType,
    MonthlyPoint,
    MonthStats,
    OperationalWindow,
    PortfolioSummary,
    enum_value,
)
from check_gateway.utils.date_utils import (
    end_of_day,
    parse_datetime,
    start_of_day,
    trailing_months,
)
from check_gateway.utils.math_utils import round_half_away

UPCOMING_WINDOW_DAYS = 3
DUE_SOON_DAYS = 7
RECENT_CHECKS_LIMIT = 5

MONTH_LABELS: Dict[str, Tuple[str, ...]] = {
    "fr": ("Jan", "Fév", "Mar", "Avr", "Mai", "Juin", "Juil", "Août", "Sep", "Oct", "Nov", "Déc"),
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}


def amount_of(check: Check) -> float:
    """Amount as a float; missing, negative, NaN, infinite or non-numeric amounts count as 0"""
    try:
        amount = float(check.amount)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) and amount > 0 else 0.0


def sum_amounts(checks: Iterable[Check]) -> float:
    return sum((amount_of(c) for c in checks), 0.0)


def _group(checks: Iterable[Check], key: Callable[[Check], str]) -> Dict[str, BucketTotal]:
    groups: Dict[str, BucketTotal] = defaultdict(BucketTotal)
    for check in checks:
        bucket = groups[key(check)]
        bucket.amount += amount_of(check)
        bucket.count += 1
    return groups


def totals_by_type(checks: Iterable[Check]) -> Dict[str, BucketTotal]:
    """Sum and count per direction; both directions always present"""
    grouped = _group(checks, lambda c: enum_value(c.type))
    return {t.value: grouped.get(t.value, BucketTotal()) for t in CheckType}


def totals_by_status(checks: Iterable[Check]) -> Dict[str, BucketTotal]:
    """Sum and count per lifecycle state; all four states always present"""
    grouped = _group(checks, lambda c: enum_value(c.status))
    return {s.value: grouped.get(s.value, BucketTotal()) for s in CheckStatus}


def _ranked(groups: Dict[str, BucketTotal]) -> Dict[str, BucketTotal]:
    return dict(sorted(groups.items(), key=lambda item: item[1].amount, reverse=True))


def totals_by_bank(checks: Iterable[Check]) -> Dict[str, BucketTotal]:
    """Per-bank totals, largest amount first"""
    return _ranked(_group(checks, lambda c: c.bank_name or ""))


def totals_by_entity(checks: Iterable[Check]) -> Dict[str, BucketTotal]:
    """Per-issuer totals, largest amount first"""
    return _ranked(_group(checks, lambda c: c.entity_name or ""))


def net_liquidity(checks: Sequence[Check]) -> float:
    by_type = totals_by_type(checks)
    return by_type[CheckType.INCOMING.value].amount - by_type[CheckType.OUTGOING.value].amount


def bucket_by_month(checks: Iterable[Check]) -> Dict[Tuple[int, int], MonthStats]:
    """
    Incoming/outgoing sums keyed by (year, month) of the due date.

    Checks without a parseable due date are left out.
    """
    buckets: Dict[Tuple[int, int], MonthStats] = defaultdict(MonthStats)
    for check in checks:
        due = parse_datetime(check.due_date)
        if due is None:
            continue
        if check.type == CheckType.INCOMING:
            buckets[(due.year, due.month)].incoming += amount_of(check)
        elif check.type == CheckType.OUTGOING:
            buckets[(due.year, due.month)].outgoing += amount_of(check)
    return buckets


def month_stats(checks: Iterable[Check], year: int, month: int) -> MonthStats:
    return bucket_by_month(checks).get((year, month), MonthStats())


def monthly_series(
    checks: Iterable[Check],
    now: datetime,
    months: int = 12,
    locale: str = "fr",
) -> List[MonthlyPoint]:
    """Rolling series of `months` points ending with the current month, oldest first"""
    now = parse_datetime(now)
    labels = MONTH_LABELS.get(locale, MONTH_LABELS["fr"])
    buckets = bucket_by_month(checks)
    series = []
    for year, month in trailing_months(now, months):
        stats = buckets.get((year, month), MonthStats())
        series.append(
            MonthlyPoint(
                year=year,
                month=month,
                label=labels[month - 1],
                incoming=stats.incoming,
                outgoing=stats.outgoing,
            )
        )
    return series


def _window(checks: Iterable[Check], predicate: Callable[[Check, datetime], bool]) -> OperationalWindow:
    matched = []
    for check in checks:
        due = parse_datetime(check.due_date)
        if due is not None and predicate(check, due):
            matched.append(check)
    return OperationalWindow(checks=tuple(matched), total=sum_amounts(matched))


def incoming_due_today(checks: Iterable[Check], now: datetime) -> OperationalWindow:
    """Pending incoming checks due on the same calendar day as now"""
    today = parse_datetime(now).date()
    return _window(
        checks,
        lambda c, due: c.type == CheckType.INCOMING
        and c.status == CheckStatus.PENDING
        and due.date() == today,
    )


def outgoing_due_within(
    checks: Iterable[Check],
    now: datetime,
    days: int = UPCOMING_WINDOW_DAYS,
) -> OperationalWindow:
    """Pending outgoing checks due between today 00:00 and the end of today + days"""
    now = parse_datetime(now)
    lower = start_of_day(now)
    upper = end_of_day(now + timedelta(days=days))
    return _window(
        checks,
        lambda c, due: c.type == CheckType.OUTGOING
        and c.status == CheckStatus.PENDING
        and lower <= due <= upper,
    )


def pending_due_today(checks: Iterable[Check], now: datetime) -> OperationalWindow:
    """Pending checks of either direction due today"""
    today = parse_datetime(now).date()
    return _window(
        checks,
        lambda c, due: c.status == CheckStatus.PENDING and due.date() == today,
    )


def pending_due_soon(checks: Iterable[Check], now: datetime, days: int = DUE_SOON_DAYS) -> OperationalWindow:
    """Pending checks of either direction due between today and the end of today + days"""
    now = parse_datetime(now)
    lower = start_of_day(now)
    upper = end_of_day(now + timedelta(days=days))
    return _window(
        checks,
        lambda c, due: c.status == CheckStatus.PENDING and lower <= due <= upper,
    )


def is_overdue(check: Check, now: datetime) -> bool:
    """Pending with a due date strictly before now; bad dates are never overdue"""
    now = parse_datetime(now)
    if check.status != CheckStatus.PENDING:
        return False
    due = parse_datetime(check.due_date)
    return due is not None and due < now


def recent_checks(checks: Iterable[Check], limit: int = RECENT_CHECKS_LIMIT) -> List[Check]:
    """Most recently created checks first; unparseable timestamps sort last"""
    ordered = sorted(
        checks,
        key=lambda c: parse_datetime(c.created_at) or datetime.min,
        reverse=True,
    )
    return ordered[:limit]


def health_index(checks: Sequence[Check], now: datetime) -> int:
    """Share of the portfolio that is not overdue, as a rounded percentage"""
    overdue = sum(1 for c in checks if is_overdue(c, now))
    return round_half_away(100 - overdue / (len(checks) or 1) * 100)


def summarize(
    checks: Sequence[Check],
    now: datetime,
    window_days: int = UPCOMING_WINDOW_DAYS,
    recent_limit: int = RECENT_CHECKS_LIMIT,
) -> PortfolioSummary:
    """Compute every total and window of the summary view in one pass over the snapshot"""
    now = parse_datetime(now)
    by_type = totals_by_type(checks)
    total_incoming = by_type[CheckType.INCOMING.value].amount
    total_outgoing = by_type[CheckType.OUTGOING.value].amount

    return PortfolioSummary(
        by_type=by_type,
        by_status=totals_by_status(checks),
        by_bank=totals_by_bank(checks),
        by_entity=totals_by_entity(checks),
        total_incoming=total_incoming,
        total_outgoing=total_outgoing,
        net_liquidity=total_incoming - total_outgoing,
        grand_total=sum_amounts(checks),
        check_count=len(checks),
        incoming_due_today=incoming_due_today(checks, now),
        outgoing_due_soon=outgoing_due_within(checks, now, window_days),
        pending_due_today=pending_due_today(checks, now),
        pending_due_soon=pending_due_soon(checks, now),
        recent_checks=recent_checks(checks, recent_limit),
        health_index=health_index(checks, now),
    )
