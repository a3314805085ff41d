"""Search, filtering and pagination of a check snapshot for list views"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Generic, Iterable, List, Optional, Sequence, TypeVar

from check_gateway.domain.models import Check, CheckStatus, CheckType
from check_gateway.utils.date_utils import end_of_day, parse_datetime, start_of_day

T = TypeVar("T")

PERIODS = ("today", "week", "15days", "month")
DEFAULT_PAGE_SIZE = 8


@dataclass
class CheckQuery:
    """List-view criteria; every unset criterion matches everything"""

    search: str = ""
    type: Optional[CheckType] = None
    status: Optional[CheckStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    period: Optional[str] = None  # one of PERIODS


@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def matches_search(check: Check, term: str) -> bool:
    """Issuer, payee and notes match case-insensitively; the check number as a substring"""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in (check.entity_name or "").lower()
        or term in (check.check_number or "")
        or needle in (check.fund_name or "").lower()
        or needle in (check.notes or "").lower()
    )


def _in_period(due: datetime, period: str, now: datetime) -> bool:
    today = start_of_day(now)
    if period == "today":
        return due.date() == now.date()
    if period == "week":
        return today - timedelta(days=7) <= due <= end_of_day(now)
    if period == "15days":
        return today - timedelta(days=15) <= due <= end_of_day(now)
    if period == "month":
        return (due.year, due.month) == (now.year, now.month)
    return True


def matches_dates(check: Check, query: CheckQuery, now: datetime) -> bool:
    """Date range and period filters; an unparseable due date never matches an active date filter"""
    if query.date_from is None and query.date_to is None and not query.period:
        return True
    due = parse_datetime(check.due_date)
    if due is None:
        return False
    if query.date_from is not None and due < start_of_day(parse_datetime(query.date_from)):
        return False
    if query.date_to is not None and due > end_of_day(parse_datetime(query.date_to)):
        return False
    if query.period and not _in_period(due, query.period, now):
        return False
    return True


def filter_checks(checks: Iterable[Check], query: CheckQuery, now: datetime) -> List[Check]:
    now = parse_datetime(now)
    return [
        c
        for c in checks
        if matches_search(c, query.search)
        and (query.type is None or c.type == query.type)
        and (query.status is None or c.status == query.status)
        and matches_dates(c, query, now)
    ]


def paginate(items: Sequence[T], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """
    Slice one page out of `items`.

    Pages are 1-based; a page outside [1, total_pages] is clamped to the
    nearest valid page.
    """
    page_size = max(1, page_size)
    total_pages = math.ceil(len(items) / page_size)
    page = min(max(1, page), max(1, total_pages))
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(items),
        total_pages=total_pages,
    )
