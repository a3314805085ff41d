"""Month-over-month trend deltas for the summary view"""

from datetime import datetime
from typing import Iterable

from check_gateway.domain.aggregation import bucket_by_month
from check_gateway.domain.models import Check, MonthStats, TrendDeltas
from check_gateway.utils.date_utils import parse_datetime, shift_month
from check_gateway.utils.math_utils import round_half_away


def trend(curr: float, prev: float) -> int:
    """
    Percentage change from prev to curr.

    A zero baseline cannot express a ratio: a positive current value is
    reported as a full +100% swing, anything else as 0%.
    """
    if prev == 0:
        return 100 if curr > 0 else 0
    return round_half_away((curr - prev) / prev * 100)


def compute_trends(checks: Iterable[Check], now: datetime) -> TrendDeltas:
    """Compare the calendar month of `now` with the previous calendar month"""
    now = parse_datetime(now)
    buckets = bucket_by_month(checks)
    current = buckets.get((now.year, now.month), MonthStats())
    previous = buckets.get(shift_month(now.year, now.month, -1), MonthStats())

    return TrendDeltas(
        incoming=trend(current.incoming, previous.incoming),
        outgoing=trend(current.outgoing, previous.outgoing),
        net=trend(current.net, previous.net),
        current=current,
        previous=previous,
    )
