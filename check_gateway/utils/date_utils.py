"""Date manipulation utilities"""

from datetime import date, datetime, time, timezone
from typing import List, Optional, Tuple


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime (the engine's clock convention)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value) -> Optional[datetime]:
    """
    Parse a date field leniently.

    Accepts datetime, date and ISO-8601 strings (date only or full timestamp,
    with or without offset). Aware values are converted to naive UTC.
    Returns None for empty, missing or unparseable values instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.max)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move (year, month) by offset calendar months"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def trailing_months(moment: datetime, count: int = 12) -> List[Tuple[int, int]]:
    """(year, month) keys of the `count` months ending with moment's month, oldest first"""
    return [shift_month(moment.year, moment.month, -offset) for offset in range(count - 1, -1, -1)]
