"""Operational alerts derived from check status and due dates"""

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, List, Sequence

from check_gateway.domain.aggregation import is_overdue
from check_gateway.domain.exceptions import NotificationNotFoundError
from check_gateway.domain.models import (
    Check,
    CheckStatus,
    Notification,
    NotificationStatus,
    Severity,
)
from check_gateway.utils.date_utils import parse_datetime

RETURNED_TITLE = "Alert: Returned check"
OVERDUE_TITLE = "Risk: Maturity passed"


def new_notification_id() -> str:
    return str(uuid.uuid4())


def _alerts_for(check: Check, now: datetime) -> List[tuple]:
    alerts = []
    if check.status == CheckStatus.RETURNED:
        alerts.append(
            (RETURNED_TITLE, f"Instrument #{check.check_number} was marked as returned.", Severity.DANGER)
        )
    if is_overdue(check, now):
        alerts.append(
            (OVERDUE_TITLE, f"Instrument #{check.check_number} has reached maturity.", Severity.WARNING)
        )
    return alerts


def pending_alerts(
    checks: Iterable[Check],
    existing: Sequence[Notification],
    now: datetime,
    id_factory: Callable[[], str] = new_notification_id,
) -> List[Notification]:
    """
    Notifications for conditions not yet present in `existing`, most recent first.

    A (title, link_id) pair already in the list, whatever its status, is never
    emitted again; only clearing the list re-arms it.
    """
    now = parse_datetime(now)
    seen = {(n.title, n.link_id) for n in existing}
    created: List[Notification] = []
    for check in checks:
        for title, message, severity in _alerts_for(check, now):
            if (title, check.id) in seen:
                continue
            seen.add((title, check.id))
            created.insert(
                0,
                Notification(
                    id=id_factory(),
                    title=title,
                    message=message,
                    severity=severity,
                    status=NotificationStatus.NEW,
                    created_at=now,
                    link_id=check.id,
                ),
            )
    return created


def derive_notifications(
    checks: Iterable[Check],
    existing: Sequence[Notification],
    now: datetime,
    id_factory: Callable[[], str] = new_notification_id,
) -> List[Notification]:
    """New alerts prepended to the existing list; existing entries are left untouched"""
    return pending_alerts(checks, existing, now, id_factory) + list(existing)


def unread_count(notifications: Iterable[Notification]) -> int:
    return sum(1 for n in notifications if n.status == NotificationStatus.NEW)


def _set_status(notifications: Sequence[Notification], notification_id: str, status: NotificationStatus) -> List[Notification]:
    if not any(n.id == notification_id for n in notifications):
        raise NotificationNotFoundError(f"Notification {notification_id} not found")
    return [replace(n, status=status) if n.id == notification_id else n for n in notifications]


def mark_read(notifications: Sequence[Notification], notification_id: str) -> List[Notification]:
    return _set_status(notifications, notification_id, NotificationStatus.READ)


def close(notifications: Sequence[Notification], notification_id: str) -> List[Notification]:
    return _set_status(notifications, notification_id, NotificationStatus.CLOSED)


def mark_all_read(notifications: Sequence[Notification]) -> List[Notification]:
    return [
        replace(n, status=NotificationStatus.READ) if n.status == NotificationStatus.NEW else n
        for n in notifications
    ]


def clear(notifications: Sequence[Notification]) -> List[Notification]:
    return []
