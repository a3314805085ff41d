"""In-memory notification inbox, one list per client session"""

import threading
from datetime import datetime
from typing import Dict, List, Sequence

from check_gateway.domain import notifications as rules
from check_gateway.domain.models import Check, Notification


class NotificationInbox:
    """
    Session-scoped notification lists.

    Lists live only in process memory, so a restart clears them. Each
    operation swaps the session's list for a new one under a lock. Only
    sessions holding at least one notification are kept.
    """

    def __init__(self):
        self._lists: Dict[str, List[Notification]] = {}
        self._lock = threading.Lock()

    def _store(self, session_id: str, notifications: List[Notification]) -> List[Notification]:
        if notifications:
            self._lists[session_id] = notifications
        else:
            self._lists.pop(session_id, None)
        return list(notifications)

    def get(self, session_id: str) -> List[Notification]:
        with self._lock:
            return list(self._lists.get(session_id, []))

    def sync(self, session_id: str, checks: Sequence[Check], now: datetime) -> List[Notification]:
        """Derive alerts for a snapshot and return only the newly created ones"""
        with self._lock:
            current = self._lists.get(session_id, [])
            created = rules.pending_alerts(checks, current, now)
            self._store(session_id, created + current)
            return created

    def mark_read(self, session_id: str, notification_id: str) -> List[Notification]:
        with self._lock:
            return self._store(session_id, rules.mark_read(self._lists.get(session_id, []), notification_id))

    def close(self, session_id: str, notification_id: str) -> List[Notification]:
        with self._lock:
            return self._store(session_id, rules.close(self._lists.get(session_id, []), notification_id))

    def mark_all_read(self, session_id: str) -> List[Notification]:
        with self._lock:
            return self._store(session_id, rules.mark_all_read(self._lists.get(session_id, [])))

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._store(session_id, rules.clear(self._lists.get(session_id, [])))

    def session_count(self) -> int:
        with self._lock:
            return len(self._lists)


inbox = NotificationInbox()
