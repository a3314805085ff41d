"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from typing import Optional

from fastapi import Header, Request
from check_gateway.api.v1.schemas import SystemSettingsSchema
from check_gateway.config import settings
from check_gateway.domain.models import SystemSettings
from check_gateway.infrastructure.clients.check_store import CheckStoreClient
from check_gateway.infrastructure.inbox import NotificationInbox, inbox
from check_gateway.utils.date_utils import parse_datetime, utc_now


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session_id(x_session_id: str = Header("default")) -> str:
    """Inbox key for the calling client session"""
    return x_session_id


def get_check_store_client() -> CheckStoreClient:
    """Provide check store client instance"""
    return CheckStoreClient()


def get_inbox() -> NotificationInbox:
    """Provide the process-wide notification inbox"""
    return inbox


def resolve_settings(
    submitted: Optional[SystemSettingsSchema],
    stored: Optional[SystemSettings] = None,
) -> SystemSettings:
    """Submitted values win over stored ones, which win over service defaults"""
    resolved = SystemSettings(
        high_value_threshold=settings.default_high_value_threshold,
        alert_days=settings.default_alert_days,
        currency=settings.default_currency,
    )
    for source in (stored, submitted):
        if source is None:
            continue
        for name in ("high_value_threshold", "alert_days", "currency", "company_name"):
            value = getattr(source, name, None)
            if value is not None:
                setattr(resolved, name, value)
    return resolved


def resolve_window_days(system_settings: SystemSettings) -> Optional[int]:
    """Outgoing window size: alert_days when opted in, else the engine's fixed default"""
    if settings.use_alert_days_window:
        return system_settings.alert_days
    return None


def resolve_now(now: Optional[datetime]) -> datetime:
    return parse_datetime(now) if now is not None else utc_now()
