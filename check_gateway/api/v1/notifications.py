"""Session notification inbox endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from check_gateway.api.dependencies import (
    get_inbox,
    get_request_id,
    get_session_id,
    resolve_now,
)
from check_gateway.api.v1.presenters import notification_list
from check_gateway.api.v1.schemas import NotificationListResponse, SnapshotRequest
from check_gateway.domain.exceptions import NotificationNotFoundError
from check_gateway.domain.notifications import unread_count
from check_gateway.infrastructure.inbox import NotificationInbox
from check_gateway.infrastructure.observability.logging import log_notifications
from check_gateway.infrastructure.observability.metrics import record_notifications

router = APIRouter()


@router.post("/notifications/sync", response_model=NotificationListResponse)
def sync_notifications(
    request_body: SnapshotRequest,
    request: Request,
    session_id: str = Depends(get_session_id),
    inbox: NotificationInbox = Depends(get_inbox),
):
    """
    Derive alerts from a snapshot into the session inbox.

    Returned checks raise a danger alert and overdue pending checks a
    warning. A cause already in the inbox is not raised again, so syncing
    an unchanged snapshot creates nothing.
    """
    checks = [c.to_domain() for c in request_body.checks]
    created = inbox.sync(session_id, checks, resolve_now(request_body.now))
    notifications = inbox.get(session_id)

    record_notifications(created)
    log_notifications(get_request_id(request), session_id, len(created), unread_count(notifications))

    return notification_list(notifications, created=len(created))


@router.get("/notifications", response_model=NotificationListResponse)
def list_notifications(
    session_id: str = Depends(get_session_id),
    inbox: NotificationInbox = Depends(get_inbox),
):
    return notification_list(inbox.get(session_id))


@router.post("/notifications/read-all", response_model=NotificationListResponse)
def mark_all_notifications_read(
    session_id: str = Depends(get_session_id),
    inbox: NotificationInbox = Depends(get_inbox),
):
    return notification_list(inbox.mark_all_read(session_id))


@router.post("/notifications/{notification_id}/read", response_model=NotificationListResponse)
def mark_notification_read(
    notification_id: str,
    request: Request,
    session_id: str = Depends(get_session_id),
    inbox: NotificationInbox = Depends(get_inbox),
):
    try:
        return notification_list(inbox.mark_read(session_id, notification_id))
    except NotificationNotFoundError as e:
        logging.warning(f"Notification not found: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail="Notification not found")


@router.post("/notifications/{notification_id}/close", response_model=NotificationListResponse)
def close_notification(
    notification_id: str,
    request: Request,
    session_id: str = Depends(get_session_id),
    inbox: NotificationInbox = Depends(get_inbox),
):
    try:
        return notification_list(inbox.close(session_id, notification_id))
    except NotificationNotFoundError as e:
        logging.warning(f"Notification not found: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail="Notification not found")


@router.delete("/notifications", response_model=NotificationListResponse)
def clear_notifications(
    session_id: str = Depends(get_session_id),
    inbox: NotificationInbox = Depends(get_inbox),
):
    inbox.clear(session_id)
    return notification_list([])
