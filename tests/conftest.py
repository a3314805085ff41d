"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from typing import Callable
from fastapi.testclient import TestClient
from check_gateway.api.main import create_app
from check_gateway.api.dependencies import get_inbox
from check_gateway.domain.models import Check, CheckStatus, CheckType, SystemSettings
from check_gateway.infrastructure.inbox import NotificationInbox


# Reference instant for every date-relative assertion
NOW = datetime(2025, 6, 15, 10, 0, 0)


def days_from_now(days: int) -> str:
    """ISO due date `days` calendar days away from NOW (negative for the past)"""
    return (NOW + timedelta(days=days)).date().isoformat()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_check() -> Callable[..., Check]:
    """Factory for checks with sensible defaults; override any field by keyword"""
    counter = {"n": 0}

    def _make(due_in: int | None = None, **overrides) -> Check:
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "id": f"chk_{n}",
            "check_number": f"{1000 + n}",
            "bank_name": f"Bank {n}",
            "entity_name": f"Entity {n}",
            "amount": 100.0,
            "type": CheckType.INCOMING,
            "status": CheckStatus.PENDING,
            "due_date": days_from_now(due_in if due_in is not None else 10),
            "created_at": (NOW - timedelta(days=30 - n)).isoformat(),
        }
        fields.update(overrides)
        return Check(**fields)

    return _make


@pytest.fixture
def system_settings() -> SystemSettings:
    return SystemSettings(high_value_threshold=10_000, alert_days=3, currency="MAD")


@pytest.fixture
def inbox() -> NotificationInbox:
    return NotificationInbox()


@pytest.fixture
def client(inbox: NotificationInbox) -> TestClient:
    """Create FastAPI test client with an isolated notification inbox"""
    app = create_app()
    app.dependency_overrides[get_inbox] = lambda: inbox
    return TestClient(app)


@pytest.fixture
def sample_payload() -> dict:
    """Snapshot mirroring a small treasury: two receivables, one payable, one bounced check"""
    return {
        "now": NOW.isoformat(),
        "settings": {"high_value_threshold": 10000, "currency": "MAD"},
        "checks": [
            {
                "id": "in_1",
                "check_number": "A-100",
                "bank_name": "Attijari",
                "entity_name": "Atlas Trading",
                "amount": 1000,
                "due_date": days_from_now(1),
                "type": "incoming",
                "status": "pending",
                "created_at": "2025-06-01T09:00:00",
            },
            {
                "id": "out_1",
                "check_number": "B-200",
                "bank_name": "BMCE",
                "entity_name": "Supplier Co",
                "amount": 500,
                "due_date": days_from_now(2),
                "type": "outgoing",
                "status": "pending",
                "created_at": "2025-06-02T09:00:00",
            },
            {
                "id": "ret_1",
                "check_number": "C-300",
                "bank_name": "CIH",
                "entity_name": "Delta Retail",
                "amount": 300,
                "due_date": days_from_now(-1),
                "type": "incoming",
                "status": "returned",
                "created_at": "2025-06-03T09:00:00",
            },
        ],
    }
