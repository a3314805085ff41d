"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from check_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis(
    request_id: str,
    check_count: int,
    signal_count: int,
    risk_score: int,
    duration_ms: float,
) -> None:
    """Log structured analysis outcome"""
    logging.info(
        "Portfolio analysis completed",
        extra={
            "request_id": request_id,
            "step": "analysis_complete",
            "check_count": check_count,
            "signal_count": signal_count,
            "risk_score": risk_score,
            "duration_ms": duration_ms,
        },
    )


def log_notifications(request_id: str, session_id: str, created: int, unread: int) -> None:
    logging.info(
        "Notifications synced",
        extra={
            "request_id": request_id,
            "session_id": session_id,
            "step": "notifications_sync",
            "created_count": created,
            "unread": unread,
        },
    )
