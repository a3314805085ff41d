"""Prometheus metrics for monitoring portfolio risk, alerts and snapshot fetches"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from check_gateway.domain.models import Notification, RiskSignal, enum_value

# Analysis metrics
analysis_counter = Counter(
    "check_gateway_analysis_total",
    "Portfolio analyses computed",
    ["source"],  # submitted | live
)

risk_signal_counter = Counter(
    "check_gateway_risk_signals_total",
    "Risk signals emitted by kind",
    ["kind"],  # returned | overdue | high_value | concentration | client_risk
)

risk_score_histogram = Histogram(
    "check_gateway_risk_score",
    "Distribution of portfolio risk scores",
    buckets=[0, 10, 20, 30, 50, 70, 90, 100],
)

# Notification metrics
notification_counter = Counter(
    "check_gateway_notifications_total",
    "Notifications created by severity",
    ["severity"],  # danger | warning | info
)

# Check store metrics
snapshot_fetch_failures_counter = Counter(
    "snapshot_fetch_failures_total",
    "Failed check store calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(source: str, signals: Iterable[RiskSignal], risk_score: int) -> None:
    """Record analysis metrics for monitoring signal mix and score distribution"""
    analysis_counter.labels(source=source).inc()
    for signal in signals:
        risk_signal_counter.labels(kind=enum_value(signal.kind)).inc()
    risk_score_histogram.observe(risk_score)


def record_notifications(created: Iterable[Notification]) -> None:
    for notification in created:
        notification_counter.labels(severity=enum_value(notification.severity)).inc()
