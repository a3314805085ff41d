"""Risk detection engine - rule evaluation over a check snapshot"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from check_gateway.domain.aggregation import (
    UPCOMING_WINDOW_DAYS,
    amount_of,
    is_overdue,
    outgoing_due_within,
    sum_amounts,
)
from check_gateway.domain.models import (
    Check,
    CheckStatus,
    CheckType,
    RiskAnalysis,
    RiskKind,
    RiskLevel,
    RiskSignal,
    SystemSettings,
)
from check_gateway.utils.date_utils import parse_datetime
from check_gateway.utils.math_utils import safe_ratio

CONCENTRATION_SHARE = 0.5
CONCENTRATION_MIN_CHECKS = 2  # strictly more than this many checks


def concentration_signals(checks: Sequence[Check]) -> List[RiskSignal]:
    """
    One portfolio-level signal per bank holding more than half of the total
    amount (all statuses), once the portfolio has more than two checks.
    """
    if len(checks) <= CONCENTRATION_MIN_CHECKS:
        return []

    grand_total = sum_amounts(checks)
    by_bank: Dict[str, float] = defaultdict(float)
    for check in checks:
        by_bank[check.bank_name or ""] += amount_of(check)

    return [
        RiskSignal(
            id=f"conc-{bank}",
            kind=RiskKind.CONCENTRATION,
            level=RiskLevel.MEDIUM,
            description=f"High concentration on {bank} (>50% of capital)",
            amount=amount,
        )
        for bank, amount in by_bank.items()
        if amount > grand_total * CONCENTRATION_SHARE
    ]


def returned_entities(checks: Sequence[Check]) -> set:
    """Issuers with at least one returned check anywhere in the snapshot"""
    return {c.entity_name for c in checks if c.status == CheckStatus.RETURNED}


def check_signals(
    check: Check,
    now: datetime,
    high_value_threshold: float,
    bad_clients: set,
) -> List[RiskSignal]:
    """
    Per-record rules.

    Overdue, high value and client risk all require a pending status, so a
    returned check only ever yields the returned signal.
    """
    amount = amount_of(check)
    signals = []

    if check.status == CheckStatus.RETURNED:
        signals.append(
            RiskSignal(
                id=f"ret-{check.id}",
                kind=RiskKind.RETURNED,
                level=RiskLevel.HIGH,
                description=f"Returned check #{check.check_number} ({check.entity_name})",
                amount=amount,
                related_check_id=check.id,
            )
        )

    if is_overdue(check, now):
        signals.append(
            RiskSignal(
                id=f"over-{check.id}",
                kind=RiskKind.OVERDUE,
                level=RiskLevel.HIGH,
                description=f"Maturity passed for #{check.check_number}",
                amount=amount,
                related_check_id=check.id,
            )
        )

    if check.status == CheckStatus.PENDING and amount >= high_value_threshold:
        signals.append(
            RiskSignal(
                id=f"high-{check.id}",
                kind=RiskKind.HIGH_VALUE,
                level=RiskLevel.MEDIUM,
                description=f"High-value instrument #{check.check_number}",
                amount=amount,
                related_check_id=check.id,
            )
        )

    if check.status == CheckStatus.PENDING and check.entity_name in bad_clients:
        signals.append(
            RiskSignal(
                id=f"cl-{check.id}",
                kind=RiskKind.CLIENT_RISK,
                level=RiskLevel.MEDIUM,
                description=f"At-risk client: {check.entity_name}",
                amount=amount,
                related_check_id=check.id,
            )
        )

    return signals


def detect_risks(checks: Sequence[Check], settings: SystemSettings, now: datetime) -> List[RiskSignal]:
    """Evaluate the concentration rule, then every per-record rule"""
    now = parse_datetime(now)
    signals = concentration_signals(checks)
    bad_clients = returned_entities(checks)
    threshold = _threshold(settings)
    for check in checks:
        signals.extend(check_signals(check, now, threshold, bad_clients))
    return signals


def top_exposure(checks: Sequence[Check]) -> Tuple[Optional[str], float]:
    """
    Issuer with the largest pending amount, and that amount as a percentage
    of the grand total across all statuses.
    """
    pending: Dict[str, float] = defaultdict(float)
    for check in checks:
        if check.status == CheckStatus.PENDING:
            pending[check.entity_name] += amount_of(check)
    if not pending:
        return None, 0.0

    # max() keeps the first issuer seen on ties
    entity, amount = max(pending.items(), key=lambda item: item[1])
    return entity, safe_ratio(amount, sum_amounts(checks)) * 100


def recovery_rate(checks: Sequence[Check]) -> float:
    """Paid incoming amount over all incoming amount, in percent; 0 without incoming"""
    incoming = [c for c in checks if c.type == CheckType.INCOMING]
    paid = sum_amounts(c for c in incoming if c.status == CheckStatus.PAID)
    return safe_ratio(paid, sum_amounts(incoming)) * 100


def overdue_incoming_sum(checks: Sequence[Check], now: datetime) -> float:
    return sum_amounts(c for c in checks if c.type == CheckType.INCOMING and is_overdue(c, now))


def analyze_risks(
    checks: Sequence[Check],
    settings: SystemSettings,
    now: datetime,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> RiskAnalysis:
    """
    Main entry point: risk signals plus the exposure figures shown next to them.

    Never raises on malformed records; bad dates and amounts degrade to
    "not overdue" and 0 respectively.
    """
    now = parse_datetime(now)
    entity, exposure_pct = top_exposure(checks)
    return RiskAnalysis(
        signals=detect_risks(checks, settings, now),
        top_exposure_entity=entity,
        top_exposure_pct=exposure_pct,
        recovery_rate=recovery_rate(checks),
        overdue_incoming_sum=overdue_incoming_sum(checks, now),
        upcoming_outgoing=outgoing_due_within(checks, now, window_days),
    )


def _threshold(settings: SystemSettings) -> float:
    try:
        return float(settings.high_value_threshold)
    except (TypeError, ValueError):
        return float("inf")
