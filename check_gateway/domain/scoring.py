"""Risk scoring - reduces risk signals to one bounded portfolio score"""

from typing import Iterable

from check_gateway.domain.models import RiskLevel, RiskScore, RiskSignal

HIGH_WEIGHT = 30
MEDIUM_WEIGHT = 10
MAX_SCORE = 100

# Score bands (dashboard colouring)
HIGH_BAND_ABOVE = 50
MEDIUM_BAND_ABOVE = 20


def calculate_risk_score(high_count: int, medium_count: int) -> int:
    """
    Linear weighted score capped at 100.

    Scoring weights:
    - 30 points per high-level signal
    - 10 points per medium-level signal
    - low-level signals do not contribute
    """
    return min(MAX_SCORE, high_count * HIGH_WEIGHT + medium_count * MEDIUM_WEIGHT)


def determine_risk_band(score: int) -> RiskLevel:
    """
    Map a score to a band.

    - 0 - 20:   low
    - 21 - 50:  medium
    - 51+:      high
    """
    if score > HIGH_BAND_ABOVE:
        return RiskLevel.HIGH
    elif score > MEDIUM_BAND_ABOVE:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def score_signals(signals: Iterable[RiskSignal]) -> RiskScore:
    """
    Score a list of risk signals.

    total_risk_amount sums every signal, so a check that triggers two rules
    is counted twice: it measures exposure, not distinct principal.
    """
    signals = list(signals)
    high_count = sum(1 for s in signals if s.level == RiskLevel.HIGH)
    medium_count = sum(1 for s in signals if s.level == RiskLevel.MEDIUM)
    score = calculate_risk_score(high_count, medium_count)

    return RiskScore(
        high_count=high_count,
        medium_count=medium_count,
        risk_score=score,
        total_risk_amount=sum((s.amount for s in signals), 0.0),
        band=determine_risk_band(score),
    )
