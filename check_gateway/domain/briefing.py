"""Strategic narrative for the risk dashboard"""

from check_gateway.domain.models import RiskAnalysis, RiskScore, StrategicBrief

RECOMMENDATION_ALERT_ABOVE = 30


def _money(amount: float, currency: str) -> str:
    return f"{amount:,.2f} {currency}".strip()


def liquidity_diagnostic(analysis: RiskAnalysis, currency: str = "") -> str:
    rate = f"{analysis.recovery_rate:.1f}%"
    if analysis.overdue_incoming_sum > 0:
        return (
            f"A recovery rate of {rate} calls for immediate action on "
            f"{_money(analysis.overdue_incoming_sum, currency)} of unpaid incoming checks."
        )
    return f"A recovery rate of {rate} reflects a healthy collection pipeline with no critical delay detected."


def exposure_notice(analysis: RiskAnalysis) -> str:
    if analysis.top_exposure_entity:
        return (
            f"Exposure is concentrated on {analysis.top_exposure_entity} "
            f"({analysis.top_exposure_pct:.1f}%). Plan a diversification strategy."
        )
    return "Exposure is well spread across counterparties. No systemic dependency detected."


def recommendation(score: RiskScore) -> str:
    if score.risk_score > RECOMMENDATION_ALERT_ABOVE:
        return (
            "Alert: liquidity fragility detected. Prioritise bank diversification "
            "and recovery of unpaid checks."
        )
    return "Stability confirmed. Keep verification processes in place and monitor critical thresholds."


def provisioning_note(analysis: RiskAnalysis, currency: str = "") -> str:
    window = analysis.upcoming_outgoing
    return f"{window.count} outgoing instrument(s) to provision: {_money(window.total, currency)}."


def build_brief(analysis: RiskAnalysis, score: RiskScore, currency: str = "") -> StrategicBrief:
    return StrategicBrief(
        liquidity_diagnostic=liquidity_diagnostic(analysis, currency),
        exposure_notice=exposure_notice(analysis),
        recommendation=recommendation(score),
        provisioning_note=provisioning_note(analysis, currency),
    )
