"""Portfolio analytics entry point - every derived view from one snapshot"""

from datetime import datetime
from typing import Iterable, Optional

from check_gateway.domain.aggregation import UPCOMING_WINDOW_DAYS, monthly_series, summarize
from check_gateway.domain.briefing import build_brief
from check_gateway.domain.models import Check, PortfolioReport, SystemSettings
from check_gateway.domain.risk import analyze_risks
from check_gateway.domain.scoring import score_signals
from check_gateway.domain.trends import compute_trends
from check_gateway.utils.date_utils import parse_datetime


def analyze_portfolio(
    checks: Iterable[Check],
    settings: SystemSettings,
    now: datetime,
    window_days: Optional[int] = None,
    locale: str = "fr",
    recent_limit: int = 5,
) -> PortfolioReport:
    """
    Main entry point: summary, trends, monthly series, risks, score and brief.

    The snapshot is frozen into a tuple and `now` is fixed once, so every
    output describes the same instant. `window_days` defaults to the fixed
    3-day outgoing window; callers opt in to `settings.alert_days` explicitly.
    """
    snapshot = tuple(checks)
    now = parse_datetime(now)
    days = UPCOMING_WINDOW_DAYS if window_days is None else window_days

    risk = analyze_risks(snapshot, settings, now, days)
    score = score_signals(risk.signals)

    return PortfolioReport(
        generated_at=now,
        summary=summarize(snapshot, now, days, recent_limit),
        trends=compute_trends(snapshot, now),
        monthly=monthly_series(snapshot, now, locale=locale),
        risk=risk,
        score=score,
        brief=build_brief(risk, score, settings.currency),
    )
