"""POST /v1/analytics, GET /v1/analytics/live - portfolio risk & liquidity analytics"""

import time
import logging
from datetime import datetime
from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException, Request

from check_gateway.api.dependencies import (
    get_check_store_client,
    get_request_id,
    resolve_now,
    resolve_settings,
    resolve_window_days,
)
from check_gateway.api.v1.presenters import analytics_response
from check_gateway.api.v1.schemas import AnalyticsResponse, SnapshotRequest
from check_gateway.config import settings
from check_gateway.domain.engine import analyze_portfolio
from check_gateway.domain.exceptions import SnapshotUnavailableError
from check_gateway.domain.models import Check, SystemSettings
from check_gateway.infrastructure.clients.check_store import CheckStoreClient
from check_gateway.infrastructure.observability.logging import log_analysis
from check_gateway.infrastructure.observability.metrics import (
    record_analysis,
    snapshot_fetch_failures_counter,
)

router = APIRouter()


def _analyze(
    checks: Sequence[Check],
    system_settings: SystemSettings,
    now: datetime,
    request_id: str,
    source: str,
) -> AnalyticsResponse:
    start_time = time.time()

    report = analyze_portfolio(
        checks,
        system_settings,
        now,
        window_days=resolve_window_days(system_settings),
        locale=settings.month_label_locale,
        recent_limit=settings.recent_checks_limit,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_analysis(source, report.risk.signals, report.score.risk_score)
    log_analysis(request_id, len(checks), len(report.risk.signals), report.score.risk_score, duration_ms)

    return analytics_response(report, system_settings.currency)


@router.post("/analytics", response_model=AnalyticsResponse)
def analyze_snapshot(request_body: SnapshotRequest, request: Request):
    """
    Analyze a submitted snapshot.

    Returns summary totals, trend deltas, the 12-month series, risk signals
    with exposure figures, the risk score and the strategic brief, all
    computed against the same reference instant.
    """
    checks = [c.to_domain() for c in request_body.checks]
    return _analyze(
        checks,
        resolve_settings(request_body.settings),
        resolve_now(request_body.now),
        get_request_id(request),
        source="submitted",
    )


@router.get("/analytics/live", response_model=AnalyticsResponse)
async def analyze_live_snapshot(
    request: Request,
    check_store: CheckStoreClient = Depends(get_check_store_client),
):
    """
    Fetch the current snapshot from the check store, then analyze it.

    Flow:
    1. Fetch checks and stored settings
    2. Merge stored settings over service defaults
    3. Run the analytics engine at the current server time
    """
    request_id = get_request_id(request)

    try:
        checks, stored_settings = await check_store.fetch_snapshot()
    except SnapshotUnavailableError as e:
        snapshot_fetch_failures_counter.inc()
        logging.error(f"Check store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Check store unavailable")

    return _analyze(
        checks,
        resolve_settings(None, stored_settings),
        resolve_now(None),
        request_id,
        source="live",
    )
