"""Conversion of domain results into response schemas"""

from datetime import date, datetime
from typing import Dict, Iterable, List

from check_gateway.api.v1.schemas import (
    AnalyticsResponse,
    BriefSchema,
    BucketSchema,
    CheckOut,
    MonthlyPointSchema,
    NotificationListResponse,
    NotificationSchema,
    RiskSchema,
    RiskSignalSchema,
    ScoreSchema,
    SummarySchema,
    TrendSchema,
    WindowSchema,
)
from check_gateway.domain.aggregation import amount_of
from check_gateway.domain.models import (
    BucketTotal,
    Check,
    Notification,
    OperationalWindow,
    PortfolioReport,
    enum_value,
)
from check_gateway.domain.notifications import unread_count


def _date_text(value) -> str | None:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value) if value else None


def check_out(check: Check) -> CheckOut:
    return CheckOut(
        id=check.id,
        check_number=check.check_number,
        bank_name=check.bank_name,
        entity_name=check.entity_name,
        fund_name=check.fund_name,
        amount=amount_of(check),
        issue_date=_date_text(check.issue_date),
        due_date=_date_text(check.due_date),
        type=str(enum_value(check.type)),
        status=str(enum_value(check.status)),
        created_at=_date_text(check.created_at),
        notes=check.notes,
    )


def buckets(groups: Dict[str, BucketTotal]) -> Dict[str, BucketSchema]:
    return {key: BucketSchema(amount=b.amount, count=b.count) for key, b in groups.items()}


def window(win: OperationalWindow) -> WindowSchema:
    return WindowSchema(count=win.count, total=win.total, check_ids=[c.id for c in win.checks])


def analytics_response(report: PortfolioReport, currency: str) -> AnalyticsResponse:
    summary = report.summary
    risk = report.risk
    score = report.score

    return AnalyticsResponse(
        generated_at=report.generated_at,
        currency=currency,
        summary=SummarySchema(
            total_incoming=summary.total_incoming,
            total_outgoing=summary.total_outgoing,
            net_liquidity=summary.net_liquidity,
            grand_total=summary.grand_total,
            check_count=summary.check_count,
            health_index=summary.health_index,
            by_type=buckets(summary.by_type),
            by_status=buckets(summary.by_status),
            by_bank=buckets(summary.by_bank),
            by_entity=buckets(summary.by_entity),
            incoming_due_today=window(summary.incoming_due_today),
            outgoing_due_soon=window(summary.outgoing_due_soon),
            pending_due_today=window(summary.pending_due_today),
            pending_due_soon=window(summary.pending_due_soon),
            recent_checks=[check_out(c) for c in summary.recent_checks],
        ),
        trends=TrendSchema(
            incoming=report.trends.incoming,
            outgoing=report.trends.outgoing,
            net=report.trends.net,
        ),
        monthly=[
            MonthlyPointSchema(
                year=p.year,
                month=p.month,
                label=p.label,
                incoming=p.incoming,
                outgoing=p.outgoing,
            )
            for p in report.monthly
        ],
        risk=RiskSchema(
            signals=[
                RiskSignalSchema(
                    id=s.id,
                    kind=enum_value(s.kind),
                    level=enum_value(s.level),
                    description=s.description,
                    amount=s.amount,
                    related_check_id=s.related_check_id,
                )
                for s in risk.signals
            ],
            top_exposure_entity=risk.top_exposure_entity,
            top_exposure_pct=risk.top_exposure_pct,
            recovery_rate=risk.recovery_rate,
            overdue_incoming_sum=risk.overdue_incoming_sum,
            upcoming_outgoing=window(risk.upcoming_outgoing),
        ),
        score=ScoreSchema(
            high_count=score.high_count,
            medium_count=score.medium_count,
            risk_score=score.risk_score,
            total_risk_amount=score.total_risk_amount,
            band=enum_value(score.band),
        ),
        brief=BriefSchema(
            liquidity_diagnostic=report.brief.liquidity_diagnostic,
            exposure_notice=report.brief.exposure_notice,
            recommendation=report.brief.recommendation,
            provisioning_note=report.brief.provisioning_note,
        ),
    )


def notification_list(notifications: List[Notification], created: int = 0) -> NotificationListResponse:
    return NotificationListResponse(
        notifications=[_notification(n) for n in notifications],
        unread_count=unread_count(notifications),
        created=created,
    )


def _notification(n: Notification) -> NotificationSchema:
    return NotificationSchema(
        id=n.id,
        title=n.title,
        message=n.message,
        severity=enum_value(n.severity),
        status=enum_value(n.status),
        created_at=n.created_at,
        link_id=n.link_id,
    )


def checks_out(checks: Iterable[Check]) -> List[CheckOut]:
    return [check_out(c) for c in checks]
