"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from check_gateway.domain.models import Check, CheckStatus, CheckType


class CheckSchema(BaseModel):
    """Check record as submitted by a presentation client"""

    id: str = Field(..., min_length=1, description="Opaque check identifier")
    check_number: str = ""
    bank_name: str = ""
    entity_name: str = Field("", description="Issuer / drawer")
    fund_name: Optional[str] = Field(None, description="Payee")
    amount: Optional[float] = Field(None, ge=0)
    issue_date: Optional[str] = ""
    due_date: Optional[str] = Field("", description="ISO date; malformed values are tolerated")
    type: CheckType
    status: CheckStatus
    created_at: Optional[str] = ""
    notes: Optional[str] = None
    image_url: Optional[str] = None

    def to_domain(self) -> Check:
        return Check.from_record(self.model_dump())


class SystemSettingsSchema(BaseModel):
    """Settings snapshot; omitted fields fall back to service defaults"""

    high_value_threshold: Optional[float] = Field(None, ge=0)
    alert_days: Optional[int] = Field(None, ge=0)
    currency: Optional[str] = None
    company_name: Optional[str] = None


class SnapshotRequest(BaseModel):
    """Request body for POST /v1/analytics and POST /v1/notifications/sync"""

    checks: List[CheckSchema] = Field(default_factory=list)
    settings: Optional[SystemSettingsSchema] = None
    now: Optional[datetime] = Field(None, description="Reference instant; defaults to server time (UTC)")


class BucketSchema(BaseModel):
    amount: float
    count: int


class CheckOut(BaseModel):
    """Check as echoed back in responses"""

    id: str
    check_number: str
    bank_name: str
    entity_name: str
    fund_name: Optional[str] = None
    amount: float
    issue_date: Optional[str] = None
    due_date: Optional[str] = None
    type: str
    status: str
    created_at: Optional[str] = None
    notes: Optional[str] = None


class WindowSchema(BaseModel):
    """Operational window: matched checks and their amount sum"""

    count: int
    total: float
    check_ids: List[str]


class SummarySchema(BaseModel):
    total_incoming: float
    total_outgoing: float
    net_liquidity: float
    grand_total: float
    check_count: int
    health_index: int
    by_type: Dict[str, BucketSchema]
    by_status: Dict[str, BucketSchema]
    by_bank: Dict[str, BucketSchema]
    by_entity: Dict[str, BucketSchema]
    incoming_due_today: WindowSchema
    outgoing_due_soon: WindowSchema
    pending_due_today: WindowSchema
    pending_due_soon: WindowSchema
    recent_checks: List[CheckOut]


class TrendSchema(BaseModel):
    """Month-over-month change in percent"""

    incoming: int
    outgoing: int
    net: int


class MonthlyPointSchema(BaseModel):
    year: int
    month: int
    label: str
    incoming: float
    outgoing: float


class RiskSignalSchema(BaseModel):
    id: str
    kind: str
    level: str
    description: str
    amount: float
    related_check_id: Optional[str] = None


class RiskSchema(BaseModel):
    signals: List[RiskSignalSchema]
    top_exposure_entity: Optional[str] = None
    top_exposure_pct: float
    recovery_rate: float
    overdue_incoming_sum: float
    upcoming_outgoing: WindowSchema


class ScoreSchema(BaseModel):
    high_count: int
    medium_count: int
    risk_score: int = Field(..., ge=0, le=100)
    total_risk_amount: float
    band: str


class BriefSchema(BaseModel):
    liquidity_diagnostic: str
    exposure_notice: str
    recommendation: str
    provisioning_note: str


class AnalyticsResponse(BaseModel):
    """Response for POST /v1/analytics and GET /v1/analytics/live"""

    generated_at: datetime
    currency: str
    summary: SummarySchema
    trends: TrendSchema
    monthly: List[MonthlyPointSchema]
    risk: RiskSchema
    score: ScoreSchema
    brief: BriefSchema


class CheckQuerySchema(BaseModel):
    search: str = ""
    type: Optional[CheckType] = None
    status: Optional[CheckStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    period: Optional[Literal["today", "week", "15days", "month"]] = None


class SearchRequest(BaseModel):
    """Request body for POST /v1/checks/search"""

    checks: List[CheckSchema] = Field(default_factory=list)
    query: CheckQuerySchema = Field(default_factory=CheckQuerySchema)
    page: int = Field(1, ge=1)
    page_size: Optional[int] = Field(None, ge=1, le=200)
    now: Optional[datetime] = None


class SearchResponse(BaseModel):
    items: List[CheckOut]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    by_type: Dict[str, BucketSchema]
    by_status: Dict[str, BucketSchema]


class NotificationSchema(BaseModel):
    id: str
    title: str
    message: str
    severity: str
    status: str
    created_at: datetime
    link_id: Optional[str] = None


class NotificationListResponse(BaseModel):
    """Response for the /v1/notifications endpoints"""

    notifications: List[NotificationSchema]
    unread_count: int
    created: int = 0
