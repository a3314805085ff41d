"""Domain models - pure Python dataclasses representing checks and derived views"""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

DateLike = Union[str, date, datetime, None]


class CheckType(str, Enum):
    """Direction of cash flow"""

    INCOMING = "incoming"
    OUTGOING = "outgoing"


class CheckStatus(str, Enum):
    """Lifecycle state of a check"""

    PENDING = "pending"
    PAID = "paid"
    RETURNED = "returned"
    GARANTIE = "garantie"  # held as collateral


class RiskKind(str, Enum):
    RETURNED = "returned"
    OVERDUE = "overdue"
    HIGH_VALUE = "high_value"
    CONCENTRATION = "concentration"
    CLIENT_RISK = "client_risk"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Severity(str, Enum):
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


class NotificationStatus(str, Enum):
    NEW = "new"
    READ = "read"
    CLOSED = "closed"


@dataclass(frozen=True)
class Check:
    """Negotiable instrument record as supplied by the check store"""

    id: str
    check_number: str
    bank_name: str
    entity_name: str  # issuer / drawer
    amount: Any  # read through aggregation.amount_of()
    type: CheckType
    status: CheckStatus
    issue_date: DateLike = ""
    due_date: DateLike = ""
    created_at: DateLike = ""
    fund_name: Optional[str] = None  # payee
    notes: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Check":
        """
        Build a Check from a loose mapping (store row, JSON payload).

        Unknown keys are ignored; identifying text fields are coerced to str
        and default to "" when missing.
        Type and status are kept as raw strings when they are not known enum
        values, so a bad record lands in no bucket instead of raising.
        """
        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in record.items() if k in known}

        raw_type = data.get("type", "")
        raw_status = data.get("status", "")
        try:
            data["type"] = CheckType(raw_type)
        except ValueError:
            data["type"] = raw_type
        try:
            data["status"] = CheckStatus(raw_status)
        except ValueError:
            data["status"] = raw_status

        for text_field in ("id", "check_number", "bank_name", "entity_name"):
            value = data.get(text_field)
            data[text_field] = "" if value is None else str(value)
        data.setdefault("amount", 0)
        return cls(**data)


@dataclass
class SystemSettings:
    """Configuration snapshot owned by the settings collaborator"""

    high_value_threshold: float = 50_000
    alert_days: int = 3
    currency: str = "MAD"  # display only
    company_name: str = ""


@dataclass(frozen=True)
class RiskSignal:
    """One detected vulnerability, tied to zero or one check"""

    id: str
    kind: RiskKind
    level: RiskLevel
    description: str
    amount: float
    related_check_id: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    """User-facing alert, session scoped"""

    id: str
    title: str
    message: str
    severity: Severity
    status: NotificationStatus
    created_at: datetime
    link_id: Optional[str] = None


@dataclass
class BucketTotal:
    """Sum and count of the checks falling in one group"""

    amount: float = 0.0
    count: int = 0


@dataclass
class MonthStats:
    incoming: float = 0.0
    outgoing: float = 0.0

    @property
    def net(self) -> float:
        return self.incoming - self.outgoing


@dataclass
class MonthlyPoint:
    """One point of the rolling monthly chart series"""

    year: int
    month: int
    label: str
    incoming: float
    outgoing: float


@dataclass
class OperationalWindow:
    """Subset of checks matching a date window, with its amount sum"""

    checks: Tuple[Check, ...] = ()
    total: float = 0.0

    @property
    def count(self) -> int:
        return len(self.checks)


@dataclass
class PortfolioSummary:
    """Totals and operational windows for one snapshot"""

    by_type: Dict[str, BucketTotal]
    by_status: Dict[str, BucketTotal]
    by_bank: Dict[str, BucketTotal]
    by_entity: Dict[str, BucketTotal]
    total_incoming: float
    total_outgoing: float
    net_liquidity: float
    grand_total: float
    check_count: int
    incoming_due_today: OperationalWindow
    outgoing_due_soon: OperationalWindow
    pending_due_today: OperationalWindow
    pending_due_soon: OperationalWindow
    recent_checks: List[Check]
    health_index: int


@dataclass
class TrendDeltas:
    """Month-over-month percentage changes"""

    incoming: int
    outgoing: int
    net: int
    current: MonthStats = field(default_factory=MonthStats)
    previous: MonthStats = field(default_factory=MonthStats)


@dataclass
class RiskAnalysis:
    """Risk signals plus the exposure figures computed alongside them"""

    signals: List[RiskSignal]
    top_exposure_entity: Optional[str]
    top_exposure_pct: float
    recovery_rate: float
    overdue_incoming_sum: float
    upcoming_outgoing: OperationalWindow


@dataclass
class RiskScore:
    high_count: int
    medium_count: int
    risk_score: int
    total_risk_amount: float
    band: RiskLevel


@dataclass
class StrategicBrief:
    """Narrative paragraphs for the risk dashboard"""

    liquidity_diagnostic: str
    exposure_notice: str
    recommendation: str
    provisioning_note: str


@dataclass
class PortfolioReport:
    """Every derived view of one snapshot, computed at one instant"""

    generated_at: datetime
    summary: PortfolioSummary
    trends: TrendDeltas
    monthly: List[MonthlyPoint]
    risk: RiskAnalysis
    score: RiskScore
    brief: StrategicBrief


def enum_value(value: Any) -> Any:
    """Plain value of an enum member; anything else is returned unchanged"""
    return value.value if isinstance(value, Enum) else value
