"""Domain models - pure Python dataclasses representing business entities"""

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

from cashflow90.utils.date_utils import parse_date, parse_datetime

T = TypeVar("T")


class Provenance(str, enum.Enum):
    """Which tier produced a resolved value"""

    DATABASE = "db"
    DERIVED = "derived"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """A resolver result tagged with the tier it came from"""

    value: T
    provenance: Provenance


class AlertSeverity(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class DocumentStatus(str, enum.Enum):
    """Lifecycle status shared by receivable invoices and payable bills"""

    DRAFT = "draft"
    OPEN = "open"
    PAID = "paid"
    VOID = "void"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


CLOSED_STATUSES = frozenset({DocumentStatus.PAID, DocumentStatus.VOID})


@dataclass
class DailyActual:
    """One day of realised cash movement for a company"""

    company_id: str
    date: date
    opening_balance: float
    cash_in: float
    cash_out: float
    net_cash: float
    closing_balance: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DailyActual":
        return cls(
            company_id=str(row["company_id"]),
            date=parse_date(row["date"]),
            opening_balance=float(row["opening_balance"]),
            cash_in=float(row["cash_in"]),
            cash_out=float(row["cash_out"]),
            net_cash=float(row["net_cash"]),
            closing_balance=float(row["closing_balance"]),
        )


@dataclass
class BankTransaction:
    """Raw ledger entry; positive amount is an inflow, negative an outflow"""

    id: str
    company_id: str
    transaction_date: date
    amount: float
    description: str = ""
    category: str = ""
    direction: Optional[str] = None  # "in" | "out"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BankTransaction":
        return cls(
            id=str(row["id"]),
            company_id=str(row["company_id"]),
            transaction_date=parse_date(row["transaction_date"]),
            amount=float(row["amount"]),
            description=row.get("description") or "",
            category=row.get("category") or "",
            direction=row.get("direction"),
        )


@dataclass
class ForecastRun:
    """Header of one persisted forecast batch"""

    id: str
    company_id: str
    run_label: str
    run_at: datetime
    scenario_id: Optional[str] = None
    parameters_id: Optional[str] = None
    assumptions: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ForecastRun":
        return cls(
            id=str(row["id"]),
            company_id=str(row["company_id"]),
            run_label=row["run_label"],
            run_at=parse_datetime(row["run_at"]),
            scenario_id=row.get("scenario_id"),
            parameters_id=row.get("parameters_id"),
            assumptions=row.get("assumptions") or {},
        )


@dataclass
class DailyForecast:
    """One projected day with base, best and worst case bands"""

    run_id: str
    company_id: str
    date: date
    base_inflows: float
    base_outflows: float
    base_net_cash: float
    base_closing_balance: float
    best_inflows: float
    best_outflows: float
    best_net_cash: float
    best_closing_balance: float
    worst_inflows: float
    worst_outflows: float
    worst_net_cash: float
    worst_closing_balance: float
    metadata: Optional[Dict[str, Any]] = None

    BAND_FIELDS = (
        "base_inflows", "base_outflows", "base_net_cash", "base_closing_balance",
        "best_inflows", "best_outflows", "best_net_cash", "best_closing_balance",
        "worst_inflows", "worst_outflows", "worst_net_cash", "worst_closing_balance",
    )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DailyForecast":
        return cls(
            run_id=str(row["run_id"]),
            company_id=str(row["company_id"]),
            date=parse_date(row["date"]),
            metadata=row.get("metadata"),
            **{name: float(row.get(name) or 0.0) for name in cls.BAND_FIELDS},
        )


@dataclass
class Scenario:
    """Named set of adjustment parameters"""

    id: str
    company_id: str
    name: str
    parameters: Dict[str, float] = field(default_factory=dict)
    is_default: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Scenario":
        return cls(
            id=str(row["id"]),
            company_id=str(row["company_id"]),
            name=row["name"],
            parameters=row.get("parameters") or {},
            is_default=bool(row.get("is_default", False)),
        )


@dataclass
class AlertEvent:
    """Append-only signal about forecast health"""

    id: str
    company_id: str
    forecast_run_id: Optional[str]
    alert_type: str
    severity: AlertSeverity
    message: str
    created_at: datetime
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AlertEvent":
        run_id = row.get("forecast_run_id")
        return cls(
            id=str(row["id"]),
            company_id=str(row["company_id"]),
            forecast_run_id=str(run_id) if run_id is not None else None,
            alert_type=row["alert_type"],
            severity=AlertSeverity(row["severity"]),
            message=row["message"],
            created_at=parse_datetime(row["created_at"]),
            details=row.get("details"),
        )


@dataclass
class InvoiceAR:
    """Open or settled customer invoice"""

    id: str
    company_id: str
    issue_date: Optional[date]
    amount: float
    status: DocumentStatus
    due_date: Optional[date] = None
    customer_name: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "InvoiceAR":
        return cls(
            id=str(row["id"]),
            company_id=str(row["company_id"]),
            issue_date=parse_date(row.get("issue_date")),
            amount=float(row["amount"]),
            status=DocumentStatus(row["status"]),
            due_date=parse_date(row.get("due_date")),
            customer_name=row.get("customer_name") or "",
        )


@dataclass
class BillAP:
    """Open or settled supplier bill"""

    id: str
    company_id: str
    issue_date: Optional[date]
    amount: float
    status: DocumentStatus
    due_date: Optional[date] = None
    vendor_name: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BillAP":
        return cls(
            id=str(row["id"]),
            company_id=str(row["company_id"]),
            issue_date=parse_date(row.get("issue_date")),
            amount=float(row["amount"]),
            status=DocumentStatus(row["status"]),
            due_date=parse_date(row.get("due_date")),
            vendor_name=row.get("vendor_name") or "",
        )


@dataclass
class WorkingCapitalSummary:
    """AR/AP totals with age-bucketed breakdown as of a point in time"""

    company_id: str
    as_of_date: datetime
    ar_total: float = 0.0
    ap_total: float = 0.0
    ar_0_30: float = 0.0
    ar_31_60: float = 0.0
    ar_61_90: float = 0.0
    ar_90_plus: float = 0.0
    ap_0_30: float = 0.0
    ap_31_60: float = 0.0
    ap_61_90: float = 0.0
    ap_90_plus: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WorkingCapitalSummary":
        amounts = {
            name: float(row.get(name) or 0.0)
            for name in (
                "ar_total", "ap_total",
                "ar_0_30", "ar_31_60", "ar_61_90", "ar_90_plus",
                "ap_0_30", "ap_31_60", "ap_61_90", "ap_90_plus",
            )
        }
        return cls(
            company_id=str(row["company_id"]),
            as_of_date=parse_datetime(row["as_of_date"]),
            **amounts,
        )

    @property
    def net_working_capital(self) -> float:
        return self.ar_total - self.ap_total

