"""SQLAlchemy ORM models for the tables populated by the ETL pipeline"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Date, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class DailyActualRow(Base):
    """Precomputed daily cash actuals"""

    __tablename__ = "daily_actuals"

    company_id = Column(Text, primary_key=True)
    date = Column(Date, primary_key=True)
    opening_balance = Column(Float, nullable=False)
    cash_in = Column(Float, nullable=False, default=0)
    cash_out = Column(Float, nullable=False, default=0)
    net_cash = Column(Float, nullable=False)
    closing_balance = Column(Float, nullable=False)


class BankTransactionRow(Base):
    """Raw bank ledger entry (signed amount)"""

    __tablename__ = "bank_transactions"

    id = Column(Text, primary_key=True, default=_uuid)
    company_id = Column(Text, nullable=False, index=True)
    transaction_date = Column(Date, nullable=False)
    amount = Column(Float, nullable=False)
    direction = Column(String(3), nullable=True)
    description = Column(Text, nullable=True)
    category = Column(Text, nullable=True)


class ScenarioRow(Base):
    """What-if scenario parameters"""

    __tablename__ = "scenarios"

    id = Column(Text, primary_key=True, default=_uuid)
    company_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    parameters = Column(JSON, nullable=False, default=dict)
    is_default = Column(Boolean, nullable=False, default=False)


class ForecastRunRow(Base):
    """One forecast batch"""

    __tablename__ = "forecast_runs"

    id = Column(Text, primary_key=True, default=_uuid)
    company_id = Column(Text, nullable=False, index=True)
    scenario_id = Column(Text, ForeignKey("scenarios.id"), nullable=True)
    parameters_id = Column(Text, nullable=True)
    run_label = Column(Text, nullable=False)
    run_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    assumptions = Column(JSON, nullable=True)


class DailyForecastRow(Base):
    """Projected day of a forecast run with three bands"""

    __tablename__ = "daily_forecasts"

    run_id = Column(Text, ForeignKey("forecast_runs.id", ondelete="CASCADE"), primary_key=True)
    company_id = Column(Text, nullable=False, index=True)
    date = Column(Date, primary_key=True)
    base_inflows = Column(Float, nullable=False, default=0)
    base_outflows = Column(Float, nullable=False, default=0)
    base_net_cash = Column(Float, nullable=False, default=0)
    base_closing_balance = Column(Float, nullable=False)
    best_inflows = Column(Float, nullable=False, default=0)
    best_outflows = Column(Float, nullable=False, default=0)
    best_net_cash = Column(Float, nullable=False, default=0)
    best_closing_balance = Column(Float, nullable=False)
    worst_inflows = Column(Float, nullable=False, default=0)
    worst_outflows = Column(Float, nullable=False, default=0)
    worst_net_cash = Column(Float, nullable=False, default=0)
    worst_closing_balance = Column(Float, nullable=False)
    metadata_ = Column("metadata", JSON, nullable=True)


class AlertEventRow(Base):
    """Append-only forecast health alert"""

    __tablename__ = "alert_events"

    id = Column(Text, primary_key=True, default=_uuid)
    company_id = Column(Text, nullable=False, index=True)
    forecast_run_id = Column(Text, ForeignKey("forecast_runs.id"), nullable=True)
    alert_type = Column(Text, nullable=False)
    severity = Column(Text, nullable=False)  # info | warning | critical
    message = Column(Text, nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class InvoiceARRow(Base):
    """Customer invoice"""

    __tablename__ = "invoices_ar"

    id = Column(Text, primary_key=True, default=_uuid)
    company_id = Column(Text, nullable=False, index=True)
    customer_name = Column(Text, nullable=True)
    issue_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    amount = Column(Float, nullable=False)
    status = Column(Text, nullable=False, default="open")


class BillAPRow(Base):
    """Supplier bill"""

    __tablename__ = "bills_ap"

    id = Column(Text, primary_key=True, default=_uuid)
    company_id = Column(Text, nullable=False, index=True)
    vendor_name = Column(Text, nullable=True)
    issue_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    amount = Column(Float, nullable=False)
    status = Column(Text, nullable=False, default="open")


class WorkingCapitalSummaryRow(Base):
    """
    Mapped onto the vw_working_capital_summary view in Postgres.

    Declared as a table so SQLite test databases can hold fixture rows.
    """

    __tablename__ = "vw_working_capital_summary"

    company_id = Column(Text, primary_key=True)
    as_of_date = Column(DateTime(timezone=True), nullable=False)
    ar_total = Column(Float, nullable=False, default=0)
    ap_total = Column(Float, nullable=False, default=0)
    ar_0_30 = Column(Float, nullable=False, default=0)
    ar_31_60 = Column(Float, nullable=False, default=0)
    ar_61_90 = Column(Float, nullable=False, default=0)
    ar_90_plus = Column(Float, nullable=False, default=0)
    ap_0_30 = Column(Float, nullable=False, default=0)
    ap_31_60 = Column(Float, nullable=False, default=0)
    ap_61_90 = Column(Float, nullable=False, default=0)
    ap_90_plus = Column(Float, nullable=False, default=0)
