"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from cashflow90.domain.models import AlertSeverity


class DailyActualSchema(BaseModel):
    """Single day of historical cash movement"""

    company_id: str
    date: date
    opening_balance: float
    cash_in: float
    cash_out: float
    net_cash: float
    closing_balance: float


class DailyForecastSchema(BaseModel):
    """Single forecast day with base/best/worst bands"""

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


class AlertSchema(BaseModel):
    id: str
    company_id: str
    forecast_run_id: Optional[str] = None
    alert_type: str
    severity: AlertSeverity
    message: str
    created_at: datetime
    details: Optional[Dict[str, Any]] = None


class WorkingCapitalSchema(BaseModel):
    """Response for GET /v1/companies/{company_id}/working-capital"""

    company_id: str
    as_of_date: datetime
    ar_total: float
    ap_total: float
    ar_0_30: float
    ar_31_60: float
    ar_61_90: float
    ar_90_plus: float
    ap_0_30: float
    ap_31_60: float
    ap_61_90: float
    ap_90_plus: float
    net_working_capital: float


class ScenarioSchema(BaseModel):
    id: str
    company_id: str
    name: str
    parameters: Dict[str, Any]
    is_default: bool


class ActualsResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/actuals"""

    company_id: str
    actuals: List[DailyActualSchema]


class ForecastResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/forecast"""

    company_id: str
    forecasts: List[DailyForecastSchema]


class AlertsResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/alerts"""

    company_id: str
    alerts: List[AlertSchema]


class ScenariosResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/scenarios"""

    company_id: str
    scenarios: List[ScenarioSchema]


class ScenarioForecastResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/scenarios/{scenario_id}/forecast"""

    company_id: str
    scenario_id: str
    forecasts: List[DailyForecastSchema]


class ScenarioPointSchema(BaseModel):
    date: date
    baseline: float
    scenario: Optional[float] = None


class ScenarioComparisonResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/scenarios/{scenario_id}/comparison"""

    company_id: str
    scenario_id: str
    points: List[ScenarioPointSchema]


class ScenarioCreateRequest(BaseModel):
    """Request body for POST /v1/scenarios"""

    name: str = Field(..., min_length=1, description="Scenario name")
    growth_pct: float = Field(0.0, description="Revenue growth adjustment in percent")
    payroll_delta: float = Field(0.0, description="Monthly payroll change")


class ScenarioCreateResponse(BaseModel):
    """Response for POST /v1/scenarios"""

    accepted: bool
    name: str


class ChartPointSchema(BaseModel):
    date: date
    actual: Optional[float] = None
    net_cash: Optional[float] = None
    base: Optional[float] = None
    best: Optional[float] = None
    worst: Optional[float] = None


class KpiSchema(BaseModel):
    current_cash: float
    runway_base_days: Optional[int] = Field(None, description="Null when cash lasts beyond the horizon")
    runway_worst_days: Optional[int] = None
    next_30_day_net_cash: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/dashboard"""

    company_id: str
    kpis: KpiSchema
    chart: List[ChartPointSchema]
    actuals: List[DailyActualSchema]
    forecasts: List[DailyForecastSchema]
    alerts: List[AlertSchema]
    working_capital: WorkingCapitalSchema
