"""GET /v1/companies/{company_id}/actuals|forecast|dashboard - cash position endpoints"""

from fastapi import APIRouter, Depends, Query

from cashflow90.api.v1.schemas import (
    ActualsResponse,
    ChartPointSchema,
    DailyActualSchema,
    DailyForecastSchema,
    AlertSchema,
    DashboardResponse,
    ForecastResponse,
    KpiSchema,
    WorkingCapitalSchema,
)
from cashflow90.api.dependencies import get_data_service
from cashflow90.services.data_service import CashFlowDataService

router = APIRouter()


@router.get("/companies/{company_id}/actuals", response_model=ActualsResponse)
async def get_actuals(
    company_id: str,
    days: int = Query(90, ge=1, le=3660, description="Trailing days when derived from raw transactions"),
    service: CashFlowDataService = Depends(get_data_service),
):
    """
    Historical daily cash positions.

    Returns:
        Precomputed actuals, actuals aggregated from bank transactions,
        or the demo series, oldest first
    """
    actuals = await service.get_daily_actuals(company_id, days=days)
    return ActualsResponse(
        company_id=company_id,
        actuals=[DailyActualSchema.model_validate(a, from_attributes=True) for a in actuals],
    )


@router.get("/companies/{company_id}/forecast", response_model=ForecastResponse)
async def get_forecast(company_id: str, service: CashFlowDataService = Depends(get_data_service)):
    """Latest baseline forecast with base/best/worst bands"""
    forecasts = await service.get_latest_forecast(company_id)
    return ForecastResponse(
        company_id=company_id,
        forecasts=[DailyForecastSchema.model_validate(f, from_attributes=True) for f in forecasts],
    )


@router.get("/companies/{company_id}/dashboard", response_model=DashboardResponse)
async def get_dashboard(company_id: str, service: CashFlowDataService = Depends(get_data_service)):
    """
    Overview payload: KPIs, merged chart series, actuals, forecast, alerts
    and working capital, resolved concurrently.
    """
    snapshot = await service.get_dashboard(company_id)
    return DashboardResponse(
        company_id=company_id,
        kpis=KpiSchema.model_validate(snapshot.kpis, from_attributes=True),
        chart=[ChartPointSchema.model_validate(p, from_attributes=True) for p in snapshot.chart],
        actuals=[DailyActualSchema.model_validate(a, from_attributes=True) for a in snapshot.actuals],
        forecasts=[DailyForecastSchema.model_validate(f, from_attributes=True) for f in snapshot.forecasts],
        alerts=[AlertSchema.model_validate(a, from_attributes=True) for a in snapshot.alerts],
        working_capital=WorkingCapitalSchema.model_validate(snapshot.working_capital, from_attributes=True),
    )
