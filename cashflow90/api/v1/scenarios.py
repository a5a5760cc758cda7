"""Scenario endpoints - list, canned forecasts, comparison and simulation trigger"""

import asyncio
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status

from cashflow90.api.v1.schemas import (
    DailyForecastSchema,
    ScenarioComparisonResponse,
    ScenarioCreateRequest,
    ScenarioCreateResponse,
    ScenarioForecastResponse,
    ScenarioPointSchema,
    ScenarioSchema,
    ScenariosResponse,
)
from cashflow90.api.dependencies import get_data_service, get_request_id
from cashflow90.domain.kpis import compare_scenario
from cashflow90.services.data_service import CashFlowDataService

router = APIRouter()


@router.get("/companies/{company_id}/scenarios", response_model=ScenariosResponse)
async def list_scenarios(company_id: str, service: CashFlowDataService = Depends(get_data_service)):
    scenarios = await service.get_scenarios(company_id)
    return ScenariosResponse(
        company_id=company_id,
        scenarios=[ScenarioSchema.model_validate(s, from_attributes=True) for s in scenarios],
    )


@router.get("/companies/{company_id}/scenarios/{scenario_id}/forecast", response_model=ScenarioForecastResponse)
async def get_scenario_forecast(
    company_id: str,
    scenario_id: str,
    service: CashFlowDataService = Depends(get_data_service),
):
    forecasts = await service.get_scenario_forecast(company_id, scenario_id)
    return ScenarioForecastResponse(
        company_id=company_id,
        scenario_id=scenario_id,
        forecasts=[DailyForecastSchema.model_validate(f, from_attributes=True) for f in forecasts],
    )


@router.get("/companies/{company_id}/scenarios/{scenario_id}/comparison", response_model=ScenarioComparisonResponse)
async def compare_with_baseline(
    company_id: str,
    scenario_id: str,
    service: CashFlowDataService = Depends(get_data_service),
):
    """Baseline vs scenario base closing balance, paired day by day"""
    baseline, scenario = await asyncio.gather(
        service.get_latest_forecast(company_id),
        service.get_scenario_forecast(company_id, scenario_id),
    )
    return ScenarioComparisonResponse(
        company_id=company_id,
        scenario_id=scenario_id,
        points=[ScenarioPointSchema.model_validate(p, from_attributes=True) for p in compare_scenario(baseline, scenario)],
    )


@router.post("/scenarios", response_model=ScenarioCreateResponse, status_code=status.HTTP_202_ACCEPTED)
async def create_scenario(
    request_body: ScenarioCreateRequest,
    request: Request,
    service: CashFlowDataService = Depends(get_data_service),
):
    """
    Submit a scenario to the simulation runner.

    Only the submission is acknowledged; results appear as a new forecast
    run once the runner finishes.
    """
    request_id = get_request_id(request)
    accepted = await service.create_scenario(
        request_body.name,
        request_body.growth_pct,
        request_body.payroll_delta,
    )

    if not accepted:
        logging.warning("Simulation trigger rejected", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Simulation runner unavailable")

    return ScenarioCreateResponse(accepted=True, name=request_body.name)
