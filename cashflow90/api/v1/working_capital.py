"""GET /v1/companies/{company_id}/working-capital|alerts"""

from fastapi import APIRouter, Depends

from cashflow90.api.v1.schemas import AlertSchema, AlertsResponse, WorkingCapitalSchema
from cashflow90.api.dependencies import get_data_service
from cashflow90.services.data_service import CashFlowDataService

router = APIRouter()


@router.get("/companies/{company_id}/working-capital", response_model=WorkingCapitalSchema)
async def get_working_capital(company_id: str, service: CashFlowDataService = Depends(get_data_service)):
    """
    AR/AP aging summary.

    Returns:
        Totals plus 0-30 / 31-60 / 61-90 / 90+ day buckets per side
    """
    summary = await service.get_working_capital(company_id)
    return WorkingCapitalSchema.model_validate(summary, from_attributes=True)


@router.get("/companies/{company_id}/alerts", response_model=AlertsResponse)
async def get_alerts(company_id: str, service: CashFlowDataService = Depends(get_data_service)):
    """Ten most recent forecast alerts, newest first"""
    alerts = await service.get_alerts(company_id)
    return AlertsResponse(
        company_id=company_id,
        alerts=[AlertSchema.model_validate(a, from_attributes=True) for a in alerts],
    )
