"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from cashflow90.services.data_service import CashFlowDataService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_data_service(request: Request) -> CashFlowDataService:
    """Provide the data service built by the application factory"""
    return request.app.state.data_service
