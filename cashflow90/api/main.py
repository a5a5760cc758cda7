"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from cashflow90.api.middleware import RequestIDMiddleware, MetricsMiddleware
from cashflow90.api.v1 import cashflow, scenarios, working_capital
from cashflow90.domain.synthetic import SyntheticDataGenerator
from cashflow90.infrastructure.clients.postgrest import PostgrestDataSource
from cashflow90.infrastructure.clients.simulation import SimulationClient
from cashflow90.infrastructure.database.repositories import SqlDataSource
from cashflow90.infrastructure.database.session import build_engine, build_session_factory
from cashflow90.infrastructure.observability.logging import setup_logging
from cashflow90.infrastructure.source import DataSource
from cashflow90.services.data_service import CashFlowDataService
from cashflow90.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level)


def build_data_source(config: Settings) -> DataSource:
    """Pick the upstream data source from configuration"""
    if config.data_backend == "postgrest":
        return PostgrestDataSource(base_url=config.supabase_url, api_key=config.supabase_key)
    return SqlDataSource(build_session_factory(build_engine(config.database_url)))


def build_data_service(config: Settings) -> CashFlowDataService:
    return CashFlowDataService(
        data_source=build_data_source(config),
        simulation_client=SimulationClient(webhook_url=config.simulation_webhook_url),
        generator=SyntheticDataGenerator(config.synthetic_seed),
        seed_balance=config.actuals_seed_balance,
        horizon_days=config.forecast_horizon_days,
    )


def create_app(data_service: CashFlowDataService | None = None, config: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    config = config or settings

    app = FastAPI(
        title="CashFlow90",
        description="Cash actuals, 90-day forecast, scenarios and working capital",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.data_service = data_service or build_data_service(config)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": config.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(cashflow.router, prefix="/v1", tags=["cashflow"])
    app.include_router(scenarios.router, prefix="/v1", tags=["scenarios"])
    app.include_router(working_capital.router, prefix="/v1", tags=["working-capital"])

    return app


app = create_app()
