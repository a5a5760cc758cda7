"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Generator, Iterable, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from cashflow90.api.main import create_app
from cashflow90.domain.exceptions import DataSourceError
from cashflow90.domain.synthetic import SyntheticDataGenerator
from cashflow90.infrastructure.clients.simulation import SimulationClient
from cashflow90.infrastructure.database.models import Base
from cashflow90.infrastructure.database.repositories import SqlDataSource
from cashflow90.infrastructure.database.session import build_engine, build_session_factory
from cashflow90.infrastructure.source import Filter, Query
from cashflow90.services.data_service import CashFlowDataService

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
TODAY = FIXED_NOW.date()
COMPANY_ID = "11111111-1111-1111-1111-111111111111"


def _matches(row: Dict[str, Any], f: Filter) -> bool:
    value = row.get(f.field)
    return value == f.value if f.op == "eq" else value != f.value


class InMemoryDataSource:
    """Dict-of-tables stand-in for the upstream store; tables in `failing` raise"""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None, failing: Iterable[str] = ()):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.failing = set(failing)
        self.queries: List[Query] = []

    async def fetch(self, query: Query) -> List[Dict[str, Any]]:
        self.queries.append(query)
        if query.table in self.failing:
            raise DataSourceError(f"{query.table} unavailable")

        rows = [r for r in self.tables.get(query.table, []) if all(_matches(r, f) for f in query.filters)]
        if query.order_by:
            rows.sort(key=lambda r: r[query.order_by], reverse=not query.ascending)
        if query.limit is not None:
            rows = rows[: query.limit]
        return [dict(r) for r in rows]

    async def fetch_one(self, query: Query) -> Optional[Dict[str, Any]]:
        rows = await self.fetch(query)
        return rows[0] if rows else None


def actual_rows(
    count: int,
    last_closing: float,
    net_cash: float,
    end: date = TODAY - timedelta(days=1),
    company_id: str = COMPANY_ID,
) -> List[Dict[str, Any]]:
    """Continuous daily_actuals rows ending at `end` with a constant net movement"""
    rows = []
    closing = last_closing - net_cash * (count - 1)
    for i in range(count):
        day = end - timedelta(days=count - 1 - i)
        opening = closing - net_cash
        rows.append(
            {
                "company_id": company_id,
                "date": day.isoformat(),
                "opening_balance": opening,
                "cash_in": max(net_cash, 0.0),
                "cash_out": abs(min(net_cash, 0.0)),
                "net_cash": net_cash,
                "closing_balance": closing,
            }
        )
        closing += net_cash
    return rows


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def generator() -> SyntheticDataGenerator:
    return SyntheticDataGenerator(seed=7)


@pytest.fixture
def simulation_client() -> SimulationClient:
    """Trigger without a webhook (accepted locally, no delay)"""
    client = SimulationClient(local_delay_seconds=0)
    client.webhook_url = None
    return client


@pytest.fixture
def make_service(clock, generator, simulation_client):
    """Build a data service over an in-memory source"""

    def _make(tables=None, failing=()) -> CashFlowDataService:
        return CashFlowDataService(
            data_source=InMemoryDataSource(tables, failing),
            simulation_client=simulation_client,
            generator=generator,
            clock=clock,
            seed_balance=50_000.0,
            horizon_days=90,
        )

    return _make


@pytest.fixture
def session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """Create test database and session factory"""
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield build_session_factory(engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sql_service(session_factory, clock, generator, simulation_client) -> CashFlowDataService:
    return CashFlowDataService(
        data_source=SqlDataSource(session_factory),
        simulation_client=simulation_client,
        generator=generator,
        clock=clock,
    )


@pytest.fixture
def client(sql_service: CashFlowDataService) -> TestClient:
    """Create FastAPI test client backed by the test database"""
    app = create_app(data_service=sql_service)
    return TestClient(app)
