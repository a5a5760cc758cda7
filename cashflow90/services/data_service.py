"""
Tiered data resolution for the cash flow dashboard.

Every read operation walks an ordered list of tiers (precomputed table,
derived from raw rows, synthetic) and returns the first non-empty result.
A tier that raises counts as empty. The synthetic tier always answers, so
callers never see an error or an empty series.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from cashflow90.config import settings
from cashflow90.domain.aggregation import aggregate_transactions
from cashflow90.domain.aging import summarize_working_capital
from cashflow90.domain.kpis import ChartPoint, DashboardKpis, build_chart_points, compute_kpis
from cashflow90.domain.models import (
    AlertEvent,
    BankTransaction,
    BillAP,
    DailyActual,
    DailyForecast,
    ForecastRun,
    InvoiceAR,
    Provenance,
    Resolved,
    Scenario,
    WorkingCapitalSummary,
)
from cashflow90.domain.projection import project_forecast
from cashflow90.domain.synthetic import SyntheticDataGenerator
from cashflow90.infrastructure.clients.simulation import SimulationClient
from cashflow90.infrastructure.observability.logging import log_source_failure, log_tier_fallback
from cashflow90.infrastructure.observability.metrics import record_resolution, source_failure_counter
from cashflow90.infrastructure.source import DataSource, Filter, Query

logger = logging.getLogger(__name__)

BASELINE_RUN_LABEL = "baseline"
ALERT_LIMIT = 10

Tier = Tuple[str, Callable[[], Awaitable[Optional[Resolved]]]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _open_documents(table: str, company_id: str) -> Query:
    return Query(
        table,
        filters=(
            Filter("company_id", company_id),
            Filter("status", "paid", op="neq"),
            Filter("status", "void", op="neq"),
        ),
    )


@dataclass
class DashboardSnapshot:
    """Everything the overview page needs from one round of resolution"""

    actuals: List[DailyActual]
    forecasts: List[DailyForecast]
    alerts: List[AlertEvent]
    working_capital: WorkingCapitalSummary
    kpis: DashboardKpis
    chart: List[ChartPoint]


class CashFlowDataService:
    """Resolves actuals, forecasts, alerts, working capital and scenarios for a company"""

    def __init__(
        self,
        data_source: DataSource,
        simulation_client: SimulationClient,
        generator: SyntheticDataGenerator | None = None,
        clock: Callable[[], datetime] = _utcnow,
        seed_balance: float | None = None,
        horizon_days: int | None = None,
    ):
        self.data_source = data_source
        self.simulation_client = simulation_client
        self.generator = generator or SyntheticDataGenerator(settings.synthetic_seed)
        self.clock = clock
        self.seed_balance = settings.actuals_seed_balance if seed_balance is None else seed_balance
        self.horizon_days = horizon_days or settings.forecast_horizon_days

    def _today(self) -> date:
        return self.clock().date()

    async def _first_present(self, operation: str, company_id: str, tiers: Sequence[Tier]) -> Resolved:
        """Run tiers in order; the first non-None result wins"""
        for tier_name, attempt in tiers:
            try:
                result = await attempt()
            except Exception as e:
                source_failure_counter.labels(operation=operation, tier=tier_name).inc()
                log_source_failure(operation, company_id, tier_name, e)
                result = None

            if result is not None:
                record_resolution(operation, result.provenance.value)
                return result

            log_tier_fallback(operation, company_id, tier_name)

        # Tier lists end with a synthetic tier, so reaching this is a bug
        raise RuntimeError(f"No tier produced a result for {operation}")

    # Actuals

    async def _actuals_from_table(self, company_id: str) -> Optional[Resolved[List[DailyActual]]]:
        rows = await self.data_source.fetch(
            Query("daily_actuals", filters=(Filter("company_id", company_id),), order_by="date")
        )
        if not rows:
            return None
        return Resolved([DailyActual.from_row(r) for r in rows], Provenance.DATABASE)

    async def _actuals_from_transactions(self, company_id: str, days: int) -> Optional[Resolved[List[DailyActual]]]:
        rows = await self.data_source.fetch(
            Query("bank_transactions", filters=(Filter("company_id", company_id),), order_by="transaction_date")
        )
        series = aggregate_transactions(
            [BankTransaction.from_row(r) for r in rows],
            company_id=company_id,
            today=self._today(),
            days=days,
            seed_balance=self.seed_balance,
        )
        return Resolved(series, Provenance.DERIVED) if series else None

    async def _synthetic_actuals(self) -> Resolved[List[DailyActual]]:
        return Resolved(self.generator.actuals(self._today()), Provenance.SYNTHETIC)

    async def resolve_daily_actuals(self, company_id: str, days: int = 90) -> Resolved[List[DailyActual]]:
        return await self._first_present(
            "actuals",
            company_id,
            [
                ("daily_actuals", lambda: self._actuals_from_table(company_id)),
                ("bank_transactions", lambda: self._actuals_from_transactions(company_id, days)),
                ("synthetic", self._synthetic_actuals),
            ],
        )

    async def get_daily_actuals(self, company_id: str | None = None, days: int = 90) -> List[DailyActual]:
        """Historical daily cash positions, oldest first"""
        resolved = await self.resolve_daily_actuals(company_id or settings.default_company_id, days)
        return resolved.value

    # Forecasts

    async def _forecast_from_runs(self, company_id: str) -> Optional[Resolved[List[DailyForecast]]]:
        runs = await self.data_source.fetch(
            Query(
                "forecast_runs",
                filters=(Filter("company_id", company_id), Filter("run_label", BASELINE_RUN_LABEL)),
                order_by="run_at",
                ascending=False,
                limit=1,
            )
        )
        if not runs:
            return None

        run = ForecastRun.from_row(runs[0])
        rows = await self.data_source.fetch(
            Query("daily_forecasts", filters=(Filter("run_id", run.id),), order_by="date")
        )
        if not rows:
            return None
        return Resolved([DailyForecast.from_row(r) for r in rows], Provenance.DATABASE)

    async def _forecast_from_actuals(self, company_id: str) -> Optional[Resolved[List[DailyForecast]]]:
        actuals = await self.resolve_daily_actuals(company_id)

        # Synthetic history gets the matching synthetic forecast so the chart stays continuous
        if actuals.provenance is Provenance.SYNTHETIC:
            return Resolved(self.generator.forecasts(self._today()), Provenance.SYNTHETIC)

        projected = project_forecast(actuals.value, company_id, self._today(), self.horizon_days)
        return Resolved(projected, Provenance.DERIVED) if projected else None

    async def _synthetic_forecast(self) -> Resolved[List[DailyForecast]]:
        return Resolved(self.generator.forecasts(self._today()), Provenance.SYNTHETIC)

    async def resolve_latest_forecast(self, company_id: str) -> Resolved[List[DailyForecast]]:
        return await self._first_present(
            "forecast",
            company_id,
            [
                ("daily_forecasts", lambda: self._forecast_from_runs(company_id)),
                ("projection", lambda: self._forecast_from_actuals(company_id)),
                ("synthetic", self._synthetic_forecast),
            ],
        )

    async def get_latest_forecast(self, company_id: str | None = None) -> List[DailyForecast]:
        """Latest baseline forecast (persisted, projected or synthetic)"""
        resolved = await self.resolve_latest_forecast(company_id or settings.default_company_id)
        return resolved.value

    async def get_scenario_forecast(self, company_id: str | None, scenario_id: str) -> List[DailyForecast]:
        """
        Canned scenario series.

        Scenario math runs in the external simulation runner; it is not
        reproduced here, whatever the scenario id.
        """
        logger.debug("Serving canned scenario forecast", extra={"scenario_id": scenario_id})
        record_resolution("scenario_forecast", Provenance.SYNTHETIC.value)
        return self.generator.scenario_forecasts(self._today())

    # Alerts

    async def _alerts_from_table(self, company_id: str) -> Optional[Resolved[List[AlertEvent]]]:
        rows = await self.data_source.fetch(
            Query(
                "alert_events",
                filters=(Filter("company_id", company_id),),
                order_by="created_at",
                ascending=False,
                limit=ALERT_LIMIT,
            )
        )
        if not rows:
            return None
        return Resolved([AlertEvent.from_row(r) for r in rows], Provenance.DATABASE)

    async def _synthetic_alerts(self) -> Resolved[List[AlertEvent]]:
        return Resolved(self.generator.alerts(self.clock()), Provenance.SYNTHETIC)

    async def resolve_alerts(self, company_id: str) -> Resolved[List[AlertEvent]]:
        return await self._first_present(
            "alerts",
            company_id,
            [
                ("alert_events", lambda: self._alerts_from_table(company_id)),
                ("synthetic", self._synthetic_alerts),
            ],
        )

    async def get_alerts(self, company_id: str | None = None) -> List[AlertEvent]:
        """Ten most recent alerts, newest first"""
        resolved = await self.resolve_alerts(company_id or settings.default_company_id)
        return resolved.value

    # Working capital

    async def _working_capital_from_view(self, company_id: str) -> Optional[Resolved[WorkingCapitalSummary]]:
        row = await self.data_source.fetch_one(
            Query("vw_working_capital_summary", filters=(Filter("company_id", company_id),), limit=1)
        )
        if row is None:
            return None
        return Resolved(WorkingCapitalSummary.from_row(row), Provenance.DATABASE)

    async def _working_capital_from_documents(self, company_id: str) -> Optional[Resolved[WorkingCapitalSummary]]:
        ar_rows, ap_rows = await asyncio.gather(
            self.data_source.fetch(_open_documents("invoices_ar", company_id)),
            self.data_source.fetch(_open_documents("bills_ap", company_id)),
        )
        if not ar_rows:
            return None

        summary = summarize_working_capital(
            [InvoiceAR.from_row(r) for r in ar_rows],
            [BillAP.from_row(r) for r in ap_rows],
            company_id=company_id,
            now=self.clock(),
        )
        return Resolved(summary, Provenance.DERIVED)

    async def _synthetic_working_capital(self) -> Resolved[WorkingCapitalSummary]:
        return Resolved(self.generator.working_capital(self.clock()), Provenance.SYNTHETIC)

    async def resolve_working_capital(self, company_id: str) -> Resolved[WorkingCapitalSummary]:
        return await self._first_present(
            "working_capital",
            company_id,
            [
                ("vw_working_capital_summary", lambda: self._working_capital_from_view(company_id)),
                ("invoices_ar", lambda: self._working_capital_from_documents(company_id)),
                ("synthetic", self._synthetic_working_capital),
            ],
        )

    async def get_working_capital(self, company_id: str | None = None) -> WorkingCapitalSummary:
        """AR/AP aging summary"""
        resolved = await self.resolve_working_capital(company_id or settings.default_company_id)
        return resolved.value

    # Scenarios

    async def _scenarios_from_table(self, company_id: str) -> Optional[Resolved[List[Scenario]]]:
        rows = await self.data_source.fetch(Query("scenarios", filters=(Filter("company_id", company_id),)))
        if not rows:
            return None
        return Resolved([Scenario.from_row(r) for r in rows], Provenance.DATABASE)

    async def _synthetic_scenarios(self) -> Resolved[List[Scenario]]:
        return Resolved(self.generator.scenarios(), Provenance.SYNTHETIC)

    async def resolve_scenarios(self, company_id: str) -> Resolved[List[Scenario]]:
        return await self._first_present(
            "scenarios",
            company_id,
            [
                ("scenarios", lambda: self._scenarios_from_table(company_id)),
                ("synthetic", self._synthetic_scenarios),
            ],
        )

    async def get_scenarios(self, company_id: str | None = None) -> List[Scenario]:
        resolved = await self.resolve_scenarios(company_id or settings.default_company_id)
        return resolved.value

    async def create_scenario(self, name: str, growth_pct: float, payroll_delta: float) -> bool:
        """Trigger the external simulation runner; True when the submission was accepted"""
        return await self.simulation_client.trigger(name, growth_pct, payroll_delta)

    # Composite

    async def get_dashboard(self, company_id: str | None = None) -> DashboardSnapshot:
        """Resolve the overview page's independent queries concurrently"""
        company_id = company_id or settings.default_company_id
        actuals, forecasts, alerts, working_capital = await asyncio.gather(
            self.get_daily_actuals(company_id),
            self.get_latest_forecast(company_id),
            self.get_alerts(company_id),
            self.get_working_capital(company_id),
        )
        return DashboardSnapshot(
            actuals=actuals,
            forecasts=forecasts,
            alerts=alerts,
            working_capital=working_capital,
            kpis=compute_kpis(actuals, forecasts, self.clock()),
            chart=build_chart_points(actuals, forecasts),
        )
