"""Synthetic placeholder data used when no upstream source has rows"""

import math
import random
from datetime import date, datetime, timedelta
from typing import List

from cashflow90.domain.models import (
    AlertEvent,
    AlertSeverity,
    DailyActual,
    DailyForecast,
    Scenario,
    WorkingCapitalSummary,
)

DEMO_COMPANY_ID = "demo-co"
SYNTHETIC_RUN_ID = "run-mock-1"

PAST_DAYS = 90
FUTURE_DAYS = 90
OPENING_BALANCE = 120_000.0

# Calendar events of the demo SaaS company (day of month -> amount)
PAYROLL_DAYS = (15, 30)
PAYROLL = -45_000.0
REVENUE_DAYS = (1, 2)
REVENUE = 65_000.0
FORECAST_REVENUE = 68_000.0
INFRA_DAY = 5
INFRA = -8_000.0

SCENARIO_LAG_DAYS = 30
SCENARIO_DAILY_IMPACT = -1_500.0


class SyntheticDataGenerator:
    """
    Seeded generator for demo actuals, forecasts, alerts, working capital and scenarios.

    Every call re-seeds its own Random instance, so the same (seed, today)
    always yields the same series and forecasts stay anchored to the actuals.
    """

    def __init__(self, seed: int = 42):
        self.seed = seed

    def _rng(self) -> random.Random:
        return random.Random(self.seed)

    def actuals(self, today: date) -> List[DailyActual]:
        """90 days ending yesterday with payroll dips and revenue spikes"""
        rng = self._rng()
        balance = OPENING_BALANCE
        series = []

        for i in range(PAST_DAYS):
            day = today - timedelta(days=PAST_DAYS - i)
            flow = rng.uniform(-1_000.0, 1_000.0)

            if day.day in PAYROLL_DAYS:
                flow += PAYROLL
            if day.day in REVENUE_DAYS:
                flow += REVENUE
            if day.day == INFRA_DAY:
                flow += INFRA

            opening = balance
            balance += flow
            series.append(
                DailyActual(
                    company_id=DEMO_COMPANY_ID,
                    date=day,
                    opening_balance=opening,
                    cash_in=flow if flow > 0 else 0.0,
                    cash_out=abs(flow) if flow < 0 else 0.0,
                    net_cash=flow,
                    closing_balance=balance,
                )
            )

        return series

    def forecasts(self, today: date) -> List[DailyForecast]:
        """90 forward days stitched onto the last synthetic actual"""
        anchor = self.actuals(today)[-1].closing_balance
        series = []

        for i in range(FUTURE_DAYS):
            day = today + timedelta(days=i + 1)
            daily_net = -500.0

            if day.day in PAYROLL_DAYS:
                daily_net += PAYROLL
            if day.day == 1:
                daily_net += FORECAST_REVENUE
            if day.day == INFRA_DAY:
                daily_net += INFRA

            projected = anchor + i * 200
            best_net = daily_net + 1_000
            worst_net = daily_net - 1_000

            series.append(
                DailyForecast(
                    run_id=SYNTHETIC_RUN_ID,
                    company_id=DEMO_COMPANY_ID,
                    date=day,
                    base_inflows=max(daily_net, 0.0),
                    base_outflows=abs(min(daily_net, 0.0)),
                    base_net_cash=daily_net,
                    base_closing_balance=projected + math.sin(i * 0.5) * 5_000,
                    best_inflows=max(best_net, 0.0),
                    best_outflows=abs(min(best_net, 0.0)),
                    best_net_cash=best_net,
                    best_closing_balance=projected + i * 500 + 10_000,
                    worst_inflows=max(worst_net, 0.0),
                    worst_outflows=abs(min(worst_net, 0.0)),
                    worst_net_cash=worst_net,
                    worst_closing_balance=projected - i * 800 - 5_000,
                )
            )

        return series

    def scenario_forecasts(self, today: date) -> List[DailyForecast]:
        """Baseline forecast with a hiring plan that starts biting after 30 days"""
        series = []
        for forecast in self.forecasts(today):
            elapsed = (forecast.date - today).days
            impact = (elapsed - SCENARIO_LAG_DAYS) * SCENARIO_DAILY_IMPACT if elapsed > SCENARIO_LAG_DAYS else 0.0
            forecast.base_closing_balance += impact
            series.append(forecast)
        return series

    def alerts(self, now: datetime) -> List[AlertEvent]:
        return [
            AlertEvent(
                id="1",
                company_id=DEMO_COMPANY_ID,
                forecast_run_id="run-1",
                alert_type="runway_below_threshold",
                severity=AlertSeverity.WARNING,
                message="Runway forecast dips below 60 days in Worst Case scenario.",
                created_at=now,
            ),
            AlertEvent(
                id="2",
                company_id=DEMO_COMPANY_ID,
                forecast_run_id="run-1",
                alert_type="large_expense",
                severity=AlertSeverity.INFO,
                message="Large tax payment ($45k) scheduled for next week.",
                created_at=now - timedelta(days=2),
            ),
            AlertEvent(
                id="3",
                company_id=DEMO_COMPANY_ID,
                forecast_run_id="run-1",
                alert_type="info",
                severity=AlertSeverity.INFO,
                message="Stripe connection re-synced successfully.",
                created_at=now - timedelta(days=5),
            ),
        ]

    def working_capital(self, now: datetime) -> WorkingCapitalSummary:
        return WorkingCapitalSummary(
            company_id=DEMO_COMPANY_ID,
            as_of_date=now,
            ar_total=142_500.0,
            ap_total=48_200.0,
            ar_0_30=95_000.0,
            ar_31_60=32_000.0,
            ar_61_90=10_500.0,
            ar_90_plus=5_000.0,
            ap_0_30=38_000.0,
            ap_31_60=8_200.0,
            ap_61_90=2_000.0,
            ap_90_plus=0.0,
        )

    def scenarios(self) -> List[Scenario]:
        return [
            Scenario(id="sc-1", company_id=DEMO_COMPANY_ID, name="Hire 5 Engineers (Q3)", parameters={"burn_increase": 75_000}),
            Scenario(id="sc-2", company_id=DEMO_COMPANY_ID, name="Reduce Marketing 50%", parameters={"cost_reduction": 0.5}),
            Scenario(id="sc-3", company_id=DEMO_COMPANY_ID, name="Delayed Series B", parameters={"cash_infusion_delay": 90}),
        ]
