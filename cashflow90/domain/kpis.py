"""Dashboard KPIs and chart series derived from resolved actuals and forecasts"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import List, Literal, Optional, Sequence

from cashflow90.domain.models import DailyActual, DailyForecast

Band = Literal["base", "best", "worst"]

SECONDS_PER_DAY = 86_400


@dataclass
class ChartPoint:
    """One x-axis position; actual fields on history, band fields on forecast days"""

    date: date
    actual: Optional[float] = None
    net_cash: Optional[float] = None
    base: Optional[float] = None
    best: Optional[float] = None
    worst: Optional[float] = None


@dataclass
class ScenarioPoint:
    date: date
    baseline: float
    scenario: Optional[float] = None


@dataclass
class DashboardKpis:
    current_cash: float
    runway_base_days: Optional[int]  # None: no depletion inside the horizon
    runway_worst_days: Optional[int]
    next_30_day_net_cash: float


def build_chart_points(actuals: Sequence[DailyActual], forecasts: Sequence[DailyForecast]) -> List[ChartPoint]:
    """History followed by forecast, in the order received"""
    points = [ChartPoint(date=a.date, actual=a.closing_balance, net_cash=a.net_cash) for a in actuals]
    points.extend(
        ChartPoint(
            date=f.date,
            base=f.base_closing_balance,
            best=f.best_closing_balance,
            worst=f.worst_closing_balance,
        )
        for f in forecasts
    )
    return points


def runway_days(forecasts: Sequence[DailyForecast], now: datetime, band: Band = "base") -> Optional[int]:
    """
    Whole days from now until the band's closing balance first reaches zero.

    Measured to midnight UTC of the depletion day and floored, so a
    depletion tomorrow counts as 0 days once today's midnight has passed.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    for f in forecasts:
        if getattr(f, f"{band}_closing_balance") <= 0:
            depleted_at = datetime.combine(f.date, time.min, tzinfo=timezone.utc)
            return math.floor((depleted_at - now).total_seconds() / SECONDS_PER_DAY)
    return None


def net_cash_over(forecasts: Sequence[DailyForecast], days: int = 30) -> float:
    """Sum of base net cash over the first `days` forecast rows"""
    return sum(f.base_net_cash for f in forecasts[:days])


def compute_kpis(actuals: Sequence[DailyActual], forecasts: Sequence[DailyForecast], now: datetime) -> DashboardKpis:
    return DashboardKpis(
        current_cash=actuals[-1].closing_balance if actuals else 0.0,
        runway_base_days=runway_days(forecasts, now, "base"),
        runway_worst_days=runway_days(forecasts, now, "worst"),
        next_30_day_net_cash=net_cash_over(forecasts, 30),
    )


def compare_scenario(baseline: Sequence[DailyForecast], scenario: Sequence[DailyForecast]) -> List[ScenarioPoint]:
    """Pair baseline and scenario base balances by position; scenario may be shorter"""
    return [
        ScenarioPoint(
            date=b.date,
            baseline=b.base_closing_balance,
            scenario=scenario[i].base_closing_balance if i < len(scenario) else None,
        )
        for i, b in enumerate(baseline)
    ]
