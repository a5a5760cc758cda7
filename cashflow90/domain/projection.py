"""Average-burn forecast projection over historical actuals"""

from datetime import date, timedelta
from typing import List, Sequence

from cashflow90.domain.models import DailyActual, DailyForecast

VOLATILITY_RATE = 0.05
SPREAD_DIVISOR = 10


def average_burn(actuals: Sequence[DailyActual], window: int = 30) -> float:
    """Mean net cash over the trailing window (0.0 when there is no history)"""
    trailing = list(actuals)[-window:]
    if not trailing:
        return 0.0
    return sum(a.net_cash for a in trailing) / len(trailing)


def project_forecast(
    actuals: Sequence[DailyActual],
    company_id: str,
    today: date,
    horizon_days: int = 90,
    trailing_window: int = 30,
    run_id: str = "generated",
) -> List[DailyForecast]:
    """
    Extrapolate future closing balances with a flat average-burn model.

    For day i (1-based) from today:
    - balance += avg_burn, identical net movement every day
    - volatility = |balance| * 0.05
    - best = balance + volatility * i / 10, worst = balance - volatility * i / 10

    Bands are symmetric around the base balance and scale with its magnitude,
    so they pinch together as a burning balance crosses zero and widen again
    once it is negative.

    Returns:
        horizon_days forecast rows, or [] when there is no history to project from
    """
    if not actuals:
        return []

    balance = actuals[-1].closing_balance
    daily_net = average_burn(actuals, trailing_window)
    forecasts: List[DailyForecast] = []

    for i in range(1, horizon_days + 1):
        balance += daily_net
        spread = abs(balance) * VOLATILITY_RATE * (i / SPREAD_DIVISOR)

        forecasts.append(
            DailyForecast(
                run_id=run_id,
                company_id=company_id,
                date=today + timedelta(days=i),
                base_inflows=0.0,
                base_outflows=abs(daily_net),
                base_net_cash=daily_net,
                base_closing_balance=balance,
                best_inflows=0.0,
                best_outflows=0.0,
                best_net_cash=daily_net,
                best_closing_balance=balance + spread,
                worst_inflows=0.0,
                worst_outflows=0.0,
                worst_net_cash=daily_net,
                worst_closing_balance=balance - spread,
            )
        )

    return forecasts
