"""Unit tests for transaction aggregation into daily actuals"""

from datetime import date, timedelta
from cashflow90.domain.aggregation import aggregate_transactions
from cashflow90.domain.models import BankTransaction

TODAY = date(2024, 1, 10)


def _txn(n: int, day: date, amount: float) -> BankTransaction:
    return BankTransaction(id=f"tx_{n}", company_id="co", transaction_date=day, amount=amount)


def _ledger() -> list[BankTransaction]:
    return [
        _txn(1, date(2024, 1, 5), 1000.0),
        _txn(2, date(2024, 1, 5), -250.0),
        _txn(3, date(2024, 1, 7), -400.0),
        _txn(4, date(2024, 1, 10), 50.0),
    ]


def test_aggregate_daily_sums():
    """Test per-day inflow/outflow split and net"""
    series = aggregate_transactions(_ledger(), "co", TODAY)

    first = series[0]
    assert first.date == date(2024, 1, 5)
    assert first.cash_in == 1000.0
    assert first.cash_out == 250.0
    assert first.net_cash == 750.0
    assert first.opening_balance == 50_000.0
    assert first.closing_balance == 50_750.0


def test_aggregate_fills_gaps_through_today():
    """Test every calendar day from first transaction to today is present"""
    series = aggregate_transactions(_ledger(), "co", TODAY)

    assert [a.date for a in series] == [date(2024, 1, 5) + timedelta(days=i) for i in range(6)]
    quiet_day = series[1]  # Jan 6
    assert quiet_day.cash_in == 0.0
    assert quiet_day.cash_out == 0.0
    assert quiet_day.closing_balance == quiet_day.opening_balance


def test_aggregate_balance_continuity():
    """Test each day opens at the previous day's close"""
    series = aggregate_transactions(_ledger(), "co", TODAY)

    for prev, curr in zip(series, series[1:]):
        assert curr.opening_balance == prev.closing_balance


def test_aggregate_running_balance_equals_seed_plus_net():
    """Test final balance = seed + sum of all net cash"""
    series = aggregate_transactions(_ledger(), "co", TODAY)

    assert series[-1].closing_balance == 50_000.0 + sum(a.net_cash for a in series)
    assert series[-1].closing_balance == 50_400.0


def test_aggregate_trailing_window_keeps_running_balance():
    """Test slicing happens after the full walk"""
    series = aggregate_transactions(_ledger(), "co", TODAY, days=3)

    assert [a.date for a in series] == [date(2024, 1, 8), date(2024, 1, 9), date(2024, 1, 10)]
    assert series[0].opening_balance == 50_350.0
    assert series[-1].closing_balance == 50_400.0


def test_aggregate_unordered_input():
    """Test input order does not matter"""
    ordered = aggregate_transactions(_ledger(), "co", TODAY)
    shuffled = aggregate_transactions(list(reversed(_ledger())), "co", TODAY)

    assert shuffled == ordered


def test_aggregate_custom_seed_balance():
    series = aggregate_transactions(_ledger(), "co", TODAY, seed_balance=0.0)

    assert series[0].opening_balance == 0.0
    assert series[-1].closing_balance == 400.0


def test_aggregate_ignores_days_after_today():
    """Test transactions dated in the future fall outside the walk"""
    ledger = _ledger() + [_txn(5, TODAY + timedelta(days=3), 9999.0)]
    series = aggregate_transactions(ledger, "co", TODAY)

    assert series[-1].date == TODAY
    assert series[-1].closing_balance == 50_400.0


def test_aggregate_stamps_company():
    series = aggregate_transactions(_ledger(), "acme", TODAY)
    assert {a.company_id for a in series} == {"acme"}


def test_aggregate_empty_input():
    """Test empty ledger produces nothing"""
    assert aggregate_transactions([], "co", TODAY) == []
