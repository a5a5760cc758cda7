"""Daily cash position aggregation from raw bank transactions"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence

from cashflow90.domain.models import BankTransaction, DailyActual
from cashflow90.utils.date_utils import generate_date_range

DEFAULT_SEED_BALANCE = 50_000.0


def aggregate_transactions(
    transactions: Sequence[BankTransaction],
    company_id: str,
    today: date,
    days: int = 90,
    seed_balance: float = DEFAULT_SEED_BALANCE,
) -> List[DailyActual]:
    """
    Build a contiguous daily actuals series from a signed transaction log.

    Requirements:
    - Positive amounts count as cash in, negative amounts as cash out
    - Every calendar day from the earliest transaction through today is present,
      days without activity carry zero flows
    - Running balance starts at seed_balance, each day opens at the previous close

    The full series is built before slicing so the trailing window carries
    the correct running balance.

    Args:
        transactions: Raw ledger entries for one company, any order
        company_id: Company stamped on every output row
        today: Last day of the series (inclusive)
        days: Number of trailing days to return
        seed_balance: Assumed balance before the first observed transaction

    Returns:
        Trailing `days` entries of the aggregated series, oldest first
    """
    if not transactions or days <= 0:
        return []

    flows: Dict[date, List[float]] = defaultdict(lambda: [0.0, 0.0])
    for txn in transactions:
        day = flows[txn.transaction_date]
        if txn.amount >= 0:
            day[0] += txn.amount
        else:
            day[1] += abs(txn.amount)

    start = min(flows)
    balance = seed_balance
    series: List[DailyActual] = []

    for day in generate_date_range(start, today):
        cash_in, cash_out = flows.get(day, (0.0, 0.0))
        net = cash_in - cash_out
        opening = balance
        balance += net
        series.append(
            DailyActual(
                company_id=company_id,
                date=day,
                opening_balance=opening,
                cash_in=cash_in,
                cash_out=cash_out,
                net_cash=net,
                closing_balance=balance,
            )
        )

    return series[-days:]
