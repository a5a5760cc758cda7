"""Unit tests for AR/AP aging buckets"""

import pytest
from datetime import date, datetime, timezone
from cashflow90.domain.aging import aging_bucket, summarize_working_capital
from cashflow90.domain.models import BillAP, DocumentStatus, InvoiceAR

MIDNIGHT = datetime(2024, 6, 15, tzinfo=timezone.utc)
NOON = datetime(2024, 6, 15, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "issue_date,bucket",
    [
        (date(2024, 6, 15), "0_30"),
        (date(2024, 5, 16), "0_30"),  # 30 days
        (date(2024, 5, 15), "31_60"),  # 31 days
        (date(2024, 4, 16), "31_60"),  # 60 days
        (date(2024, 4, 15), "61_90"),  # 61 days
        (date(2024, 3, 17), "61_90"),  # 90 days
        (date(2024, 3, 16), "90_plus"),  # 91 days
        (date(2024, 6, 20), "0_30"),  # future date, absolute difference
        (None, "0_30"),
    ],
)
def test_aging_bucket_boundaries(issue_date, bucket):
    assert aging_bucket(issue_date, MIDNIGHT) == bucket


def test_aging_bucket_rounds_partial_days_up():
    """Test 30.5 days counts as 31"""
    assert aging_bucket(date(2024, 5, 16), NOON) == "31_60"


def test_aging_bucket_naive_now_is_utc():
    assert aging_bucket(date(2024, 5, 15), datetime(2024, 6, 15)) == "31_60"


def _invoice(n: int, issue_date, amount: float, status=DocumentStatus.OPEN) -> InvoiceAR:
    return InvoiceAR(id=f"inv_{n}", company_id="co", issue_date=issue_date, amount=amount, status=status)


def _bill(n: int, issue_date, amount: float, status=DocumentStatus.OPEN) -> BillAP:
    return BillAP(id=f"bill_{n}", company_id="co", issue_date=issue_date, amount=amount, status=status)


def test_summarize_buckets_and_totals():
    """Test per-bucket sums on both sides"""
    receivables = [
        _invoice(1, date(2024, 6, 1), 1000.0),
        _invoice(2, date(2024, 4, 20), 2000.0),
        _invoice(3, date(2024, 3, 25), 3000.0),
        _invoice(4, date(2024, 1, 1), 4000.0, DocumentStatus.OVERDUE),
        _invoice(5, None, 500.0, DocumentStatus.DRAFT),
    ]
    payables = [_bill(1, date(2024, 6, 10), 700.0), _bill(2, date(2023, 12, 1), 300.0)]

    summary = summarize_working_capital(receivables, payables, "co", NOON)

    assert summary.ar_0_30 == 1500.0
    assert summary.ar_31_60 == 2000.0
    assert summary.ar_61_90 == 3000.0
    assert summary.ar_90_plus == 4000.0
    assert summary.ar_total == 10_500.0
    assert summary.ap_0_30 == 700.0
    assert summary.ap_90_plus == 300.0
    assert summary.ap_total == 1000.0
    assert summary.as_of_date == NOON
    assert summary.net_working_capital == 9_500.0


def test_summarize_skips_paid_and_void():
    receivables = [
        _invoice(1, date(2024, 6, 1), 1000.0),
        _invoice(2, date(2024, 6, 1), 5000.0, DocumentStatus.PAID),
        _invoice(3, date(2024, 6, 1), 7000.0, DocumentStatus.VOID),
    ]
    summary = summarize_working_capital(receivables, [], "co", NOON)

    assert summary.ar_total == 1000.0
    assert summary.ap_total == 0.0


def test_summarize_totals_are_bucket_sums():
    """Test ar_total/ap_total equal their buckets exactly"""
    receivables = [_invoice(i, date(2024, 1 + i % 6, 1 + i), 0.1 * i + 123.45) for i in range(25)]
    payables = [_bill(i, date(2024, 1 + i % 6, 2 + i), 0.3 * i + 9.99) for i in range(25)]

    s = summarize_working_capital(receivables, payables, "co", NOON)

    assert s.ar_total == s.ar_0_30 + s.ar_31_60 + s.ar_61_90 + s.ar_90_plus
    assert s.ap_total == s.ap_0_30 + s.ap_31_60 + s.ap_61_90 + s.ap_90_plus
