"""Receivable/payable aging buckets for the working capital summary"""

from datetime import date, datetime
from typing import Dict, Optional, Sequence, Union

from cashflow90.domain.models import CLOSED_STATUSES, BillAP, InvoiceAR, WorkingCapitalSummary
from cashflow90.utils.date_utils import days_between

BUCKETS = ("0_30", "31_60", "61_90", "90_plus")


def aging_bucket(issue_date: Optional[date], now: datetime) -> str:
    """
    Map an issue date to its age bucket relative to now.

    Bands: <=30 days, <=60, <=90, older. Documents without an issue date
    land in the freshest bucket.
    """
    if issue_date is None:
        return "0_30"

    age = days_between(issue_date, now)
    if age <= 30:
        return "0_30"
    elif age <= 60:
        return "31_60"
    elif age <= 90:
        return "61_90"
    else:
        return "90_plus"


def _bucket_amounts(documents: Sequence[Union[InvoiceAR, BillAP]], now: datetime) -> Dict[str, float]:
    sums = {bucket: 0.0 for bucket in BUCKETS}
    for doc in documents:
        if doc.status in CLOSED_STATUSES:
            continue
        sums[aging_bucket(doc.issue_date, now)] += doc.amount
    return sums


def summarize_working_capital(
    receivables: Sequence[InvoiceAR],
    payables: Sequence[BillAP],
    company_id: str,
    now: datetime,
) -> WorkingCapitalSummary:
    """Bucket open AR and AP by age; totals are the sum of their buckets"""
    ar = _bucket_amounts(receivables, now)
    ap = _bucket_amounts(payables, now)

    return WorkingCapitalSummary(
        company_id=company_id,
        as_of_date=now,
        ar_total=sum(ar.values()),
        ap_total=sum(ap.values()),
        **{f"ar_{bucket}": amount for bucket, amount in ar.items()},
        **{f"ap_{bucket}": amount for bucket, amount in ap.items()},
    )
