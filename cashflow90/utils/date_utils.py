"""Date manipulation utilities"""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Union
from pydantic import TypeAdapter

_DATETIME_ADAPTER = TypeAdapter(datetime)


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def days_between(earlier: date, now: datetime) -> int:
    """Whole days between midnight UTC of a calendar day and an instant, rounded up"""
    start = datetime.combine(earlier, time.min, tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.ceil(abs((now - start).total_seconds()) / 86400)


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Coerce an ISO string or datetime into a calendar day"""
    if value is None or isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    return date.fromisoformat(value[:10])


def parse_datetime(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """Coerce an ISO string or calendar day into a timezone-aware datetime (UTC when naive)"""
    if value is None:
        return None
    if isinstance(value, str):
        # Postgres trims trailing zeros, so fractions can have any number of digits
        value = _DATETIME_ADAPTER.validate_python(value)
    elif not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
