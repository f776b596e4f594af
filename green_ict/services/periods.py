"""
Month arithmetic for the monthly audit.

All windows are calendar months in UTC. Months are passed around as
'YYYY-MM' strings and stored as the first day of the month.
"""

import datetime
import re
from typing import Dict, Optional

from dateutil.relativedelta import relativedelta
from django.utils import timezone

MONTH_PATTERN = re.compile(r'^\d{4}-\d{2}$')


def is_valid_month(value) -> bool:
    """True for 'YYYY-MM' strings whose month number is 01..12."""
    if not isinstance(value, str) or not MONTH_PATTERN.match(value):
        return False
    year, month = int(value[:4]), int(value[5:7])
    return year >= 1 and 1 <= month <= 12


def date_to_month(value: datetime.date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def month_to_date(month: str) -> datetime.date:
    """
    Convert 'YYYY-MM' to the first day of that month.

    Raises:
        ValueError: if the string is not a valid month
    """
    if not is_valid_month(month):
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")
    return datetime.date(int(month[:4]), int(month[5:7]), 1)


def get_previous_month(now: Optional[datetime.datetime] = None) -> str:
    """Calendar month before the current UTC month."""
    now = now or timezone.now()
    if timezone.is_aware(now):
        now = now.astimezone(datetime.timezone.utc)
    first_of_previous = now.date().replace(day=1) - relativedelta(months=1)
    return date_to_month(first_of_previous)


def resolve_month(value: Optional[str], now: Optional[datetime.datetime] = None) -> str:
    """Use the requested month when it is valid, otherwise fall back to the previous month."""
    if is_valid_month(value):
        return value
    return get_previous_month(now)


def format_utc_iso(value: datetime.datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix, e.g. 2025-01-31T23:59:59.999Z."""
    if timezone.is_aware(value):
        value = value.astimezone(datetime.timezone.utc)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def get_month_bounds(month: str) -> Dict:
    """
    Compute the UTC window for a month.

    The window is [start, next_start); `end` is the last representable
    millisecond and is only used for display.

    Returns:
        dict with month, period_month, start, next_start, end, start_iso, end_iso
    """
    period_month = month_to_date(month)
    start = datetime.datetime(period_month.year, period_month.month, 1, tzinfo=datetime.timezone.utc)
    next_start = start + relativedelta(months=1)
    end = next_start - datetime.timedelta(milliseconds=1)
    return {
        'month': month,
        'period_month': period_month,
        'start': start,
        'next_start': next_start,
        'end': end,
        'start_iso': format_utc_iso(start),
        'end_iso': format_utc_iso(end),
    }
