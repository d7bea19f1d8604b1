"""
Analytics time windows and monthly grouping helpers.
"""

from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from utils.datetime_helpers import parse_datetime


# Time range -> number of months covered
TIME_RANGES = {
    '1month': 1,
    '3months': 3,
    '6months': 6,
    '1year': 12,
}

DEFAULT_TIME_RANGE = '6months'
MONTH_LABEL_FORMAT = '%b %Y'


def get_window_start(time_range: str, today: date) -> date:
    """
    First day of the month N months before today.

    Args:
        time_range: One of TIME_RANGES
        today: Reference date

    Raises:
        ValueError: For unknown time ranges
    """
    if time_range not in TIME_RANGES:
        raise ValueError(f'Invalid time range: {time_range}')

    months_back = TIME_RANGES[time_range]
    month_index = today.year * 12 + (today.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


def _created_at(record: Dict[str, Any]) -> Optional[datetime]:
    try:
        return parse_datetime(record.get('created_at'))
    except ValueError:
        return None


def filter_by_window(records: Iterable[Dict[str, Any]], start: date,
                     end: datetime = None) -> List[Dict[str, Any]]:
    """Records created on or after start (and not after end, when given)."""
    start_dt = datetime(start.year, start.month, start.day)
    filtered = []
    for record in records:
        created = _created_at(record)
        if created is None or created < start_dt:
            continue
        if end is not None and created > end:
            continue
        filtered.append(record)
    return filtered


def group_by_month(records: Iterable[Dict[str, Any]],
                   value: Callable[[Dict[str, Any]], float]) -> List[Dict[str, Any]]:
    """
    Sum value(record) per creation month.

    Returns:
        [{'month': 'Jan 2024', 'value': ...}] ordered chronologically,
        independent of input order
    """
    totals = {}
    for record in records:
        created = _created_at(record)
        if created is None:
            continue
        key = (created.year, created.month)
        totals[key] = totals.get(key, 0) + value(record)

    return [
        {'month': date(year, month, 1).strftime(MONTH_LABEL_FORMAT), 'value': totals[(year, month)]}
        for year, month in sorted(totals)
    ]
