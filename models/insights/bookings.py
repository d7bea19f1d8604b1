"""
Booking volume analytics.
"""

from typing import Any, Dict, List

from models.insights.window import group_by_month


DEFAULT_STATUS = 'pending'


def get_status_distribution(bookings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Booking count per booking_status (missing status counts as pending),
    most frequent first.
    """
    counts = {}
    for booking in bookings:
        status = booking.get('booking_status') or DEFAULT_STATUS
        counts[status] = counts.get(status, 0) + 1

    total = len(bookings)
    distribution = [
        {'status': status, 'count': count,
         'percentage': round(count / total * 100, 1) if total else 0}
        for status, count in counts.items()
    ]
    distribution.sort(key=lambda item: (-item['count'], item['status']))
    return distribution


def get_booking_metrics(bookings: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Booking metrics for bookings already filtered to the analytics window.

    Returns:
        dict with total, monthly [{month, count}] and by_status
    """
    monthly = [
        {'month': item['month'], 'count': item['value']}
        for item in group_by_month(bookings, lambda b: 1)
    ]

    return {
        'total': len(bookings),
        'monthly': monthly,
        'by_status': get_status_distribution(bookings),
    }
