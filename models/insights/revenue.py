"""
Revenue analytics.
Only bookings with payment_status 'paid' count as revenue.
"""

from typing import Any, Dict, List

from models.insights.window import group_by_month


PAID_STATUS = 'paid'


def paid_bookings(bookings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [b for b in bookings if b.get('payment_status') == PAID_STATUS]


def calculate_revenue(bookings: List[Dict[str, Any]]) -> float:
    """Sum of total_amount over paid bookings."""
    return sum(b.get('total_amount') or 0 for b in paid_bookings(bookings))


def calculate_growth(monthly: List[Dict[str, Any]], key: str = 'amount') -> float:
    """
    Month-over-month growth percentage between the last two months.

    Returns:
        0 when there are fewer than two months or the previous month is 0
    """
    if len(monthly) < 2:
        return 0
    last_month = monthly[-1][key]
    previous_month = monthly[-2][key]
    if previous_month <= 0:
        return 0
    return round((last_month - previous_month) / previous_month * 100, 1)


def get_revenue_metrics(bookings: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Revenue metrics for bookings already filtered to the analytics window.

    Returns:
        dict with:
            - total: float
            - monthly: list of {month, amount}, chronological
            - growth: float (percent)
            - paid_bookings: int
            - average_booking_value: float
    """
    paid = paid_bookings(bookings)
    total = calculate_revenue(bookings)

    monthly = [
        {'month': item['month'], 'amount': item['value']}
        for item in group_by_month(paid, lambda b: b.get('total_amount') or 0)
    ]

    return {
        'total': total,
        'monthly': monthly,
        'growth': calculate_growth(monthly),
        'paid_bookings': len(paid),
        'average_booking_value': round(total / len(paid), 2) if paid else 0,
    }
