"""
Guest analytics: new vs returning guests, VIPs and loyalty tiers.
"""

from typing import Any, Dict, List

from models.user import LOYALTY_LEVELS


GUEST_ROLE = 'user'
DEFAULT_LOYALTY = 'bronze'


def split_new_and_returning(bookings: List[Dict[str, Any]]) -> Dict[str, int]:
    """
    Count distinct booking guests.

    returning: user ids with more than one booking
    new: guests with exactly one booking (new + returning = distinct guests)
    """
    counts = {}
    for booking in bookings:
        user_id = booking.get('user_id')
        if user_id is None:
            continue
        counts[user_id] = counts.get(user_id, 0) + 1

    returning = sum(1 for count in counts.values() if count > 1)
    return {'new': len(counts) - returning, 'returning': returning}


def get_loyalty_distribution(guests: List[Dict[str, Any]]) -> Dict[str, int]:
    """Guest count per loyalty tier (missing tier counts as bronze)."""
    distribution = {level: 0 for level in LOYALTY_LEVELS}
    for guest in guests:
        level = guest.get('loyalty_status') or DEFAULT_LOYALTY
        distribution[level] = distribution.get(level, 0) + 1
    return distribution


def get_guest_metrics(bookings: List[Dict[str, Any]], users: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Guest metrics for bookings already filtered to the analytics window.

    Args:
        bookings: Window bookings
        users: All user accounts (admins are excluded from the totals)

    Returns:
        dict with total, new, returning, vip and loyalty
    """
    guests = [u for u in users if (u.get('role') or GUEST_ROLE) == GUEST_ROLE]
    split = split_new_and_returning(bookings)

    return {
        'total': len(guests),
        'new': split['new'],
        'returning': split['returning'],
        'vip': sum(1 for g in guests if g.get('is_vip')),
        'loyalty': get_loyalty_distribution(guests),
    }
