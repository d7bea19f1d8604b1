"""
Guest management: loyalty tiers, booking statistics and the admin guest screen.

Loyalty tier follows cumulative spend, but is only recomputed when an admin
saves the guest or explicitly recalculates the stats.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from models.booking import get_bookings_for_user
from models.user import get_all_users, get_user_by_id, update_user


GUEST_PROFILE_FIELDS = ('display_name', 'phone', 'address', 'date_of_birth', 'nationality',
                        'preferences', 'is_vip', 'notes', 'photo_url')

# Bookings that do not count towards stats
EXCLUDED_STATUSES = ('cancelled', 'no-show')


def loyalty_tier_for_spend(total_spent: float, tiers: Sequence[Tuple[str, float]]) -> str:
    """
    Tier for a cumulative spend.

    Args:
        total_spent: Cumulative paid spend
        tiers: (tier, threshold) pairs, highest threshold first

    Returns:
        Highest tier whose threshold is reached
    """
    for tier, threshold in tiers:
        if total_spent >= threshold:
            return tier
    return tiers[-1][0]


def next_tier(total_spent: float, tiers: Sequence[Tuple[str, float]]) -> Optional[Dict[str, Any]]:
    """
    The tier above the guest's current one.

    Returns:
        dict with tier, threshold and remaining spend, or None at the top tier
    """
    upcoming = None
    for tier, threshold in tiers:
        if total_spent < threshold:
            upcoming = {'tier': tier, 'threshold': threshold,
                        'remaining': threshold - total_spent}
    return upcoming


def compute_guest_stats(bookings: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Booking statistics for one guest.

    total_bookings counts bookings that were not cancelled or no-shows,
    total_spent sums paid bookings, last_stay_date is the latest check-out.
    """
    counted = [b for b in bookings if b.get('booking_status') not in EXCLUDED_STATUSES]
    paid = [b for b in bookings if b.get('payment_status') == 'paid']
    check_outs = [b['check_out'] for b in counted if b.get('check_out')]

    return {
        'total_bookings': len(counted),
        'total_spent': sum(b.get('total_amount') or 0 for b in paid),
        'last_stay_date': max(check_outs) if check_outs else None,
    }


def get_guests() -> List[Dict[str, Any]]:
    """All guest accounts (role 'user')."""
    return get_all_users(role='user')


def recalculate_guest_stats(user_id: int, tiers) -> Optional[Dict[str, Any]]:
    """
    Recompute and store a guest's stats and loyalty tier from their bookings.

    Returns:
        The stored stats (with loyalty_status), or None for unknown guests
    """
    if not get_user_by_id(user_id):
        return None

    stats = compute_guest_stats(get_bookings_for_user(user_id))
    stats['loyalty_status'] = loyalty_tier_for_spend(stats['total_spent'], tiers)
    update_user(user_id, **stats)
    return stats


def update_guest(user_id: int, data: Dict[str, Any], tiers) -> bool:
    """
    Admin edit of a guest profile. The loyalty tier is recomputed from the
    guest's stored total spend on every save.
    """
    guest = get_user_by_id(user_id)
    if not guest:
        return False

    values = {k: v for k, v in data.items() if k in GUEST_PROFILE_FIELDS}
    if 'preferences' in values:
        values['preferences'] = {**(guest.get('preferences') or {}), **(values['preferences'] or {})}
    values['loyalty_status'] = loyalty_tier_for_spend(guest.get('total_spent') or 0, tiers)
    return update_user(user_id, **values)


def build_rewards(user: Dict[str, Any], tiers) -> Dict[str, Any]:
    """Rewards panel of the guest dashboard."""
    total_spent = user.get('total_spent') or 0
    return {
        'loyalty_status': user.get('loyalty_status') or 'bronze',
        'total_spent': total_spent,
        'total_bookings': user.get('total_bookings') or 0,
        'next_tier': next_tier(total_spent, tiers),
    }


def search_guests(guests: List[Dict[str, Any]], search: str = None,
                  loyalty_status: str = None, vip: str = None) -> List[Dict[str, Any]]:
    """
    Admin screen filter: free text over display name/email/phone,
    loyalty tier and VIP flag.

    Args:
        vip: 'vip' or 'regular'
    """
    filtered = list(guests)

    if search:
        term = search.lower()
        filtered = [g for g in filtered if
                    term in (g.get('display_name') or '').lower() or
                    term in g['email'].lower() or
                    term in (g.get('phone') or '').lower()]
    if loyalty_status:
        filtered = [g for g in filtered if (g.get('loyalty_status') or 'bronze') == loyalty_status]
    if vip == 'vip':
        filtered = [g for g in filtered if g.get('is_vip')]
    elif vip == 'regular':
        filtered = [g for g in filtered if not g.get('is_vip')]

    return filtered
