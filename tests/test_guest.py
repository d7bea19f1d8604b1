"""
Loyalty tier and guest statistics tests.
"""

from config import Config
from models.guest import compute_guest_stats, loyalty_tier_for_spend, next_tier, search_guests


TIERS = Config.LOYALTY_TIERS


def test_loyalty_tier_thresholds():
    assert loyalty_tier_for_spend(0, TIERS) == 'bronze'
    assert loyalty_tier_for_spend(19999, TIERS) == 'bronze'
    assert loyalty_tier_for_spend(20000, TIERS) == 'silver'
    assert loyalty_tier_for_spend(75000, TIERS) == 'gold'
    assert loyalty_tier_for_spend(250000, TIERS) == 'platinum'


def test_next_tier():
    assert next_tier(60000, TIERS) == {'tier': 'platinum', 'threshold': 100000, 'remaining': 40000}
    assert next_tier(100000, TIERS) is None


def test_compute_guest_stats():
    bookings = [
        {'booking_status': 'completed', 'payment_status': 'paid',
         'total_amount': 1200, 'check_out': '2024-02-10'},
        {'booking_status': 'confirmed', 'payment_status': 'partial',
         'total_amount': 800, 'check_out': '2024-05-02'},
        {'booking_status': 'cancelled', 'payment_status': 'refunded',
         'total_amount': 500, 'check_out': '2024-09-01'},
        {'booking_status': 'no-show', 'payment_status': 'pending',
         'total_amount': 300, 'check_out': '2024-10-01'},
    ]

    assert compute_guest_stats(bookings) == {
        'total_bookings': 2,
        'total_spent': 1200,
        'last_stay_date': '2024-05-02',
    }


def test_compute_guest_stats_without_bookings():
    assert compute_guest_stats([]) == {'total_bookings': 0, 'total_spent': 0, 'last_stay_date': None}


def test_search_guests():
    guests = [
        {'display_name': 'Arjun Mehta', 'email': 'arjun@gmail.com', 'phone': '9876543210',
         'loyalty_status': 'gold', 'is_vip': True},
        {'display_name': 'Kavya Rao', 'email': 'kavya@yahoo.com', 'phone': None,
         'loyalty_status': None, 'is_vip': False},
    ]

    assert [g['display_name'] for g in search_guests(guests, search='98765')] == ['Arjun Mehta']
    assert [g['display_name'] for g in search_guests(guests, loyalty_status='bronze')] == ['Kavya Rao']
    assert [g['display_name'] for g in search_guests(guests, vip='regular')] == ['Kavya Rao']
