"""
Room performance analytics: occupancy, popularity and revenue by room type.
"""

from typing import Any, Dict, List

from models.insights.revenue import PAID_STATUS


UNKNOWN_ROOM_TYPE = 'Unknown'


def calculate_occupancy_rate(bookings: List[Dict[str, Any]], rooms: List[Dict[str, Any]]) -> float:
    """Distinct rooms with a checked-in booking / total rooms, in percent."""
    if not rooms:
        return 0
    occupied = {b['room_id'] for b in bookings if b.get('booking_status') == 'checked-in'}
    return round(len(occupied) / len(rooms) * 100, 1)


def get_room_metrics(bookings: List[Dict[str, Any]], rooms: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Room metrics for bookings already filtered to the analytics window.

    Returns:
        dict with:
            - occupancy_rate: float (percent)
            - popular: list of {room_type, bookings}, most booked first
            - revenue: list of {room_type, revenue} over paid bookings, highest first
    """
    room_types = {room['id']: room['type'] for room in rooms}

    popularity = {}
    revenue = {}
    for booking in bookings:
        room_type = room_types.get(booking.get('room_id'), UNKNOWN_ROOM_TYPE)
        popularity[room_type] = popularity.get(room_type, 0) + 1
        if booking.get('payment_status') == PAID_STATUS:
            revenue[room_type] = revenue.get(room_type, 0) + (booking.get('total_amount') or 0)

    popular = [{'room_type': t, 'bookings': c} for t, c in popularity.items()]
    popular.sort(key=lambda item: (-item['bookings'], item['room_type']))

    by_revenue = [{'room_type': t, 'revenue': r} for t, r in revenue.items()]
    by_revenue.sort(key=lambda item: (-item['revenue'], item['room_type']))

    return {
        'occupancy_rate': calculate_occupancy_rate(bookings, rooms),
        'popular': popular,
        'revenue': by_revenue,
    }
