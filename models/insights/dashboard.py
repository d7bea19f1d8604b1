"""
Admin dashboard statistics and recent activity feed.
"""

from typing import Any, Dict, List

from models.pricing import calculate_nights


def calculate_average_stay(bookings: List[Dict[str, Any]]) -> float:
    """Mean nights per booking, rounded to one decimal."""
    nights = []
    for booking in bookings:
        try:
            nights.append(calculate_nights(booking['check_in'], booking['check_out']))
        except (KeyError, ValueError):
            continue
    return round(sum(nights) / len(nights), 1) if nights else 0


def get_dashboard_stats(rooms: List[Dict[str, Any]], bookings: List[Dict[str, Any]],
                        users: List[Dict[str, Any]], window_days: int) -> Dict[str, Any]:
    """
    Headline numbers for the admin dashboard.

    revenue sums confirmed bookings; occupancy is
    bookings / (rooms * window_days) * 100, rounded to a whole percent.
    """
    total_rooms = len(rooms)
    total_bookings = len(bookings)

    occupancy_rate = 0
    if total_bookings and total_rooms and window_days:
        occupancy_rate = round(total_bookings / (total_rooms * window_days) * 100)

    return {
        'total_rooms': total_rooms,
        'total_bookings': total_bookings,
        'total_users': len(users),
        'total_revenue': sum(b.get('total_amount') or 0 for b in bookings
                             if b.get('booking_status') == 'confirmed'),
        'occupancy_rate': occupancy_rate,
        'average_stay': calculate_average_stay(bookings),
    }


def get_recent_activity(bookings: List[Dict[str, Any]], users: List[Dict[str, Any]],
                        messages: List[Dict[str, Any]], limit: int = 10) -> List[Dict[str, Any]]:
    """
    Latest bookings, registrations and contact messages merged into one
    feed, newest first.

    Bookings are expected to carry room_name/user_name (see attach_details).
    """
    activities = []

    for booking in bookings:
        activities.append({
            'type': 'booking',
            'message': f'New booking for {booking.get("room_name") or "a room"}',
            'user': booking.get('user_name') or 'Guest',
            'status': booking.get('booking_status') or 'pending',
            'time': booking.get('created_at'),
        })

    for user in users:
        if user.get('role') != 'user':
            continue
        activities.append({
            'type': 'user',
            'message': 'New user registration',
            'user': user.get('display_name') or user['email'],
            'status': 'active' if user.get('active', True) else 'inactive',
            'time': user.get('created_at'),
        })

    for message in messages:
        activities.append({
            'type': 'message',
            'message': f'New message: {message.get("subject") or "No subject"}',
            'user': message['name'],
            'status': message['status'],
            'time': message.get('created_at'),
        })

    activities.sort(key=lambda item: item['time'] or '', reverse=True)
    return activities[:limit]
