"""
Booking price computation.

    total = nightly price x nights + sum(add-on price x quantity)
    nights = ceil((check_out - check_in) / 1 day)

No rounding, tax or service fee is applied at booking time.
"""

import math
from datetime import timedelta
from typing import Any, Dict, List, Optional

from utils.datetime_helpers import parse_datetime


ONE_DAY = timedelta(days=1)


def calculate_nights(check_in, check_out) -> int:
    """
    Number of nights between two dates, rounded up to whole days.

    Args:
        check_in: date, datetime or ISO string
        check_out: date, datetime or ISO string

    Returns:
        Night count (0 for equal dates, negative when check_out is earlier)
    """
    delta = parse_datetime(check_out) - parse_datetime(check_in)
    return math.ceil(delta / ONE_DAY)


def calculate_add_ons_total(add_ons: Optional[List[Dict[str, Any]]]) -> float:
    """Sum of price x quantity over the selected add-ons."""
    return sum(a.get('price', 0) * a.get('quantity', 0) for a in (add_ons or []))


def price_stay(price, nights: int, add_ons: Optional[List[Dict[str, Any]]] = None):
    """
    Total for a stay of a known length.

    Args:
        price: Nightly room price
        nights: Number of nights (non-negative)
        add_ons: List of {price, quantity} dicts

    Returns:
        price * nights + add-ons total
    """
    return price * nights + calculate_add_ons_total(add_ons)


def calculate_booking_total(price, check_in, check_out,
                            add_ons: Optional[List[Dict[str, Any]]] = None):
    """
    Total for a new or edited booking.

    Raises:
        ValueError: If the stay is not at least one night long
    """
    nights = calculate_nights(check_in, check_out)
    if nights <= 0:
        raise ValueError('Check-out must be after check-in')
    return price_stay(price, nights, add_ons)


def build_quote(room: dict, check_in, check_out,
                add_ons: Optional[List[Dict[str, Any]]] = None) -> dict:
    """
    Price breakdown shown on the booking form.

    Returns:
        dict with nights, nightly_price, room_total, add_ons_total, total
    """
    nights = calculate_nights(check_in, check_out)
    if nights <= 0:
        raise ValueError('Check-out must be after check-in')

    add_ons_total = calculate_add_ons_total(add_ons)
    return {
        'nights': nights,
        'nightly_price': room['price'],
        'room_total': room['price'] * nights,
        'add_ons_total': add_ons_total,
        'total': price_stay(room['price'], nights, add_ons),
    }


def normalize_add_ons(selected: Optional[List[Dict[str, Any]]], catalog: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Resolve selected add-ons against the configured catalog.

    Selections reference catalog entries by id; the catalog supplies name and
    unit price. Zero quantities are dropped.

    Args:
        selected: List of {id, quantity} dicts from the request
        catalog: Configured BOOKING_ADD_ONS

    Returns:
        List of {id, name, price, quantity} dicts

    Raises:
        ValueError: For unknown add-ons or invalid quantities
    """
    by_id = {str(item['id']): item for item in catalog}
    resolved = []

    for entry in selected or []:
        add_on_id = str(entry.get('id', ''))
        base = by_id.get(add_on_id)
        if base is None:
            raise ValueError(f'Unknown add-on: {add_on_id}')

        try:
            quantity = int(entry.get('quantity', 0))
        except (TypeError, ValueError):
            raise ValueError(f'Invalid quantity for {base["name"]}')
        if quantity < 0:
            raise ValueError(f'Invalid quantity for {base["name"]}')
        if quantity == 0:
            continue

        resolved.append({
            'id': add_on_id,
            'name': base['name'],
            'price': base['price'],
            'quantity': quantity,
        })

    return resolved
