"""
Promotion / offer model and data access functions.
The public offers page and the admin promotions screen share this table.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from database import get_db
from database.records import row_to_dict, build_update, encode_json
from utils.datetime_helpers import now_iso, parse_date
from utils.helpers import generate_unique_code


DISCOUNT_TYPES = ('percentage', 'fixed')
PROMO_CODE_LENGTH = 8

JSON_FIELDS = {'applicable_room_types': []}
BOOL_FIELDS = ('is_active',)

UPDATABLE_FIELDS = [
    'title', 'description', 'promo_code', 'discount_type', 'discount_value',
    'minimum_spend', 'maximum_discount', 'valid_from', 'valid_to', 'is_active',
    'image_url', 'usage_limit', 'applicable_room_types', 'terms',
]


def _to_promotion(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, JSON_FIELDS, BOOL_FIELDS)


def normalize_discount_type(discount_type: str) -> str:
    """Map the legacy 'flat' value onto 'fixed' and validate the rest."""
    value = (discount_type or 'percentage').strip().lower()
    if value == 'flat':
        value = 'fixed'
    if value not in DISCOUNT_TYPES:
        raise ValueError(f'Invalid discount type: {discount_type}')
    return value


def generate_promo_code() -> str:
    """Random uppercase alphanumeric promo code."""
    return generate_unique_code(length=PROMO_CODE_LENGTH)


def _prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and normalize a complete promotion record."""
    values = dict(data)

    if not str(values.get('title') or '').strip():
        raise ValueError('Promotion title is required')
    values['title'] = values['title'].strip()

    values['discount_type'] = normalize_discount_type(values.get('discount_type'))

    values['discount_value'] = float(values.get('discount_value') or 0)
    if values['discount_value'] < 0:
        raise ValueError('Discount value cannot be negative')
    if values['discount_type'] == 'percentage' and values['discount_value'] > 100:
        raise ValueError('Percentage discount cannot exceed 100')

    for field in ('valid_from', 'valid_to'):
        if values.get(field):
            values[field] = parse_date(values[field]).isoformat()
    if values.get('valid_from') and values.get('valid_to'):
        if values['valid_to'] < values['valid_from']:
            raise ValueError('End date must be after start date')

    values['promo_code'] = (values.get('promo_code') or '').strip().upper() or None

    return values


def _ensure_code_available(promo_code: Optional[str], promotion_id: int = None) -> None:
    """Promo codes are unique regardless of case."""
    if not promo_code:
        return
    existing = get_promotion_by_code(promo_code)
    if existing and existing['id'] != promotion_id:
        raise ValueError(f'Promo code {promo_code} is already in use')


def get_all_promotions() -> List[Dict[str, Any]]:
    """Get all promotions, newest first."""
    db = get_db()
    rows = db.execute('SELECT * FROM promotions ORDER BY created_at DESC, id DESC').fetchall()
    return [_to_promotion(row) for row in rows]


def get_promotion_by_id(promotion_id: int) -> Optional[Dict[str, Any]]:
    db = get_db()
    row = db.execute('SELECT * FROM promotions WHERE id = ?', (promotion_id,)).fetchone()
    return _to_promotion(row)


def get_promotion_by_code(promo_code: str) -> Optional[Dict[str, Any]]:
    """Get promotion by promo code (case-insensitive)."""
    db = get_db()
    row = db.execute('SELECT * FROM promotions WHERE upper(promo_code) = upper(?)',
                     (promo_code.strip(),)).fetchone()
    return _to_promotion(row)


def create_promotion(data: Dict[str, Any]) -> int:
    """
    Create a promotion.

    A promo code is generated when none is given.

    Returns:
        New promotion ID

    Raises:
        ValueError: Missing title, bad discount type/value, date order or a
                    promo code already in use
    """
    values = _prepare(data)
    _ensure_code_available(values['promo_code'])
    promo_code = values['promo_code'] or generate_promo_code()

    timestamp = now_iso()
    db = get_db()
    cursor = db.execute('''
        INSERT INTO promotions (title, description, promo_code, discount_type, discount_value,
                                minimum_spend, maximum_discount, valid_from, valid_to, is_active,
                                image_url, usage_limit, used_count, applicable_room_types, terms,
                                created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?, ?, ?)
    ''', (
        values['title'],
        values.get('description', ''),
        promo_code,
        values['discount_type'],
        values.get('discount_value', 0),
        values.get('minimum_spend') or 0,
        values.get('maximum_discount') or 0,
        values.get('valid_from'),
        values.get('valid_to'),
        1 if values.get('is_active', True) else 0,
        values.get('image_url'),
        values.get('usage_limit') or 0,
        encode_json(values.get('applicable_room_types') or []),
        values.get('terms', ''),
        timestamp,
        timestamp,
    ))
    db.commit()
    return cursor.lastrowid


def update_promotion(promotion_id: int, data: Dict[str, Any]) -> bool:
    """
    Update promotion fields. Returns True if a row was updated.

    The changes are validated together with the stored record, so a new
    discount value is checked against the stored discount type and a new
    end date against the stored start date.
    """
    current = get_promotion_by_id(promotion_id)
    if not current:
        return False

    merged = _prepare({**current, **data})
    values = {key: merged[key] for key in data if key in merged}
    if 'promo_code' in values:
        _ensure_code_available(values['promo_code'], promotion_id)

    updates, params = build_update(UPDATABLE_FIELDS, values,
                                   json_fields=('applicable_room_types',),
                                   bool_fields=BOOL_FIELDS)
    if not updates:
        return False

    updates.append('updated_at = ?')
    params.extend([now_iso(), promotion_id])

    db = get_db()
    cursor = db.execute(f'UPDATE promotions SET {", ".join(updates)} WHERE id = ?', params)
    db.commit()
    return cursor.rowcount > 0


def toggle_promotion(promotion_id: int) -> Optional[bool]:
    """
    Flip is_active.

    Returns:
        New is_active value, or None if the promotion does not exist
    """
    promotion = get_promotion_by_id(promotion_id)
    if not promotion:
        return None
    new_value = not promotion['is_active']
    update_promotion(promotion_id, {'is_active': new_value})
    return new_value


def delete_promotion(promotion_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM promotions WHERE id = ?', (promotion_id,))
    db.commit()
    return cursor.rowcount > 0


def is_within_window(promotion: Dict[str, Any], today: date) -> bool:
    """valid_from <= today <= valid_to; a missing bound is open."""
    if promotion.get('valid_from') and parse_date(promotion['valid_from']) > today:
        return False
    if promotion.get('valid_to') and parse_date(promotion['valid_to']) < today:
        return False
    return True


def promotion_status(promotion: Dict[str, Any], today: date) -> str:
    """
    Display status used by the admin screen filter.

    Returns:
        'inactive', 'scheduled' (not started), 'expired' or 'active'
    """
    if not promotion['is_active']:
        return 'inactive'
    if promotion.get('valid_from') and parse_date(promotion['valid_from']) > today:
        return 'scheduled'
    if promotion.get('valid_to') and parse_date(promotion['valid_to']) < today:
        return 'expired'
    return 'active'


def get_active_offers(promotions: List[Dict[str, Any]], today: date) -> List[Dict[str, Any]]:
    """Offers shown on the public site: active and valid today."""
    return [p for p in promotions if p['is_active'] and is_within_window(p, today)]


def calculate_discount(promotion: Dict[str, Any], subtotal: float) -> float:
    """
    Discount amount for a subtotal, capped by maximum_discount (0 = no cap)
    and by the subtotal itself.
    """
    if promotion['discount_type'] == 'percentage':
        discount = subtotal * promotion['discount_value'] / 100
    else:
        discount = promotion['discount_value']

    maximum = promotion.get('maximum_discount') or 0
    if maximum > 0:
        discount = min(discount, maximum)
    return round(min(discount, subtotal), 2)


def validate_promo_code(promo_code: str, subtotal: float, today: date,
                        room_type: str = None) -> Dict[str, Any]:
    """
    Check a promo code against a booking subtotal.

    Returns:
        dict with promotion, discount and total

    Raises:
        ValueError: With the reason the code does not apply
    """
    if not promo_code:
        raise ValueError('Promo code is required')

    promotion = get_promotion_by_code(promo_code)
    if not promotion or not promotion['is_active']:
        raise ValueError('Invalid promo code')
    if not is_within_window(promotion, today):
        raise ValueError('This promo code is not valid today')

    usage_limit = promotion.get('usage_limit') or 0
    if usage_limit and promotion['used_count'] >= usage_limit:
        raise ValueError('This promo code has reached its usage limit')

    minimum = promotion.get('minimum_spend') or 0
    if subtotal < minimum:
        raise ValueError(f'Minimum spend of {minimum:g} required for this promo code')

    room_types = promotion.get('applicable_room_types') or []
    if room_types and room_type not in room_types:
        raise ValueError('This promo code does not apply to the selected room')

    discount = calculate_discount(promotion, subtotal)
    return {
        'promotion': promotion,
        'discount': discount,
        'total': round(subtotal - discount, 2),
    }


def search_promotions(promotions: List[Dict[str, Any]], today: date, search: str = None,
                      status: str = None, discount_type: str = None) -> List[Dict[str, Any]]:
    """
    Admin screen filter: free text over title/promo code/description,
    display status and discount type.
    """
    filtered = list(promotions)

    if search:
        term = search.lower()
        filtered = [p for p in filtered if
                    term in p['title'].lower() or
                    term in (p.get('promo_code') or '').lower() or
                    term in (p.get('description') or '').lower()]
    if status:
        filtered = [p for p in filtered if promotion_status(p, today) == status]
    if discount_type:
        wanted = 'fixed' if discount_type == 'flat' else discount_type
        filtered = [p for p in filtered if p['discount_type'] == wanted]

    return filtered
