"""
Public room catalog and booking quotes.
"""

from flask import current_app, request

from models.gallery import get_images_for_room
from models.pricing import build_quote, normalize_add_ons
from models.promotion import validate_promo_code
from models.room import get_all_rooms, get_room_by_id, get_room_types, filter_rooms
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.messages import get_message


def _optional_float(name):
    value = request.args.get(name, '').strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f'Invalid {name.replace("_", " ")}')


def register_routes(bp):
    """Register room catalog routes on the public blueprint."""

    @bp.route('/rooms', methods=['GET'])
    def list_rooms():
        """
        Room catalog.

        Query params:
            room_type: Exact room type
            guests: Minimum capacity (default 1)
            min_price, max_price: Nightly price bounds
            check_in, check_out: When both are given, only available rooms
        """
        try:
            guests = int(request.args.get('guests') or 1)
            min_price = _optional_float('min_price')
            max_price = _optional_float('max_price')
        except ValueError as e:
            return api_error(str(e), 400)

        try:
            rooms = filter_rooms(
                get_all_rooms(),
                room_type=request.args.get('room_type') or None,
                guests=guests,
                min_price=min_price,
                max_price=max_price,
                check_in=request.args.get('check_in'),
                check_out=request.args.get('check_out')
            )
            return api_success(data=rooms, count=len(rooms), room_types=get_room_types())

        except Exception as e:
            current_app.logger.error(f'Error fetching room catalog: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='rooms'), 500)

    @bp.route('/rooms/<int:room_id>', methods=['GET'])
    def room_details(room_id):
        """Room with its gallery images."""
        room = get_room_by_id(room_id)
        if not room:
            return api_error(get_message('not_found', entity='Room'), 404)

        room['gallery'] = get_images_for_room(room_id)
        return api_success(data=room)

    @bp.route('/rooms/<int:room_id>/quote', methods=['POST'])
    def quote_room(room_id):
        """
        Price a stay before booking.

        Request body:
            check_in, check_out (required)
            add_ons: [{id, quantity}]
            promo_code: Optional code applied to the quoted total
        """
        room = get_room_by_id(room_id)
        if not room:
            return api_error(get_message('not_found', entity='Room'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            add_ons = normalize_add_ons(data.get('add_ons'), current_app.config['BOOKING_ADD_ONS'])
            quote = build_quote(room, data.get('check_in'), data.get('check_out'), add_ons)
            quote['add_ons'] = add_ons

            if data.get('promo_code'):
                result = validate_promo_code(data['promo_code'], quote['total'], get_today(),
                                             room_type=room['type'])
                quote['promo_code'] = result['promotion']['promo_code']
                quote['discount'] = result['discount']
                quote['total_after_discount'] = result['total']

            return api_success(data=quote)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error quoting room {room_id}: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='quote'), 500)
