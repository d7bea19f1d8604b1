"""
Guest booking and dashboard routes.
"""

from flask import current_app, request
from flask_login import login_required, current_user

from models.booking import (
    create_booking, get_booking_by_id, get_bookings_for_user, attach_details,
    split_guest_bookings
)
from models.guest import build_rewards, recalculate_guest_stats
from models.pricing import normalize_add_ons
from models.user import get_user_by_id, public_profile
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today, parse_date
from utils.messages import get_message
from utils.validators import sanitize_input


def register_routes(bp):
    """Register booking routes on the public blueprint."""

    @bp.route('/bookings', methods=['POST'])
    @login_required
    def create_booking_route():
        """
        Book a room for the signed-in guest.

        Request body:
            room_id, check_in, check_out, guests (required)
            add_ons: [{id, quantity}]
            special_requests: Free text
            guest_details: {first_name, last_name, email, phone}
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        for field in ('room_id', 'check_in', 'check_out', 'guests'):
            if not data.get(field):
                return api_error(f'Missing required field: {field}', 400)

        try:
            if parse_date(data['check_in']) < get_today():
                raise ValueError('Check-in date cannot be in the past')

            add_ons = normalize_add_ons(data.get('add_ons'), current_app.config['BOOKING_ADD_ONS'])
            booking_id = create_booking(
                user_id=current_user.id,
                room_id=int(data['room_id']),
                check_in=data['check_in'],
                check_out=data['check_out'],
                guests=data['guests'],
                add_ons=add_ons,
                special_requests=sanitize_input(data.get('special_requests'), 1000) or None,
                guest_details=data.get('guest_details')
            )
            recalculate_guest_stats(current_user.id, current_app.config['LOYALTY_TIERS'])
            current_app.logger.info(f'Booking {booking_id} created by {current_user.email}')

            booking = attach_details([get_booking_by_id(booking_id)])[0]
            return api_success(data=booking, message=get_message('booking_created'), status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error creating booking: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='booking'), 500)

    @bp.route('/dashboard', methods=['GET'])
    @login_required
    def dashboard():
        """Guest dashboard: profile, current bookings, stay history and rewards."""
        try:
            user = get_user_by_id(current_user.id)
            bookings = split_guest_bookings(attach_details(get_bookings_for_user(current_user.id)))
            return api_success(data={
                'profile': public_profile(user),
                'current': bookings['current'],
                'history': bookings['history'],
                'rewards': build_rewards(user, current_app.config['LOYALTY_TIERS']),
            })

        except Exception as e:
            current_app.logger.error(f'Error loading dashboard for {current_user.email}: {e}',
                                     exc_info=True)
            return api_error(get_message('fetch_failed', entity='dashboard'), 500)
