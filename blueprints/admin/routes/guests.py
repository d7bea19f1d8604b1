"""
Admin guest management routes.
"""

from flask import current_app, request

from models.booking import get_bookings_for_user, attach_details
from models.guest import get_guests, update_guest, recalculate_guest_stats, search_guests
from models.user import get_user_by_id, public_profile, deactivate_user, LOYALTY_LEVELS
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.helpers import confirmation_given
from utils.messages import get_message


def _get_guest(user_id):
    """Guest account by id; admins are not managed here."""
    user = get_user_by_id(user_id)
    if not user or user['role'] != 'user':
        return None
    return user


def register_routes(bp):
    """Register guest routes on the admin blueprint."""

    @bp.route('/guests', methods=['GET'])
    @admin_required
    def list_guests():
        """
        List guest accounts.

        Query params:
            search: Free text over display name, email and phone
            loyalty_status: bronze, silver, gold or platinum
            vip: 'vip' or 'regular'
        """
        try:
            guests = search_guests(
                get_guests(),
                search=request.args.get('search', '').strip(),
                loyalty_status=request.args.get('loyalty_status'),
                vip=request.args.get('vip')
            )
            return api_success(data=[public_profile(g) for g in guests], count=len(guests),
                               loyalty_levels=list(LOYALTY_LEVELS))

        except Exception as e:
            current_app.logger.error(f'Error fetching guests: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='guests'), 500)

    @bp.route('/guests/<int:user_id>', methods=['GET'])
    @admin_required
    def get_guest(user_id):
        """Guest profile with booking history."""
        guest = _get_guest(user_id)
        if not guest:
            return api_error(get_message('not_found', entity='Guest'), 404)

        try:
            bookings = attach_details(get_bookings_for_user(user_id))
            return api_success(data={'guest': public_profile(guest), 'bookings': bookings})

        except Exception as e:
            current_app.logger.error(f'Error fetching guest {user_id}: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='guest'), 500)

    @bp.route('/guests/<int:user_id>/bookings', methods=['GET'])
    @admin_required
    def get_guest_bookings(user_id):
        """Booking history of one guest."""
        if not _get_guest(user_id):
            return api_error(get_message('not_found', entity='Guest'), 404)

        try:
            bookings = attach_details(get_bookings_for_user(user_id))
            return api_success(data=bookings, count=len(bookings))

        except Exception as e:
            current_app.logger.error(f'Error fetching bookings of guest {user_id}: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='bookings'), 500)

    @bp.route('/guests/<int:user_id>', methods=['PUT', 'PATCH'])
    @admin_required
    def update_guest_route(user_id):
        """
        Edit a guest profile. The loyalty tier is recomputed from total spend.

        Request body (any of):
            display_name, phone, address, date_of_birth, nationality,
            preferences {favorite_room_type, special_requests,
            dietary_restrictions, bed_preference}, is_vip, notes, photo_url
        """
        if not _get_guest(user_id):
            return api_error(get_message('not_found', entity='Guest'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            update_guest(user_id, data, current_app.config['LOYALTY_TIERS'])
            return api_success(data=public_profile(get_user_by_id(user_id)),
                               message=get_message('updated', entity='Guest'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating guest {user_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='guest'), 500)

    @bp.route('/guests/<int:user_id>/recalculate', methods=['POST'])
    @admin_required
    def recalculate_guest(user_id):
        """Recompute total bookings, total spent, last stay and loyalty tier."""
        if not _get_guest(user_id):
            return api_error(get_message('not_found', entity='Guest'), 404)

        try:
            stats = recalculate_guest_stats(user_id, current_app.config['LOYALTY_TIERS'])
            return api_success(data=stats, message=get_message('updated', entity='Guest stats'))

        except Exception as e:
            current_app.logger.error(f'Error recalculating guest {user_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='guest stats'), 500)

    @bp.route('/guests/<int:user_id>', methods=['DELETE'])
    @admin_required
    def delete_guest(user_id):
        """Deactivate a guest account (requires confirm=true). Bookings are kept."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        if not _get_guest(user_id):
            return api_error(get_message('not_found', entity='Guest'), 404)

        try:
            deactivate_user(user_id)
            current_app.logger.info(f'Guest {user_id} deactivated')
            return api_success(message=get_message('deleted', entity='Guest'))

        except Exception as e:
            current_app.logger.error(f'Error deleting guest {user_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='guest'), 500)
