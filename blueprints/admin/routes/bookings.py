"""
Admin booking management routes.
"""

from flask import current_app, request

from models.booking import (
    get_all_bookings, get_booking_by_id, attach_details, update_booking,
    update_booking_status, update_payment_status, delete_booking, search_bookings,
    BOOKING_STATUSES, PAYMENT_STATUSES
)
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.decorators import admin_required
from utils.helpers import confirmation_given
from utils.messages import get_message


def _booking_with_details(booking_id):
    booking = get_booking_by_id(booking_id)
    return attach_details([booking])[0] if booking else None


def register_routes(bp):
    """Register booking routes on the admin blueprint."""

    @bp.route('/bookings', methods=['GET'])
    @admin_required
    def list_bookings():
        """
        List bookings with room and guest names resolved.

        Query params:
            search: Free text over guest name, guest email and room name
            booking_status: Exact booking status
            payment_status: Exact payment status
            date: 'today', 'upcoming' or 'past'
        """
        try:
            bookings = search_bookings(
                attach_details(get_all_bookings()),
                search=request.args.get('search', '').strip(),
                booking_status=request.args.get('booking_status'),
                payment_status=request.args.get('payment_status'),
                date_filter=request.args.get('date'),
                today=get_today()
            )
            return api_success(data=bookings, count=len(bookings),
                               booking_statuses=list(BOOKING_STATUSES),
                               payment_statuses=list(PAYMENT_STATUSES))

        except Exception as e:
            current_app.logger.error(f'Error fetching bookings: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='bookings'), 500)

    @bp.route('/bookings/<int:booking_id>', methods=['GET'])
    @admin_required
    def get_booking(booking_id):
        """Get a single booking with room and guest names."""
        booking = _booking_with_details(booking_id)
        if not booking:
            return api_error(get_message('not_found', entity='Booking'), 404)
        return api_success(data=booking)

    @bp.route('/bookings/<int:booking_id>', methods=['PUT', 'PATCH'])
    @admin_required
    def update_booking_route(booking_id):
        """
        Edit a booking.

        Request body (any of):
            check_in, check_out (total is recomputed), guests,
            special_requests, booking_status, payment_status, amount_paid
        """
        if not get_booking_by_id(booking_id):
            return api_error(get_message('not_found', entity='Booking'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            if not update_booking(booking_id, data):
                return api_error(get_message('data_required'), 400)
            return api_success(data=_booking_with_details(booking_id),
                               message=get_message('updated', entity='Booking'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating booking {booking_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='booking'), 500)

    @bp.route('/bookings/<int:booking_id>/status', methods=['POST'])
    @admin_required
    def update_booking_status_route(booking_id):
        """Set booking_status (any status from any other)."""
        data = request.get_json(silent=True) or {}
        status = data.get('booking_status') or data.get('status')
        if not status:
            return api_error(get_message('data_required'), 400)

        try:
            if not update_booking_status(booking_id, status):
                return api_error(get_message('not_found', entity='Booking'), 404)
            current_app.logger.info(f'Booking {booking_id} status set to {status}')
            return api_success(data=_booking_with_details(booking_id),
                               message=get_message('updated', entity='Booking'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating booking status {booking_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='booking'), 500)

    @bp.route('/bookings/<int:booking_id>/payment', methods=['POST'])
    @admin_required
    def update_payment_route(booking_id):
        """Set payment_status and optionally amount_paid."""
        data = request.get_json(silent=True) or {}
        status = data.get('payment_status') or data.get('status')
        if not status:
            return api_error(get_message('data_required'), 400)

        try:
            if not update_payment_status(booking_id, status, data.get('amount_paid')):
                return api_error(get_message('not_found', entity='Booking'), 404)
            current_app.logger.info(f'Booking {booking_id} payment set to {status}')
            return api_success(data=_booking_with_details(booking_id),
                               message=get_message('updated', entity='Payment'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating payment {booking_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='payment'), 500)

    @bp.route('/bookings/<int:booking_id>', methods=['DELETE'])
    @admin_required
    def delete_booking_route(booking_id):
        """Delete a booking (requires confirm=true)."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        try:
            if not delete_booking(booking_id):
                return api_error(get_message('not_found', entity='Booking'), 404)
            current_app.logger.info(f'Booking {booking_id} deleted')
            return api_success(message=get_message('deleted', entity='Booking'))

        except Exception as e:
            current_app.logger.error(f'Error deleting booking {booking_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='booking'), 500)
