"""
Public offers, promo code checks and the add-on catalog.
"""

from flask import current_app, request

from models.promotion import get_all_promotions, get_active_offers, validate_promo_code
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.messages import get_message


def register_routes(bp):
    """Register offer routes on the public blueprint."""

    @bp.route('/offers', methods=['GET'])
    def offers():
        """Promotions that are active and valid today."""
        try:
            active = get_active_offers(get_all_promotions(), get_today())
            return api_success(data=active, count=len(active))

        except Exception as e:
            current_app.logger.error(f'Error fetching offers: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='offers'), 500)

    @bp.route('/offers/validate', methods=['POST'])
    def validate_offer():
        """
        Check a promo code against a subtotal.

        Request body:
            promo_code, subtotal (required), room_type
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            subtotal = float(data.get('subtotal') or 0)
        except (TypeError, ValueError):
            return api_error('Invalid subtotal', 400)

        try:
            result = validate_promo_code(data.get('promo_code'), subtotal, get_today(),
                                         room_type=data.get('room_type'))
            promotion = result['promotion']
            return api_success(data={
                'promo_code': promotion['promo_code'],
                'title': promotion['title'],
                'discount_type': promotion['discount_type'],
                'discount_value': promotion['discount_value'],
                'discount': result['discount'],
                'total': result['total'],
            })

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error validating promo code: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='promo code'), 500)

    @bp.route('/add-ons', methods=['GET'])
    def add_ons():
        """Bookable extras with unit prices."""
        return api_success(data=current_app.config['BOOKING_ADD_ONS'],
                           currency=current_app.config['CURRENCY'])
