"""
Admin promotion routes.
"""

from flask import current_app, request

from models.promotion import (
    get_all_promotions, get_promotion_by_id, create_promotion, update_promotion,
    toggle_promotion, delete_promotion, search_promotions, promotion_status
)
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.decorators import admin_required
from utils.helpers import confirmation_given
from utils.image_storage import ImageUploadError, get_image_storage, upload_many
from utils.messages import get_message


def _with_status(promotion, today):
    promotion['status'] = promotion_status(promotion, today)
    return promotion


def register_routes(bp):
    """Register promotion routes on the admin blueprint."""

    @bp.route('/promotions', methods=['GET'])
    @admin_required
    def list_promotions():
        """
        List promotions with their display status.

        Query params:
            search: Free text over title, promo code and description
            status: active, inactive, expired or scheduled
            discount_type: percentage or fixed
        """
        try:
            today = get_today()
            promotions = search_promotions(
                get_all_promotions(), today,
                search=request.args.get('search', '').strip(),
                status=request.args.get('status'),
                discount_type=request.args.get('discount_type')
            )
            return api_success(data=[_with_status(p, today) for p in promotions],
                               count=len(promotions))

        except Exception as e:
            current_app.logger.error(f'Error fetching promotions: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='promotions'), 500)

    @bp.route('/promotions/<int:promotion_id>', methods=['GET'])
    @admin_required
    def get_promotion(promotion_id):
        promotion = get_promotion_by_id(promotion_id)
        if not promotion:
            return api_error(get_message('not_found', entity='Promotion'), 404)
        return api_success(data=_with_status(promotion, get_today()))

    @bp.route('/promotions', methods=['POST'])
    @admin_required
    def create_promotion_route():
        """
        Create a promotion. A promo code is generated when none is given.

        Request body:
            title, discount_type, discount_value (required), description,
            promo_code, minimum_spend, maximum_discount, valid_from, valid_to,
            is_active, image_url, usage_limit, applicable_room_types, terms
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            promotion_id = create_promotion(data)
            current_app.logger.info(f'Promotion {promotion_id} created')
            return api_success(data=_with_status(get_promotion_by_id(promotion_id), get_today()),
                               message=get_message('created', entity='Promotion'), status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error creating promotion: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='promotion'), 500)

    @bp.route('/promotions/<int:promotion_id>', methods=['PUT', 'PATCH'])
    @admin_required
    def update_promotion_route(promotion_id):
        if not get_promotion_by_id(promotion_id):
            return api_error(get_message('not_found', entity='Promotion'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            update_promotion(promotion_id, data)
            return api_success(data=_with_status(get_promotion_by_id(promotion_id), get_today()),
                               message=get_message('updated', entity='Promotion'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating promotion {promotion_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='promotion'), 500)

    @bp.route('/promotions/<int:promotion_id>/toggle', methods=['POST'])
    @admin_required
    def toggle_promotion_route(promotion_id):
        """Flip is_active."""
        try:
            is_active = toggle_promotion(promotion_id)
            if is_active is None:
                return api_error(get_message('not_found', entity='Promotion'), 404)
            return api_success(data={'id': promotion_id, 'is_active': is_active},
                               message=get_message('updated', entity='Promotion'))

        except Exception as e:
            current_app.logger.error(f'Error toggling promotion {promotion_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='promotion'), 500)

    @bp.route('/promotions/<int:promotion_id>/image', methods=['POST'])
    @admin_required
    def upload_promotion_banner(promotion_id):
        """Upload a banner image (multipart field 'image') and set image_url."""
        if not get_promotion_by_id(promotion_id):
            return api_error(get_message('not_found', entity='Promotion'), 404)

        image = request.files.get('image')
        if not image or not image.filename:
            return api_error(get_message('no_files'), 400)

        try:
            upload = upload_many(get_image_storage(), [image], folder='promotions')[0]
        except ImageUploadError as e:
            current_app.logger.error(f'Promotion {promotion_id} banner upload: {e}')
            return api_error(get_message('upload_failed'), 502)

        try:
            update_promotion(promotion_id, {'image_url': upload['secure_url']})
            return api_success(data=_with_status(get_promotion_by_id(promotion_id), get_today()),
                               message=get_message('updated', entity='Promotion'))
        except Exception as e:
            current_app.logger.error(f'Error saving banner for promotion {promotion_id}: {e}',
                                     exc_info=True)
            return api_error(get_message('save_failed', entity='promotion'), 500)

    @bp.route('/promotions/<int:promotion_id>', methods=['DELETE'])
    @admin_required
    def delete_promotion_route(promotion_id):
        """
        Delete a promotion (requires confirm=true). Failure to remove the
        banner image is logged, not fatal.
        """
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        promotion = get_promotion_by_id(promotion_id)
        if not promotion:
            return api_error(get_message('not_found', entity='Promotion'), 404)

        try:
            delete_promotion(promotion_id)
        except Exception as e:
            current_app.logger.error(f'Error deleting promotion {promotion_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='promotion'), 500)

        banner = promotion.get('image_url') or ''
        storage = get_image_storage()
        prefix = storage.build_url('')
        if banner.startswith(prefix):
            try:
                storage.delete(banner[len(prefix):])
            except (ValueError, OSError) as e:
                current_app.logger.warning(f'Banner of promotion {promotion_id} not removed: {e}')

        return api_success(message=get_message('deleted', entity='Promotion'))
