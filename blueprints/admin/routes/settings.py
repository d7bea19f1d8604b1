"""
Admin settings routes: hotel settings, notifications, admin profile and password.
"""

from flask import current_app, request
from flask_login import current_user

from models.settings import (
    get_hotel_settings, update_hotel_settings,
    get_notification_settings, update_notification_settings
)
from models.user import get_user_by_id, update_user, update_password, check_password, public_profile
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.messages import get_message
from utils.validators import validate_password


def register_routes(bp):
    """Register settings routes on the admin blueprint."""

    @bp.route('/settings', methods=['GET'])
    @admin_required
    def get_settings():
        """Hotel settings, notification settings and the admin's profile."""
        try:
            return api_success(data={
                'hotel': get_hotel_settings(),
                'notifications': get_notification_settings(),
                'profile': public_profile(get_user_by_id(current_user.id)),
            })

        except Exception as e:
            current_app.logger.error(f'Error fetching settings: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='settings'), 500)

    @bp.route('/settings/hotel', methods=['PUT'])
    @admin_required
    def save_hotel_settings():
        """Save hotel settings (tax rate and service fee are stored, never applied)."""
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            return api_success(data=update_hotel_settings(data),
                               message=get_message('updated', entity='Hotel settings'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error saving hotel settings: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='settings'), 500)

    @bp.route('/settings/notifications', methods=['PUT'])
    @admin_required
    def save_notification_settings():
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            return api_success(data=update_notification_settings(data),
                               message=get_message('updated', entity='Notification settings'))

        except Exception as e:
            current_app.logger.error(f'Error saving notification settings: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='settings'), 500)

    @bp.route('/settings/profile', methods=['PUT'])
    @admin_required
    def save_admin_profile():
        """Update the signed-in admin's display name, phone and photo URL."""
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            values = {k: data[k] for k in ('display_name', 'phone', 'photo_url') if k in data}
            update_user(current_user.id, **values)
            return api_success(data=public_profile(get_user_by_id(current_user.id)),
                               message=get_message('profile_updated'))

        except Exception as e:
            current_app.logger.error(f'Error saving admin profile: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='profile'), 500)

    @bp.route('/settings/password', methods=['POST'])
    @admin_required
    def change_admin_password():
        """
        Change the admin's password.

        Request body:
            current_password, new_password, confirm_password
        """
        data = request.get_json(silent=True) or {}

        user = get_user_by_id(current_user.id)
        if not check_password(user, data.get('current_password') or ''):
            return api_error(get_message('current_password_wrong'), 400)

        is_valid, error = validate_password(data.get('new_password'))
        if not is_valid:
            return api_error(error, 400)
        if data.get('new_password') != data.get('confirm_password'):
            return api_error(get_message('password_mismatch'), 400)

        try:
            update_password(current_user.id, data['new_password'])
            current_app.logger.info(f'Admin {current_user.email} changed password')
            return api_success(message=get_message('password_updated'))

        except Exception as e:
            current_app.logger.error(f'Error changing admin password: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='password'), 500)
