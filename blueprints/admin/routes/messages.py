"""
Admin contact inbox routes.
"""

from flask import current_app, request

from models.message import (
    get_all_messages, get_message_by_id, mark_as_read, reply_to_message, toggle_star,
    archive_message, set_message_priority, delete_message, search_messages,
    count_messages_by_status
)
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.helpers import confirmation_given
from utils.messages import get_message


def register_routes(bp):
    """Register inbox routes on the admin blueprint."""

    @bp.route('/messages', methods=['GET'])
    @admin_required
    def list_messages():
        """
        List contact messages with inbox counters.

        Query params:
            search: Free text over name, email and subject
            status: unread, read, replied or archived
            priority: low, medium or high
        """
        try:
            messages = get_all_messages()
            filtered = search_messages(
                messages,
                search=request.args.get('search', '').strip(),
                status=request.args.get('status'),
                priority=request.args.get('priority')
            )
            return api_success(data=filtered, count=len(filtered),
                               counts=count_messages_by_status(messages))

        except Exception as e:
            current_app.logger.error(f'Error fetching messages: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='messages'), 500)

    @bp.route('/messages/<int:message_id>', methods=['GET'])
    @admin_required
    def open_message(message_id):
        """Get a message and mark it read (read_at is set only once)."""
        try:
            if not mark_as_read(message_id):
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(data=get_message_by_id(message_id))

        except Exception as e:
            current_app.logger.error(f'Error opening message {message_id}: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='message'), 500)

    @bp.route('/messages/<int:message_id>/read', methods=['POST'])
    @admin_required
    def mark_message_read(message_id):
        try:
            if not mark_as_read(message_id):
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(data=get_message_by_id(message_id))

        except Exception as e:
            current_app.logger.error(f'Error marking message {message_id} read: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='message'), 500)

    @bp.route('/messages/<int:message_id>/reply', methods=['POST'])
    @admin_required
    def reply_message(message_id):
        """Store a reply and mark the message replied. No email is sent."""
        data = request.get_json(silent=True) or {}

        try:
            if not reply_to_message(message_id, data.get('reply', '')):
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(data=get_message_by_id(message_id),
                               message=get_message('updated', entity='Message'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error replying to message {message_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='reply'), 500)

    @bp.route('/messages/<int:message_id>/star', methods=['POST'])
    @admin_required
    def star_message(message_id):
        try:
            starred = toggle_star(message_id)
            if starred is None:
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(data={'id': message_id, 'is_starred': starred})

        except Exception as e:
            current_app.logger.error(f'Error starring message {message_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='message'), 500)

    @bp.route('/messages/<int:message_id>/archive', methods=['POST'])
    @admin_required
    def archive_message_route(message_id):
        try:
            if not archive_message(message_id):
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(data=get_message_by_id(message_id),
                               message=get_message('updated', entity='Message'))

        except Exception as e:
            current_app.logger.error(f'Error archiving message {message_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='message'), 500)

    @bp.route('/messages/<int:message_id>/priority', methods=['POST'])
    @admin_required
    def message_priority(message_id):
        data = request.get_json(silent=True) or {}

        try:
            if not set_message_priority(message_id, data.get('priority')):
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(data=get_message_by_id(message_id))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error setting priority of message {message_id}: {e}',
                                     exc_info=True)
            return api_error(get_message('save_failed', entity='message'), 500)

    @bp.route('/messages/<int:message_id>', methods=['DELETE'])
    @admin_required
    def delete_message_route(message_id):
        """Delete a message (requires confirm=true)."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        try:
            if not delete_message(message_id):
                return api_error(get_message('not_found', entity='Message'), 404)
            return api_success(message=get_message('deleted', entity='Message'))

        except Exception as e:
            current_app.logger.error(f'Error deleting message {message_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='message'), 500)
