"""
Contact form submissions.
"""

from flask import current_app, request

from models.message import create_message, get_message_by_id
from utils.api_response import api_success, api_error
from utils.messages import get_message


def register_routes(bp):
    """Register the contact route on the public blueprint."""

    @bp.route('/contact', methods=['POST'])
    def contact():
        """
        Store a contact message as unread with medium priority.

        Accepts JSON or form data with name, email, message (required),
        subject and phone.
        """
        data = request.get_json(silent=True) or request.form.to_dict()
        if not data:
            return api_error(get_message('data_required'), 400)

        for field in ('name', 'email', 'message'):
            if not (data.get(field) or '').strip():
                return api_error(f'Missing required field: {field}', 400)

        try:
            message_id = create_message(
                name=data['name'].strip(),
                email=data['email'].strip(),
                message=data['message'].strip(),
                subject=(data.get('subject') or '').strip() or None,
                phone=(data.get('phone') or '').strip() or None
            )
            current_app.logger.info(f'Contact message {message_id} received')
            return api_success(data=get_message_by_id(message_id),
                               message=get_message('message_sent'), status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error saving contact message: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='message'), 500)
