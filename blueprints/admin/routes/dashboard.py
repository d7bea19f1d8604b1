"""
Admin dashboard routes.
"""

from flask import current_app

from models.booking import get_all_bookings, attach_details
from models.message import get_all_messages
from models.room import get_all_rooms
from models.user import get_all_users
from models.insights import get_dashboard_stats, get_recent_activity
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.messages import get_message


def register_routes(bp):
    """Register dashboard routes on the admin blueprint."""

    @bp.route('/')
    @bp.route('/dashboard')
    @admin_required
    def dashboard():
        """
        Dashboard totals and the recent activity feed.

        Returns:
            JSON with stats {total_rooms, total_bookings, total_users,
            total_revenue, occupancy_rate, average_stay} and recent_activity
        """
        try:
            rooms = get_all_rooms()
            bookings = attach_details(get_all_bookings())
            users = get_all_users()
            messages = get_all_messages()

            stats = get_dashboard_stats(rooms, bookings, users,
                                        current_app.config['OCCUPANCY_WINDOW_DAYS'])
            activity = get_recent_activity(bookings, users, messages)

            return api_success(data={'stats': stats, 'recent_activity': activity})

        except Exception as e:
            current_app.logger.error(f'Error building dashboard: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='dashboard'), 500)
