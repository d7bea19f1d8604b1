"""
Admin analytics routes: aggregated report and export.
"""

import json

from flask import current_app, request, Response

from models.booking import get_all_bookings
from models.room import get_all_rooms
from models.user import get_all_users
from models.insights import TIME_RANGES, build_analytics_report, export_report_to_excel
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_now
from utils.decorators import admin_required
from utils.messages import get_message


EXCEL_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _build_report(time_range):
    return build_analytics_report(
        get_all_bookings(), get_all_users(), get_all_rooms(),
        time_range, get_now().replace(tzinfo=None)
    )


def register_routes(bp):
    """Register analytics routes on the admin blueprint."""

    @bp.route('/analytics', methods=['GET'])
    @admin_required
    def analytics():
        """
        Analytics report for a time range.

        Query params:
            range: 1month, 3months, 6months or 1year (default from config)
        """
        time_range = request.args.get('range', current_app.config['ANALYTICS_DEFAULT_RANGE'])
        if time_range not in TIME_RANGES:
            return api_error(get_message('invalid_time_range'), 400)

        try:
            return api_success(data=_build_report(time_range))

        except Exception as e:
            current_app.logger.error(f'Error building analytics: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='analytics'), 500)

    @bp.route('/analytics/export', methods=['GET'])
    @admin_required
    def export_analytics():
        """
        Download the analytics report.

        Query params:
            range: Time range (see /analytics)
            format: 'json' (default) or 'xlsx'
        """
        time_range = request.args.get('range', current_app.config['ANALYTICS_DEFAULT_RANGE'])
        if time_range not in TIME_RANGES:
            return api_error(get_message('invalid_time_range'), 400)

        export_format = request.args.get('format', 'json').lower()

        try:
            report = _build_report(time_range)
            stamp = report['generated_at'][:10]

            if export_format == 'xlsx':
                content = export_report_to_excel(report, current_app.config['APP_NAME'])
                return Response(content, mimetype=EXCEL_MIMETYPE, headers={
                    'Content-Disposition': f'attachment; filename=analytics-report-{stamp}.xlsx'
                })

            return Response(json.dumps(report, indent=2), mimetype='application/json', headers={
                'Content-Disposition': f'attachment; filename=analytics-report-{stamp}.json'
            })

        except Exception as e:
            current_app.logger.error(f'Error exporting analytics: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='analytics report'), 500)
