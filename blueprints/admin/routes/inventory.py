"""
Admin inventory routes: maintenance records and availability blocks.
"""

from flask import current_app, request

from models.inventory import (
    get_all_maintenance, get_maintenance_by_id, schedule_maintenance, update_maintenance,
    delete_maintenance, search_maintenance, get_all_blocks, create_block, delete_block,
    attach_room_names, get_inventory_stats
)
from models.room import get_all_rooms
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.helpers import confirmation_given
from utils.messages import get_message


def register_routes(bp):
    """Register inventory routes on the admin blueprint."""

    @bp.route('/inventory', methods=['GET'])
    @admin_required
    def inventory_overview():
        """Rooms with their status plus inventory counters."""
        try:
            rooms = get_all_rooms()
            records = get_all_maintenance()
            return api_success(data={
                'rooms': rooms,
                'stats': get_inventory_stats(rooms, records),
            })

        except Exception as e:
            current_app.logger.error(f'Error fetching inventory: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='inventory'), 500)

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    @bp.route('/inventory/maintenance', methods=['GET'])
    @admin_required
    def list_maintenance():
        """
        List maintenance records.

        Query params:
            search: Free text over title and room name
            status: scheduled, in-progress, completed or cancelled
            priority: low, medium, high or urgent
        """
        try:
            records = search_maintenance(
                attach_room_names(get_all_maintenance()),
                search=request.args.get('search', '').strip(),
                status=request.args.get('status'),
                priority=request.args.get('priority')
            )
            return api_success(data=records, count=len(records))

        except Exception as e:
            current_app.logger.error(f'Error fetching maintenance: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='maintenance records'), 500)

    @bp.route('/inventory/maintenance', methods=['POST'])
    @admin_required
    def create_maintenance():
        """
        Schedule maintenance. High/urgent priority puts the room in
        'maintenance' status.
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            record_id = schedule_maintenance(data)
            current_app.logger.info(f'Maintenance {record_id} scheduled for room {data.get("room_id")}')
            return api_success(data=get_maintenance_by_id(record_id),
                               message=get_message('created', entity='Maintenance'), status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error scheduling maintenance: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='maintenance'), 500)

    @bp.route('/inventory/maintenance/<int:record_id>', methods=['PUT', 'PATCH'])
    @admin_required
    def update_maintenance_route(record_id):
        """Update a maintenance record (status 'completed' stamps completed_date)."""
        if not get_maintenance_by_id(record_id):
            return api_error(get_message('not_found', entity='Maintenance record'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            update_maintenance(record_id, data)
            return api_success(data=get_maintenance_by_id(record_id),
                               message=get_message('updated', entity='Maintenance'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating maintenance {record_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='maintenance'), 500)

    @bp.route('/inventory/maintenance/<int:record_id>', methods=['DELETE'])
    @admin_required
    def delete_maintenance_route(record_id):
        """Delete a maintenance record (requires confirm=true)."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        try:
            if not delete_maintenance(record_id):
                return api_error(get_message('not_found', entity='Maintenance record'), 404)
            return api_success(message=get_message('deleted', entity='Maintenance'))

        except Exception as e:
            current_app.logger.error(f'Error deleting maintenance {record_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='maintenance'), 500)

    # -------------------------------------------------------------------------
    # Availability blocks
    # -------------------------------------------------------------------------

    @bp.route('/inventory/blocks', methods=['GET'])
    @admin_required
    def list_blocks():
        """List availability blocks, optionally for one room (room_id)."""
        try:
            blocks = attach_room_names(get_all_blocks())
            room_id = request.args.get('room_id', type=int)
            if room_id:
                blocks = [b for b in blocks if b['room_id'] == room_id]
            return api_success(data=blocks, count=len(blocks))

        except Exception as e:
            current_app.logger.error(f'Error fetching blocks: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='availability blocks'), 500)

    @bp.route('/inventory/blocks', methods=['POST'])
    @admin_required
    def create_block_route():
        """
        Block a room for a date range.

        Request body:
            room_id, start_date, end_date (required), reason, type
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            block_id = create_block(data)
            return api_success(data={'id': block_id},
                               message=get_message('created', entity='Availability block'),
                               status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error creating block: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='availability block'), 500)

    @bp.route('/inventory/blocks/<int:block_id>', methods=['DELETE'])
    @admin_required
    def delete_block_route(block_id):
        """Delete an availability block (requires confirm=true)."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        try:
            if not delete_block(block_id):
                return api_error(get_message('not_found', entity='Availability block'), 404)
            return api_success(message=get_message('deleted', entity='Availability block'))

        except Exception as e:
            current_app.logger.error(f'Error deleting block {block_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='availability block'), 500)
