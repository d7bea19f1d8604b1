"""
Admin room management routes.
"""

from flask import current_app, request

from models.room import (
    get_all_rooms, get_room_by_id, get_room_types, create_room, update_room,
    delete_room, search_rooms
)
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.helpers import confirmation_given
from utils.image_storage import ImageUploadError, get_image_storage, upload_many
from utils.messages import get_message


def register_routes(bp):
    """Register room routes on the admin blueprint."""

    @bp.route('/rooms', methods=['GET'])
    @admin_required
    def list_rooms():
        """
        List rooms.

        Query params:
            search: Free text over name, type and description
            type: Exact room type
            availability: 'available' or 'unavailable'
        """
        try:
            rooms = search_rooms(
                get_all_rooms(),
                search=request.args.get('search', '').strip(),
                room_type=request.args.get('type'),
                availability=request.args.get('availability')
            )
            return api_success(data=rooms, count=len(rooms), room_types=get_room_types())

        except Exception as e:
            current_app.logger.error(f'Error fetching rooms: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='rooms'), 500)

    @bp.route('/rooms/<int:room_id>', methods=['GET'])
    @admin_required
    def get_room(room_id):
        """Get a single room."""
        room = get_room_by_id(room_id)
        if not room:
            return api_error(get_message('not_found', entity='Room'), 404)
        return api_success(data=room)

    @bp.route('/rooms', methods=['POST'])
    @admin_required
    def create_room_route():
        """
        Create a room.

        Request body:
            name, type (required), description, price, capacity, size,
            images, amenities, availability, status,
            features {bed_type, bathrooms, has_balcony, has_ocean_view, has_kitchen}
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            room_id = create_room(data)
            current_app.logger.info(f'Room {room_id} created')
            return api_success(data=get_room_by_id(room_id),
                               message=get_message('created', entity='Room'), status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error creating room: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='room'), 500)

    @bp.route('/rooms/<int:room_id>', methods=['PUT', 'PATCH'])
    @admin_required
    def update_room_route(room_id):
        """Update room fields (last write wins)."""
        if not get_room_by_id(room_id):
            return api_error(get_message('not_found', entity='Room'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            update_room(room_id, data)
            return api_success(data=get_room_by_id(room_id),
                               message=get_message('updated', entity='Room'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating room {room_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='room'), 500)

    @bp.route('/rooms/<int:room_id>/images', methods=['POST'])
    @admin_required
    def upload_room_images(room_id):
        """
        Upload images (multipart field 'images') and append their URLs to
        the room's image list.
        """
        room = get_room_by_id(room_id)
        if not room:
            return api_error(get_message('not_found', entity='Room'), 404)

        files = [f for f in request.files.getlist('images') if f and f.filename]
        if not files:
            return api_error(get_message('no_files'), 400)

        try:
            uploads = upload_many(get_image_storage(), files, folder='rooms',
                                  max_workers=current_app.config['IMAGE_UPLOAD_WORKERS'])
        except ImageUploadError as e:
            current_app.logger.error(f'Room {room_id} image upload: {e}')
            return api_error(get_message('upload_failed'), 502,
                             uploaded=[u['secure_url'] for u in e.uploaded], failures=e.failures)

        try:
            images = room['images'] + [u['secure_url'] for u in uploads]
            update_room(room_id, {'images': images})
            return api_success(data=get_room_by_id(room_id),
                               message=get_message('updated', entity='Room'))
        except Exception as e:
            current_app.logger.error(f'Error saving images for room {room_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='room'), 500)

    @bp.route('/rooms/<int:room_id>', methods=['DELETE'])
    @admin_required
    def delete_room_route(room_id):
        """Delete a room (requires confirm=true)."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        try:
            if not delete_room(room_id):
                return api_error(get_message('not_found', entity='Room'), 404)
            current_app.logger.info(f'Room {room_id} deleted')
            return api_success(message=get_message('deleted', entity='Room'))

        except Exception as e:
            current_app.logger.error(f'Error deleting room {room_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='room'), 500)
