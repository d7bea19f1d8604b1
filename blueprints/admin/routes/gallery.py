"""
Admin room gallery routes.
"""

from flask import current_app, request

from models.gallery import (
    get_all_images, get_image_by_id, add_image, update_image, set_main_image,
    delete_image, search_images, IMAGE_TYPES
)
from models.room import get_room_by_id
from utils.api_response import api_success, api_error
from utils.decorators import admin_required
from utils.helpers import confirmation_given, parse_bool
from utils.image_storage import ImageUploadError, get_image_storage, upload_many
from utils.messages import get_message


def register_routes(bp):
    """Register gallery routes on the admin blueprint."""

    @bp.route('/gallery', methods=['GET'])
    @admin_required
    def list_gallery():
        """
        List gallery images.

        Query params:
            search: Free text over title, description and room name
            image_type: main, bedroom, bathroom, amenity or view
            room_id: Only images of this room
        """
        try:
            images = search_images(
                get_all_images(),
                search=request.args.get('search', '').strip(),
                image_type=request.args.get('image_type'),
                room_id=request.args.get('room_id', type=int)
            )
            return api_success(data=images, count=len(images), image_types=list(IMAGE_TYPES))

        except Exception as e:
            current_app.logger.error(f'Error fetching gallery: {e}', exc_info=True)
            return api_error(get_message('fetch_failed', entity='gallery'), 500)

    @bp.route('/gallery', methods=['POST'])
    @admin_required
    def upload_gallery_images():
        """
        Upload one or more images to a room's gallery.

        Form fields:
            room_id (required), images (files), title, description,
            image_type, is_main_image

        All files are uploaded concurrently. If any upload fails nothing is
        recorded and the response lists the files that did upload.
        """
        room_id = request.form.get('room_id', type=int)
        if not room_id or not get_room_by_id(room_id):
            return api_error(get_message('not_found', entity='Room'), 404)

        image_type = request.form.get('image_type', 'main')
        if image_type not in IMAGE_TYPES:
            return api_error(f'Invalid image type: {image_type}', 400)

        files = [f for f in request.files.getlist('images') if f and f.filename]
        if not files:
            return api_error(get_message('no_files'), 400)

        try:
            uploads = upload_many(get_image_storage(), files, folder='gallery',
                                  max_workers=current_app.config['IMAGE_UPLOAD_WORKERS'])
        except ImageUploadError as e:
            current_app.logger.error(f'Gallery upload for room {room_id}: {e}')
            return api_error(get_message('upload_failed'), 502,
                             uploaded=[u['secure_url'] for u in e.uploaded], failures=e.failures)

        try:
            title = request.form.get('title', '').strip() or None
            description = request.form.get('description', '').strip() or None
            is_main = parse_bool(request.form.get('is_main_image'))

            image_ids = []
            for index, upload in enumerate(uploads):
                image_ids.append(add_image(
                    room_id, upload['secure_url'], public_id=upload['public_id'],
                    title=title, description=description, image_type=image_type,
                    # Only the first file of a batch can become the main image
                    is_main_image=is_main and index == 0
                ))

            return api_success(data=[get_image_by_id(i) for i in image_ids],
                               message=get_message('created', entity='Images'), status=201)

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error saving gallery images: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='images'), 500)

    @bp.route('/gallery/<int:image_id>', methods=['PUT', 'PATCH'])
    @admin_required
    def update_gallery_image(image_id):
        """Edit image metadata: title, description, image_type, room_id, is_main_image."""
        if not get_image_by_id(image_id):
            return api_error(get_message('not_found', entity='Image'), 404)

        data = request.get_json(silent=True)
        if not data:
            return api_error(get_message('data_required'), 400)

        try:
            update_image(image_id, data)
            return api_success(data=get_image_by_id(image_id),
                               message=get_message('updated', entity='Image'))

        except ValueError as e:
            return api_error(str(e), 400)
        except Exception as e:
            current_app.logger.error(f'Error updating image {image_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='image'), 500)

    @bp.route('/gallery/<int:image_id>/main', methods=['POST'])
    @admin_required
    def set_gallery_main_image(image_id):
        """Make an image the main image of its room."""
        try:
            if not set_main_image(image_id):
                return api_error(get_message('not_found', entity='Image'), 404)
            return api_success(data=get_image_by_id(image_id),
                               message=get_message('updated', entity='Image'))

        except Exception as e:
            current_app.logger.error(f'Error setting main image {image_id}: {e}', exc_info=True)
            return api_error(get_message('save_failed', entity='image'), 500)

    @bp.route('/gallery/<int:image_id>', methods=['DELETE'])
    @admin_required
    def delete_gallery_image(image_id):
        """Delete an image record and its stored file (requires confirm=true)."""
        if not confirmation_given(request):
            return api_error(get_message('confirmation_required'), 409)

        image = get_image_by_id(image_id)
        if not image:
            return api_error(get_message('not_found', entity='Image'), 404)

        try:
            delete_image(image_id)
        except Exception as e:
            current_app.logger.error(f'Error deleting image {image_id}: {e}', exc_info=True)
            return api_error(get_message('delete_failed', entity='image'), 500)

        if image.get('public_id'):
            try:
                get_image_storage().delete(image['public_id'])
            except (ValueError, OSError) as e:
                current_app.logger.warning(f'Stored file for image {image_id} not removed: {e}')

        return api_success(message=get_message('deleted', entity='Image'))
