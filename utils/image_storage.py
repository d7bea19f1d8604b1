"""
Image upload storage.

Two backends share one interface:
    - LocalImageStorage: writes into UPLOAD_FOLDER, served from /uploads/<filename>
    - CloudinaryImageStorage: unsigned multipart upload to the Cloudinary REST API

Multi-file uploads run concurrently on a thread pool and are all awaited.
If any upload fails, ImageUploadError is raised carrying the uploads that
did succeed; those are not rolled back.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List

import requests
from flask import current_app

from utils.helpers import allowed_file, get_file_extension, sanitize_filename


logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = 'https://api.cloudinary.com/v1_1/{cloud_name}/image/upload'


class ImageUploadError(Exception):
    """One or more uploads failed."""

    def __init__(self, message: str, uploaded: List[Dict[str, Any]] = None,
                 failures: List[str] = None):
        super().__init__(message)
        self.uploaded = uploaded or []
        self.failures = failures or []


class LocalImageStorage:
    """Stores images on disk under the upload folder."""

    def __init__(self, upload_folder: str, allowed_extensions, url_prefix: str = '/uploads'):
        self.upload_folder = upload_folder
        self.allowed_extensions = allowed_extensions
        self.url_prefix = url_prefix.rstrip('/')

    def upload(self, file_storage, folder: str = 'anand-hotels') -> Dict[str, Any]:
        """
        Save an uploaded file.

        Args:
            file_storage: werkzeug FileStorage
            folder: Sub-folder inside the upload folder

        Returns:
            dict with secure_url, public_id, format, width, height
        """
        if not allowed_file(file_storage.filename, self.allowed_extensions):
            raise ValueError(f'File type not allowed: {file_storage.filename}')

        filename = sanitize_filename(file_storage.filename)
        target_dir = os.path.join(self.upload_folder, folder)
        os.makedirs(target_dir, exist_ok=True)
        file_storage.save(os.path.join(target_dir, filename))

        public_id = f'{folder}/{filename}'
        return {
            'secure_url': self.build_url(public_id),
            'public_id': public_id,
            'format': get_file_extension(filename),
            'width': None,
            'height': None,
        }

    def delete(self, public_id: str) -> bool:
        path = os.path.join(self.upload_folder, public_id)
        if not os.path.abspath(path).startswith(os.path.abspath(self.upload_folder)):
            raise ValueError(f'Invalid image id: {public_id}')
        if os.path.exists(path):
            os.remove(path)
            return True
        return False

    def build_url(self, public_id: str) -> str:
        return f'{self.url_prefix}/{public_id}'


class CloudinaryImageStorage:
    """Uploads images to Cloudinary with an unsigned upload preset."""

    def __init__(self, cloud_name: str, upload_preset: str, timeout: int = 30,
                 allowed_extensions=None):
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.timeout = timeout
        self.allowed_extensions = allowed_extensions

    def upload(self, file_storage, folder: str = 'anand-hotels') -> Dict[str, Any]:
        """
        Post the file to Cloudinary.

        Returns:
            dict with secure_url, public_id, format, width, height

        Raises:
            ValueError: For disallowed file types
            requests.RequestException: On network or HTTP errors
        """
        if self.allowed_extensions and not allowed_file(file_storage.filename, self.allowed_extensions):
            raise ValueError(f'File type not allowed: {file_storage.filename}')

        response = requests.post(
            CLOUDINARY_UPLOAD_URL.format(cloud_name=self.cloud_name),
            data={'upload_preset': self.upload_preset, 'folder': folder},
            files={'file': (file_storage.filename, file_storage.stream,
                            file_storage.mimetype or 'application/octet-stream')},
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()

        return {
            'secure_url': payload['secure_url'],
            'public_id': payload['public_id'],
            'format': payload.get('format'),
            'width': payload.get('width'),
            'height': payload.get('height'),
        }

    def delete(self, public_id: str) -> bool:
        # Unsigned presets cannot destroy assets; deletion needs the signed admin API
        logger.warning(f'Cloudinary image {public_id} left in place (unsigned uploads cannot delete)')
        return False

    def build_url(self, public_id: str, transformations: str = '') -> str:
        prefix = f'{transformations}/' if transformations else ''
        return f'https://res.cloudinary.com/{self.cloud_name}/image/upload/{prefix}{public_id}'


def get_image_storage():
    """Storage backend selected by IMAGE_STORAGE."""
    config = current_app.config
    if config.get('IMAGE_STORAGE') == 'cloudinary':
        return CloudinaryImageStorage(
            cloud_name=config['CLOUDINARY_CLOUD_NAME'],
            upload_preset=config['CLOUDINARY_UPLOAD_PRESET'],
            timeout=config.get('IMAGE_UPLOAD_TIMEOUT', 30),
            allowed_extensions=config.get('ALLOWED_IMAGE_EXTENSIONS'),
        )
    return LocalImageStorage(
        upload_folder=config['UPLOAD_FOLDER'],
        allowed_extensions=config.get('ALLOWED_IMAGE_EXTENSIONS'),
    )


def upload_many(storage, files, folder: str = 'anand-hotels',
                max_workers: int = 4) -> List[Dict[str, Any]]:
    """
    Upload several files concurrently and wait for all of them.

    Args:
        storage: Backend from get_image_storage()
        files: werkzeug FileStorage objects
        folder: Target folder
        max_workers: Thread pool size

    Returns:
        Upload results, in input order

    Raises:
        ImageUploadError: If any upload failed (carries the successful ones)
    """
    files = list(files)
    if not files:
        return []

    uploaded = []
    failures = []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(files)))) as executor:
        futures = [executor.submit(storage.upload, f, folder) for f in files]
        for file_storage, future in zip(files, futures):
            try:
                uploaded.append(future.result())
            except (ValueError, OSError, requests.RequestException) as e:
                logger.error(f'Upload failed for {file_storage.filename}: {e}')
                failures.append(file_storage.filename)

    if failures:
        raise ImageUploadError(f'{len(failures)} of {len(files)} uploads failed',
                               uploaded=uploaded, failures=failures)
    return uploaded
