"""
Module Name: upload_storage.py
Description:
    Stores uploaded audio files on local disk under the configured upload
    folder and maps them to the public URL the templates play from.

Location:
    /services/upload_storage.py

"""

import os
import uuid
from typing import Iterable, Optional, Tuple

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from utils.logger import get_module_logger


_LOGGER = get_module_logger("Service.UploadStorage")

DEFAULT_AUDIO_EXTENSIONS = {'mp3', 'wav', 'ogg', 'm4a', 'aac', 'flac'}


class UploadStorage:
    """
    Saves audio uploads with unique, sanitized filenames.

    Features:
    - Extension allow-list
    - Collision-free names (uuid prefix)
    - Removal by public URL
    """

    def __init__(self, folder: str, url_prefix: str = '/static/uploads',
                 allowed_extensions: Optional[Iterable[str]] = None, *, logger=None):
        self.folder = folder
        self.url_prefix = url_prefix.rstrip('/')
        self.allowed_extensions = {ext.lower() for ext in (allowed_extensions or DEFAULT_AUDIO_EXTENSIONS)}
        self.logger = logger or _LOGGER

    def ensure_folder(self):
        os.makedirs(self.folder, exist_ok=True)

    def is_allowed(self, filename: Optional[str]) -> bool:
        if not filename or '.' not in filename:
            return False
        return filename.rsplit('.', 1)[1].lower() in self.allowed_extensions

    def save(self, upload: FileStorage) -> Tuple[bool, str]:
        """
        Persist an uploaded file.

        Returns:
            Tuple of (success: bool, public URL or error message: str)
        """
        if upload is None or not upload.filename:
            return False, "Please choose an audio file to upload"
        if not self.is_allowed(upload.filename):
            allowed = ', '.join(sorted(self.allowed_extensions))
            return False, f"Unsupported file type. Allowed: {allowed}"

        safe_name = secure_filename(upload.filename) or 'sound'
        stored_name = f"{uuid.uuid4().hex}_{safe_name}"
        self.ensure_folder()

        try:
            upload.save(os.path.join(self.folder, stored_name))
        except OSError as e:
            self.logger.error(f"Failed to store upload {safe_name}: {e}")
            return False, "Could not store the uploaded file"

        self.logger.info(f"Stored upload: {stored_name}")
        return True, f"{self.url_prefix}/{stored_name}"

    def path_for_url(self, file_url: Optional[str]) -> Optional[str]:
        """Local path for a URL this storage produced; None for anything else."""
        if not file_url or not file_url.startswith(self.url_prefix + '/'):
            return None
        name = os.path.basename(file_url[len(self.url_prefix) + 1:])
        if not name:
            return None
        return os.path.join(self.folder, name)

    def remove(self, file_url: Optional[str]) -> bool:
        path = self.path_for_url(file_url)
        if path is None or not os.path.exists(path):
            return False
        try:
            os.remove(path)
            self.logger.info(f"Removed upload: {os.path.basename(path)}")
            return True
        except OSError as e:
            self.logger.warning(f"Failed to remove upload {path}: {e}")
            return False
