# Upload handling
from .file_utils import (
    build_upload_filename,
    read_upload,
    remove_upload,
    stored_upload,
    StoredFile,
)

# Image checks
from .image_utils import detect_image_format, is_allowed_image

# Database utilities
from .database_utils import is_valid_object_id, object_id_to_str, str_to_object_id

__all__ = [
    # Uploads
    "build_upload_filename",
    "read_upload",
    "remove_upload",
    "stored_upload",
    "StoredFile",
    # Images
    "detect_image_format",
    "is_allowed_image",
    # Database
    "is_valid_object_id",
    "object_id_to_str",
    "str_to_object_id",
]
