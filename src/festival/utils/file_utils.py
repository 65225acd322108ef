import logging
import os
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from festival.errors import UploadError
from festival.utils.image_utils import file_extension, is_allowed_image

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    filename: str
    path: str


def build_upload_filename(phone: str, original_name: Optional[str]) -> str:
    """
    Build a collision free filename for a payment screenshot.

    Format: ``<epoch millis>_<phone>_<random hex>_<original name>``, every
    part passed through ``secure_filename``.

    Args:
        phone (str): Registrant phone number.
        original_name (str): Filename sent by the client.

    Returns:
        str: the generated filename.
    """
    safe_phone = secure_filename(phone or "") or "nophone"
    safe_name = secure_filename(original_name or "")
    if not safe_name or safe_name.startswith("."):
        safe_name = f"screenshot.{file_extension(original_name) or 'img'}"
    return f"{int(time.time() * 1000)}_{safe_phone}_{uuid.uuid4().hex[:8]}_{safe_name}"


def read_upload(file: FileStorage, max_bytes: int) -> bytes:
    """
    Read an uploaded file into memory, enforcing the size limit.

    Raises:
        UploadError: If the file is larger than ``max_bytes``.
    """
    data = file.stream.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadError(f"Payment screenshot must be smaller than {max_bytes / (1024 * 1024):g} MB")
    return data


def remove_upload(path: Union[str, Path, None]) -> bool:
    """
    Delete a stored upload. A missing file is not an error.

    Returns:
        bool: True if a file was removed.
    """
    if not path:
        return False
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning(f"Upload already gone: {path}")
        return False
    logger.info(f"🗑️ Removed upload {path}")
    return True


@contextmanager
def stored_upload(
    file: Optional[FileStorage],
    upload_folder: Union[str, Path],
    phone: str,
    max_bytes: int,
    allowed_extensions: Iterable[str],
) -> Iterator[Optional[StoredFile]]:
    """
    Validate and write a payment screenshot for the duration of a registration.

    Yields the stored file (or None when nothing was uploaded). If the body of
    the ``with`` block raises, the file is deleted before the error propagates.

    Raises:
        UploadError: If the file is too large or is not an allowed image.
    """
    if file is None or not file.filename:
        yield None
        return

    data = read_upload(file, max_bytes)
    if not is_allowed_image(data, file.filename, allowed_extensions):
        allowed = ", ".join(sorted(allowed_extensions))
        raise UploadError(f"Payment screenshot must be an image ({allowed})")

    folder = Path(upload_folder)
    folder.mkdir(parents=True, exist_ok=True)
    filename = build_upload_filename(phone, file.filename)
    path = folder / filename
    path.write_bytes(data)
    logger.info(f"📎 Stored payment screenshot {filename}")

    try:
        yield StoredFile(filename=filename, path=str(path))
    except BaseException:
        remove_upload(path)
        raise
