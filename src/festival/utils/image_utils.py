from io import BytesIO
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

# PIL format name -> extensions accepted for it
IMAGE_FORMATS = {
    "PNG": {"png"},
    "JPEG": {"jpg", "jpeg"},
    "GIF": {"gif"},
    "WEBP": {"webp"},
}


def file_extension(filename: Optional[str]) -> str:
    """Lower-case extension of a filename without the dot, or '' if there is none."""
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def detect_image_format(image_bytes: bytes) -> Optional[str]:
    """
    Decode image bytes with PIL and return the detected format.

    Args:
        image_bytes (bytes): Raw file content.

    Returns:
        str | None: PIL format name (e.g. "PNG"), or None if the bytes are not an image.
    """
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            img.verify()
            return img.format
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return None


def is_allowed_image(image_bytes: bytes, filename: Optional[str], allowed_extensions: Iterable[str]) -> bool:
    """
    Check that an upload is a real image of an allowed type.

    Both the filename extension and the decoded content must agree, so a
    renamed text file or an image with a disallowed extension is rejected.
    """
    allowed = {ext.lower() for ext in allowed_extensions}
    ext = file_extension(filename)
    if ext not in allowed:
        return False
    fmt = detect_image_format(image_bytes)
    if fmt is None:
        return False
    return ext in IMAGE_FORMATS.get(fmt, set())
