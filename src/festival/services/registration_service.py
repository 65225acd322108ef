import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional

from bson.errors import InvalidId
from flask import current_app
from pymongo.errors import DuplicateKeyError
from werkzeug.datastructures import FileStorage

from festival.errors import DuplicateError, MissingAttachmentError, NotFoundError, ValidationError
from festival.models.registration import REQUIRED_FIELDS, Registration, RegistrationStats
from festival.services.database import get_collection
from festival.utils.database_utils import str_to_object_id
from festival.utils.file_utils import remove_upload, stored_upload

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

DUPLICATE_MESSAGE = "User already registered with this email"

# BSON stores integers as signed 64-bit
MIN_AGE_VALUE = -2 ** 63
MAX_AGE_VALUE = 2 ** 63 - 1


def parse_age(value: Any) -> int:
    """
    Parse the submitted age the way a form would: the leading integer wins
    ("24" -> 24, "24 years" -> 24, "24.9" -> 24).

    Raises:
        ValidationError: If the value does not start with an integer, is not
        finite, or does not fit in a 64-bit integer.
    """
    if isinstance(value, bool):
        raise ValidationError("Age must be a number")
    if isinstance(value, int):
        age = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Age must be a number")
        age = int(value)
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            raise ValidationError("Age must be a number")
        age = int(match.group(1))

    if not MIN_AGE_VALUE <= age <= MAX_AGE_VALUE:
        raise ValidationError("Age must be a number")
    return age


def validate_registration(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check the required registration fields and normalise them.

    Args:
        data (Mapping): Submitted form or JSON fields.

    Returns:
        dict: Stripped field values with ``age`` parsed to int.

    Raises:
        ValidationError: If a required field is missing or empty.
    """
    cleaned = {}
    for name in REQUIRED_FIELDS:
        value = data.get(name)
        if value is None or str(value).strip() == "":
            raise ValidationError("All fields are required")
        cleaned[name] = value if name == "age" else str(value).strip()

    cleaned["age"] = parse_age(cleaned["age"])
    return cleaned


def register_participant(data: Mapping[str, Any], screenshot: Optional[FileStorage] = None) -> Registration:
    """
    Validate and store a festival registration.

    The payment screenshot (if any) is written before the duplicate check
    and removed again if anything after that fails.

    Args:
        data (Mapping): Submitted fields.
        screenshot (FileStorage): Optional payment proof image.

    Returns:
        Registration: the stored record with its id.
    """
    fields = validate_registration(data)

    has_file = screenshot is not None and bool(screenshot.filename)
    if current_app.config.get("REQUIRE_PAYMENT_SCREENSHOT") and not has_file:
        raise MissingAttachmentError("Payment screenshot is required")

    collection = get_collection()
    max_bytes = int(current_app.config["MAX_UPLOAD_MB"] * 1024 * 1024)

    with stored_upload(
        screenshot,
        current_app.config["UPLOAD_FOLDER"],
        fields["phone"],
        max_bytes,
        current_app.config["ALLOWED_IMAGE_EXTENSIONS"],
    ) as upload:
        if collection.find_one({"email": fields["email"]}):
            logger.info(f"Duplicate registration rejected for {fields['email']}")
            raise DuplicateError(DUPLICATE_MESSAGE)

        registration = Registration(
            **fields,
            payment_screenshot=upload.filename if upload else None,
            payment_screenshot_path=upload.path if upload else None,
        )
        try:
            result = collection.insert_one(registration.to_document())
        except DuplicateKeyError as exc:
            # lost the race against a concurrent submission with the same email
            raise DuplicateError(DUPLICATE_MESSAGE) from exc

    registration.id = str(result.inserted_id)
    logger.info(f"✅ Registered {registration.email} ({registration.id})")
    return registration


def list_registrations() -> List[Registration]:
    """Return every registration in natural storage order."""
    return [Registration.from_document(doc) for doc in get_collection().find()]


def compute_statistics() -> RegistrationStats:
    """
    Count registrations overall and per gender, experience and participation.

    Each count is an independent query; "both" counts towards competition
    and workshop.
    """
    collection = get_collection()
    return RegistrationStats(
        total=collection.count_documents({}),
        male=collection.count_documents({"gender": "male"}),
        female=collection.count_documents({"gender": "female"}),
        beginners=collection.count_documents({"experience": "beginner"}),
        competition=collection.count_documents({"participation": {"$in": ["competition", "both"]}}),
        workshop=collection.count_documents({"participation": {"$in": ["workshop", "both"]}}),
    )


def delete_registration(registration_id: str) -> bool:
    """
    Delete a registration and its payment screenshot.

    Deleting an id that does not exist is not an error.

    Args:
        registration_id (str): 24 character hex ObjectId.

    Returns:
        bool: True if a record was deleted.

    Raises:
        NotFoundError: If the id is not a valid ObjectId.
    """
    try:
        object_id = str_to_object_id(registration_id)
    except InvalidId as exc:
        raise NotFoundError("Invalid registration id") from exc

    collection = get_collection()
    doc = collection.find_one({"_id": object_id})
    if doc and doc.get("paymentScreenshotPath"):
        remove_upload(doc["paymentScreenshotPath"])

    result = collection.delete_one({"_id": object_id})
    if result.deleted_count:
        logger.info(f"🗑️ Deleted registration {registration_id}")
    return bool(result.deleted_count)
