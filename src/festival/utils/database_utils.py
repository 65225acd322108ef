from typing import Any, Dict, Union

from bson import ObjectId
from bson.errors import InvalidId


def is_valid_object_id(value: Any) -> bool:
    """Check if a value can be used as a MongoDB ObjectId."""
    return isinstance(value, ObjectId) or (isinstance(value, str) and ObjectId.is_valid(value))


def str_to_object_id(value: Union[ObjectId, str]) -> ObjectId:
    """
    Convert a string to an ObjectId.

    Args:
        value (str | ObjectId): 24 character hex string or ObjectId.

    Returns:
        ObjectId: the parsed identifier.

    Raises:
        InvalidId: If the value is not a valid ObjectId.
    """
    if isinstance(value, ObjectId):
        return value
    if not is_valid_object_id(value):
        raise InvalidId(f"'{value}' is not a valid ObjectId")
    return ObjectId(value)


def object_id_to_str(value: Union[ObjectId, str, None]) -> Union[str, None]:
    """Convert ObjectId to string."""
    if isinstance(value, ObjectId):
        return str(value)
    return value


def without_empty(document: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None so optional fields are absent from the stored document."""
    return {key: value for key, value in document.items() if value is not None}
