import logging

from flask import Flask, jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Base error for the registration API, rendered as ``{"message": ...}``."""

    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(RegistrationError):
    """A required field is missing, empty or malformed."""


class DuplicateError(RegistrationError):
    """The email already has a registration."""


class MissingAttachmentError(RegistrationError):
    """A payment screenshot is required but none was uploaded."""


class UploadError(RegistrationError):
    """The uploaded file is too large or is not an image."""


class NotFoundError(RegistrationError):
    status_code = 404


class StorageError(RegistrationError):
    """The database is unavailable or a query failed."""

    status_code = 500


def register_error_handlers(app: Flask) -> None:
    """Convert every error raised while handling a request into a JSON payload."""

    @app.errorhandler(RegistrationError)
    def handle_registration_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(PyMongoError)
    def handle_database_error(error):
        logger.error(f"❌ Database error: {error}")
        return jsonify({"message": "Database error"}), 500

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        limit = app.config.get("MAX_UPLOAD_MB")
        return jsonify({"message": f"Payment screenshot must be smaller than {limit:g} MB"}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        logger.exception(f"Unhandled exception: {error}")
        return jsonify({"message": "Internal server error"}), 500
