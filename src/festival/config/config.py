import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from the .env file
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Config:
    """
    App configuration loaded from environment variables.

    Required (one of):
      - MONGO_URI: full MongoDB connection string
      - MONGO_USERNAME, MONGO_PASSWORD, MONGO_CLUSTER: MongoDB Atlas credentials

    Optional:
      (defaults)
      - FLASK_HOST: host to run the Flask app on (default: 0.0.0.0)
      - FLASK_PORT: port to run the Flask app on (default: 3000)
      - FLASK_DEBUG: enable/disable debug mode (default: false)
      - LOG_LEVEL: logging level name (default: INFO)
      - MONGO_DB_NAME: database name (default: registrationDB)
      - MONGO_COLLECTION: collection holding registrations (default: users)
      - MONGO_TIMEOUT_MS: server selection timeout in ms (default: 5000)
      - CORS_ORIGINS: comma separated list of allowed origins (default: *)

      (payment screenshot uploads)
      - UPLOAD_FOLDER: directory for payment screenshots, relative to the project root (default: uploads)
      - MAX_UPLOAD_MB: maximum size of a payment screenshot in MB (default: 5)
      - REQUIRE_PAYMENT_SCREENSHOT: reject registrations without a screenshot (default: false)

    Copy .env.example -> .env and fill the required values.
    """
    # Flask
    FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", 3000)))
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'false').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # MongoDB
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_USERNAME = os.getenv('MONGO_USERNAME')
    MONGO_PASSWORD = os.getenv('MONGO_PASSWORD')
    MONGO_CLUSTER = os.getenv('MONGO_CLUSTER')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'registrationDB')
    MONGO_COLLECTION = os.getenv('MONGO_COLLECTION', 'users')
    MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', 5000))

    # CORS
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

    # Payment screenshot uploads
    UPLOAD_FOLDER = str((PROJECT_ROOT / os.getenv('UPLOAD_FOLDER', 'uploads')).resolve())
    MAX_UPLOAD_MB = float(os.getenv('MAX_UPLOAD_MB', 5))
    ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
    REQUIRE_PAYMENT_SCREENSHOT = os.getenv('REQUIRE_PAYMENT_SCREENSHOT', 'false').lower() == 'true'
    # Werkzeug rejects bodies above this before the route runs; leave room for the form fields.
    MAX_CONTENT_LENGTH = int((MAX_UPLOAD_MB + 1) * 1024 * 1024)

    @staticmethod
    def body_limit(max_upload_mb: float) -> int:
        """Request body cap in bytes for a given screenshot limit in MB."""
        return int((max_upload_mb + 1) * 1024 * 1024)

    @classmethod
    def mongo_uri(cls) -> str:
        """
        Build the MongoDB connection string.

        MONGO_URI wins when set, otherwise an Atlas SRV URI is assembled
        from MONGO_USERNAME, MONGO_PASSWORD and MONGO_CLUSTER.
        """
        if cls.MONGO_URI:
            return cls.MONGO_URI
        return (
            f"mongodb+srv://{cls.MONGO_USERNAME}:{cls.MONGO_PASSWORD}@{cls.MONGO_CLUSTER}"
            "/?retryWrites=true&w=majority"
        )

    @classmethod
    def validate_required(cls) -> None:
        """
        Validates that the MongoDB connection settings are present.

        Raises:
            RuntimeError: If neither MONGO_URI nor the full set of Atlas
            credentials is configured, listing the names of the missing variables.
        """
        if cls.MONGO_URI:
            return
        required_vars = [
            'MONGO_USERNAME',
            'MONGO_PASSWORD',
            'MONGO_CLUSTER',
        ]
        missing = [name for name in required_vars if not getattr(cls, name)]
        if missing:
            raise RuntimeError(
                f"Missing required config env vars: MONGO_URI or {', '.join(missing)}"
            )
