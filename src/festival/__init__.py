from flask import Flask
from flask_cors import CORS

from festival.config.config import Config
from festival.errors import register_error_handlers
from festival.services.database import init_mongoDB
from festival.routes import register_blueprints
from festival.utils.logging_utils import setup_logging

from typing import Any, Dict, Optional

def create_app(config_object: Optional[Any] = None, test_config: Optional[Dict[str, Any]] = None):
    """App factory: load config, connect to MongoDB, register blueprints.

    Raises StorageError when MongoDB is unreachable so the process never
    serves requests without a working store.
    """
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    if test_config:
        app.config.update(test_config)

    # keep the body cap in step with an overridden MAX_UPLOAD_MB
    if app.config.get("MAX_CONTENT_LENGTH") == Config.MAX_CONTENT_LENGTH and "MAX_CONTENT_LENGTH" not in (test_config or {}):
        app.config["MAX_CONTENT_LENGTH"] = Config.body_limit(app.config["MAX_UPLOAD_MB"])

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # fail fast if the Mongo connection settings are missing
    if not app.config.get("MONGO_URI"):
        Config.validate_required()
    mongo_uri = app.config.get("MONGO_URI") or Config.mongo_uri()

    CORS(app, origins=app.config.get("CORS_ORIGINS", "*"))

    app.db = init_mongoDB(
        mongo_uri,
        app.config["MONGO_DB_NAME"],
        app.config["MONGO_COLLECTION"],
        app.config.get("MONGO_TIMEOUT_MS", 5000),
    )
    register_error_handlers(app)
    register_blueprints(app)
    return app
