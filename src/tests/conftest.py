import io
import os
import sys
from pathlib import Path
from unittest import mock

import mongomock
import pytest
from PIL import Image

# Ensure the repository 'src' directory is on sys.path so tests can import `festival`.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from festival import create_app
from festival.services import database


def make_image_bytes(fmt: str = "PNG", size=(8, 8), noise: bool = False) -> bytes:
    if noise:
        img = Image.frombytes("RGB", size, os.urandom(size[0] * size[1] * 3))
    else:
        img = Image.new("RGB", size, "red")
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def make_app(upload_dir):
    """Build apps backed by an in-memory mongomock server."""
    created = []

    def _make(**overrides):
        test_config = {
            "TESTING": True,
            "MONGO_URI": "mongodb://localhost:27017",
            "MONGO_DB_NAME": "registrationDB_test",
            "MONGO_COLLECTION": "users",
            "UPLOAD_FOLDER": str(upload_dir),
            "REQUIRE_PAYMENT_SCREENSHOT": False,
        }
        test_config.update(overrides)
        with mock.patch("festival.services.database.MongoClient", mongomock.MongoClient):
            app = create_app(test_config=test_config)
        created.append(app)
        return app

    yield _make

    for app in created:
        app.db.drop()
    database.close_mongoDB()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registration_form():
    return {
        "name": "Ana",
        "email": "a@x.com",
        "phone": "555",
        "age": "24",
        "gender": "female",
        "experience": "beginner",
        "participation": "both",
    }


@pytest.fixture
def png_bytes():
    return make_image_bytes("PNG")


def stored_files(upload_dir):
    return sorted(p.name for p in upload_dir.iterdir()) if upload_dir.exists() else []
