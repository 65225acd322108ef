import io
from unittest import mock

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from conftest import stored_files


def _register(client, **overrides):
    form = {
        "name": "Ana",
        "email": "a@x.com",
        "phone": "555",
        "age": "24",
        "gender": "female",
        "experience": "beginner",
        "participation": "both",
    }
    form.update(overrides)
    resp = client.post("/register", data=form, content_type="multipart/form-data")
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["id"]


def test_list_users_returns_full_documents(client):
    _register(client)
    _register(client, name="Bo", email="b@x.com", gender="male", experience="advanced", participation="workshop")

    users = client.get("/users").get_json()
    assert [u["email"] for u in users] == ["a@x.com", "b@x.com"]
    first = users[0]
    assert set(first) == {
        "_id", "name", "email", "phone", "age", "gender",
        "experience", "participation", "registeredAt",
    }
    assert "paymentScreenshot" not in first


def test_stats_are_consistent_with_list(client):
    _register(client, email="1@x.com", gender="male", participation="competition")
    _register(client, email="2@x.com", gender="female", participation="workshop", experience="expert")
    _register(client, email="3@x.com", gender="female", participation="both")
    _register(client, email="4@x.com", gender="other", participation="both")

    stats = client.get("/stats").get_json()
    users = client.get("/users").get_json()
    both = sum(1 for u in users if u["participation"] == "both")

    assert stats["total"] == len(users) == 4
    assert stats["male"] == 1
    assert stats["female"] == 2
    assert stats["male"] + stats["female"] <= stats["total"]
    assert stats["beginners"] == 3
    assert stats["competition"] == 3
    assert stats["workshop"] == 3
    assert stats["competition"] + stats["workshop"] - both == len(users)


def test_empty_stats(client):
    assert client.get("/stats").get_json() == {
        "total": 0, "male": 0, "female": 0, "beginners": 0, "competition": 0, "workshop": 0,
    }


def test_delete_user_and_screenshot(client, png_bytes, upload_dir):
    form = {
        "name": "Ana", "email": "a@x.com", "phone": "555", "age": "24",
        "gender": "female", "experience": "beginner", "participation": "both",
        "paymentScreenshot": (io.BytesIO(png_bytes), "proof.png"),
    }
    user_id = client.post("/register", data=form, content_type="multipart/form-data").get_json()["id"]
    other_id = _register(client, email="b@x.com")
    assert len(stored_files(upload_dir)) == 1

    resp = client.delete(f"/users/{user_id}")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "User deleted successfully"}

    ids = [u["_id"] for u in client.get("/users").get_json()]
    assert ids == [other_id]
    assert stored_files(upload_dir) == []


def test_delete_when_screenshot_already_gone(client, png_bytes, upload_dir):
    form = {
        "name": "Ana", "email": "a@x.com", "phone": "555", "age": "24",
        "gender": "female", "experience": "beginner", "participation": "both",
        "paymentScreenshot": (io.BytesIO(png_bytes), "proof.png"),
    }
    user_id = client.post("/register", data=form, content_type="multipart/form-data").get_json()["id"]
    for path in upload_dir.iterdir():
        path.unlink()

    assert client.delete(f"/users/{user_id}").status_code == 200
    assert client.get("/users").get_json() == []


def test_delete_malformed_id(client):
    _register(client)

    resp = client.delete("/users/not-an-id")
    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Invalid registration id"}
    assert len(client.get("/users").get_json()) == 1


def test_delete_unknown_id_succeeds(client):
    _register(client)

    resp = client.delete(f"/users/{ObjectId()}")
    assert resp.status_code == 200
    assert len(client.get("/users").get_json()) == 1


def test_storage_errors_become_500(app):
    client = app.test_client()
    with mock.patch.object(app.db, "find", side_effect=ServerSelectionTimeoutError("down")):
        resp = client.get("/users")
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Database error"}

    with mock.patch.object(app.db, "count_documents", side_effect=ServerSelectionTimeoutError("down")):
        resp = client.get("/stats")
    assert resp.status_code == 500


def test_listed_timestamps_keep_utc_offset(client):
    _register(client)
    registered_at = client.get("/users").get_json()[0]["registeredAt"]
    assert registered_at.endswith("+00:00")
