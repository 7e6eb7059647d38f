"""
Application assembly: health check, error mapping, configuration guards and
identifier helpers.
"""

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.services.token_service import build_token_service
from app.utils.object_id import is_valid_object_id, new_object_id, normalize_object_id


def test_health(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_validation_errors_are_bad_requests(client: TestClient):
    response = client.post("/contacts", json={"name": "Jane"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid request"
    fields = {tuple(err["loc"])[-1] for err in body["errors"]}
    assert {"email", "message"} <= fields


def test_missing_signing_secret_is_fatal(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", None)
    with pytest.raises(ValueError, match="JWT_SECRET"):
        build_token_service()


def test_token_service_follows_settings():
    service = build_token_service()
    assert service.max_age_seconds == settings.auth_token_max_age == 604800


def test_new_object_ids_are_unique_and_well_formed():
    ids = {new_object_id() for _ in range(200)}

    assert len(ids) == 200
    assert all(is_valid_object_id(i) for i in ids)
    assert all(i == i.lower() for i in ids)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("65A1B2C3D4E5F60718293A4B", "65a1b2c3d4e5f60718293a4b"),
        ("65a1b2c3d4e5f60718293a4b", "65a1b2c3d4e5f60718293a4b"),
        ("65a1b2c3d4e5f60718293a4", None),
        ("65a1b2c3d4e5f60718293a4b\n", None),
        ("g5a1b2c3d4e5f60718293a4b", None),
        (None, None),
        (123, None),
    ],
)
def test_normalize_object_id(value, expected):
    assert normalize_object_id(value) == expected
