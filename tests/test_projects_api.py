"""
Project API tests: public listing, admin CRUD, bulk reorder and single rank edits.
"""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.db_handlers import ProjectDBHandler

IMAGE_URL = "https://res.cloudinary.com/demo/image/upload/sample.jpg"
MISSING_ID = "0123456789abcdef01234567"


def _payload(title: str, **overrides) -> dict:
    payload = {
        "title": title,
        "description": f"{title} description",
        "imageUrl": IMAGE_URL,
        "category": "Marketing",
        "tags": ["HR"],
    }
    payload.update(overrides)
    return payload


def _create(client: TestClient, title: str, **overrides) -> dict:
    response = client.post("/projects", json=_payload(title, **overrides))
    assert response.status_code == 201, response.text
    return response.json()


def _listed_titles(client: TestClient) -> list[str]:
    response = client.get("/projects")
    assert response.status_code == 200
    return [p["title"] for p in response.json()]


def _ranks(client: TestClient) -> dict[str, int]:
    return {p["title"]: p["order"] for p in client.get("/projects").json()}


@pytest.fixture
def abc(auth_client: TestClient) -> dict[str, dict]:
    """Three projects created A, B, C in that order, all with rank 0."""
    return {title: _create(auth_client, title) for title in ("A", "B", "C")}


def test_create_project_defaults(auth_client: TestClient):
    project = _create(auth_client, "Campaign")

    assert len(project["id"]) == 24
    assert project["order"] == 0
    assert project["featured"] is False
    assert project["longDescription"] is None
    assert project["imageUrl"] == IMAGE_URL
    assert "createdAt" in project and "updatedAt" in project


def test_create_project_requires_session(client: TestClient):
    response = client.post("/projects", json=_payload("Campaign"))
    assert response.status_code == 401
    assert client.get("/projects").json() == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"title": "   "},
        {"imageUrl": "not-a-url"},
        {"imageUrl": "ftp://example.com/a.png"},
        {"order": "first"},
        {"unknownField": 1},
    ],
)
def test_create_project_validation(auth_client: TestClient, overrides):
    response = auth_client.post("/projects", json={**_payload("Campaign"), **overrides})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request"


def test_create_project_missing_required_field(auth_client: TestClient):
    payload = _payload("Campaign")
    del payload["imageUrl"]
    assert auth_client.post("/projects", json=payload).status_code == 400


def test_untrusted_image_host_is_accepted_with_warning(
    auth_client: TestClient, caplog
):
    with caplog.at_level("WARNING", logger="media_service"):
        project = _create(
            auth_client, "External", imageUrl="https://example.org/photo.png"
        )

    assert project["imageUrl"] == "https://example.org/photo.png"
    assert any("not from a trusted media host" in r.message for r in caplog.records)


def test_get_project(auth_client: TestClient, abc):
    response = auth_client.get(f"/projects/{abc['B']['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "B"


def test_get_project_accepts_uppercase_id(auth_client: TestClient, abc):
    response = auth_client.get(f"/projects/{abc['B']['id'].upper()}")
    assert response.status_code == 200
    assert response.json()["id"] == abc["B"]["id"]


@pytest.mark.parametrize("bad_id", ["123", "zzzzzzzzzzzzzzzzzzzzzzzz", "0" * 25])
def test_malformed_id_is_rejected_before_lookup(auth_client: TestClient, bad_id):
    assert auth_client.get(f"/projects/{bad_id}").status_code == 400
    assert auth_client.put(f"/projects/{bad_id}", json={"order": 1}).status_code == 400
    assert auth_client.delete(f"/projects/{bad_id}").status_code == 400


def test_unknown_project_is_not_found(auth_client: TestClient):
    assert auth_client.get(f"/projects/{MISSING_ID}").status_code == 404
    response = auth_client.put(f"/projects/{MISSING_ID}", json={"title": "X"})
    assert response.status_code == 404
    assert auth_client.delete(f"/projects/{MISSING_ID}").status_code == 404


def test_partial_update_only_touches_sent_fields(auth_client: TestClient, abc):
    project_id = abc["A"]["id"]
    response = auth_client.put(
        f"/projects/{project_id}",
        json={"title": "A renamed", "featured": True, "longDescription": "Longer"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "A renamed"
    assert body["featured"] is True
    assert body["longDescription"] == "Longer"
    assert body["description"] == "A description"
    assert body["tags"] == ["HR"]


@pytest.mark.parametrize(
    "payload",
    [{"title": None}, {"order": None}, {"unknownField": "x"}, {"imageUrl": "nope"}],
)
def test_update_validation(auth_client: TestClient, abc, payload):
    response = auth_client.put(f"/projects/{abc['A']['id']}", json=payload)
    assert response.status_code == 400


def test_update_requires_session(client: TestClient):
    response = client.put(f"/projects/{MISSING_ID}", json={"order": 1})
    assert response.status_code == 401


def test_delete_project(auth_client: TestClient, abc):
    response = auth_client.delete(f"/projects/{abc['A']['id']}")

    assert response.status_code == 200
    assert response.json() == {}
    assert sorted(_listed_titles(auth_client)) == ["B", "C"]


def test_equal_ranks_list_newest_first(auth_client: TestClient, abc):
    assert _listed_titles(auth_client) == ["C", "B", "A"]


def test_reorder_round_trip(auth_client: TestClient, abc):
    ids = [abc["C"]["id"], abc["A"]["id"], abc["B"]["id"]]

    response = auth_client.put("/projects/reorder", json={"itemIds": ids})

    assert response.status_code == 200
    assert response.json() == {"message": "Order updated successfully"}
    assert _ranks(auth_client) == {"C": 0, "A": 1, "B": 2}
    assert _listed_titles(auth_client) == ["C", "A", "B"]
    assert _listed_titles(auth_client) == ["C", "A", "B"]


def test_reorder_is_idempotent(auth_client: TestClient, abc):
    ids = [abc["B"]["id"], abc["C"]["id"], abc["A"]["id"]]

    auth_client.put("/projects/reorder", json={"itemIds": ids})
    once = auth_client.get("/projects").json()
    auth_client.put("/projects/reorder", json={"itemIds": ids})
    twice = auth_client.get("/projects").json()

    assert [(p["id"], p["order"]) for p in once] == [
        (p["id"], p["order"]) for p in twice
    ]


def test_reorder_accepts_legacy_field_name(auth_client: TestClient, abc):
    ids = [abc["A"]["id"], abc["B"]["id"], abc["C"]["id"]]
    response = auth_client.put("/projects/reorder", json={"projectIds": ids})

    assert response.status_code == 200
    assert _listed_titles(auth_client) == ["A", "B", "C"]


def test_reorder_skips_unknown_ids(auth_client: TestClient, abc):
    auth_client.put(
        "/projects/reorder",
        json={"itemIds": [abc["A"]["id"], abc["B"]["id"], abc["C"]["id"]]},
    )

    response = auth_client.put(
        "/projects/reorder", json={"itemIds": [MISSING_ID, abc["C"]["id"]]}
    )

    assert response.status_code == 200
    assert _ranks(auth_client) == {"A": 0, "B": 1, "C": 1}


@pytest.mark.parametrize(
    "payload",
    [
        {"itemIds": "not-a-list"},
        {"itemIds": {"0": MISSING_ID}},
        {"itemIds": 5},
        {"itemIds": ["not-an-id"]},
        {"itemIds": [123]},
        {},
    ],
)
def test_reorder_rejects_bad_payload(auth_client: TestClient, abc, payload):
    response = auth_client.put("/projects/reorder", json=payload)

    assert response.status_code == 400
    assert set(_ranks(auth_client).values()) == {0}


def test_reorder_requires_session(client: TestClient):
    response = client.put("/projects/reorder", json={"itemIds": [MISSING_ID]})
    assert response.status_code == 401


def test_reorder_storage_failure_is_generic(
    auth_client: TestClient, abc, monkeypatch
):
    async def failing_reorder(self, item_ids):
        raise OperationalError("UPDATE projects", {}, Exception("database is locked"))

    monkeypatch.setattr(ProjectDBHandler, "reorder", failing_reorder)

    response = auth_client.put(
        "/projects/reorder", json={"itemIds": [abc["C"]["id"], abc["A"]["id"]]}
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to update project order"}
    assert set(_ranks(auth_client).values()) == {0}


def test_reorder_two_fixed_ids(auth_client: TestClient, run_async):
    handler = ProjectDBHandler()
    base = datetime(2026, 1, 1, tzinfo=UTC)
    for index, item_id in enumerate(
        ["000000000000000000000001", "000000000000000000000002"]
    ):
        run_async(
            handler.create(
                {
                    "id": item_id,
                    "title": f"Fixed {index}",
                    "description": "Fixed id project",
                    "image_url": IMAGE_URL,
                    "order": 5,
                    "created_at": base + timedelta(minutes=index),
                }
            )
        )

    response = auth_client.put(
        "/projects/reorder",
        json={"itemIds": ["000000000000000000000001", "000000000000000000000002"]},
    )

    assert response.status_code == 200
    listed = auth_client.get("/projects").json()
    assert [(p["id"], p["order"]) for p in listed] == [
        ("000000000000000000000001", 0),
        ("000000000000000000000002", 1),
    ]


def test_single_rank_update_leaves_other_ranks_alone(auth_client: TestClient, abc):
    auth_client.put(
        "/projects/reorder",
        json={"itemIds": [abc["A"]["id"], abc["B"]["id"], abc["C"]["id"]]},
    )

    response = auth_client.put(f"/projects/{abc['C']['id']}", json={"order": 0})

    assert response.status_code == 200
    assert response.json()["order"] == 0
    assert _ranks(auth_client) == {"A": 0, "B": 1, "C": 0}
    # A and C now tie; C was created later so it lists first
    assert _listed_titles(auth_client) == ["C", "A", "B"]


def test_order_can_be_set_on_create(auth_client: TestClient):
    _create(auth_client, "Late", order=10)
    _create(auth_client, "Early", order=-1)
    _create(auth_client, "Middle")

    assert _listed_titles(auth_client) == ["Early", "Middle", "Late"]
