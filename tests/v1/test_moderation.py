# tests/v1/test_moderation.py
"""Tests for back-office moderation endpoints."""

import json

from fastapi import status

from resort_catalog.models import ModeratedField, ModerationStatus
from resort_catalog.models.moderation import EntityType


def test_moderate_fields(client, moderation_engine, object_adapter, sanatorium) -> None:
    """Approving a pending field publishes it."""
    moderation_engine.submit(object_adapter, 33, "stars", 4)

    response = client.put("/api/v1/admin/moderation/object/33", json={"stars": {"approve": True}})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "moderated"}
    public = client.get("/api/v1/public/object/33").json()
    assert public["stars"] == 4


def test_reject_without_message(client, moderation_engine, partner_adapter, partner, db_session) -> None:
    """A rejection without a reason is a 400 naming the field."""
    moderation_engine.submit(partner_adapter, 1, "email", "b@y.com")

    response = client.put(
        "/api/v1/admin/moderation/partner/1",
        json={"email": {"approve": False, "message": ""}},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["field"] == "email"
    record = db_session.get(ModeratedField, (EntityType.PARTNER, 1, "email"))
    assert record.status == ModerationStatus.PENDING


def test_missing_approve_key(client, moderation_engine, partner_adapter, partner) -> None:
    moderation_engine.submit(partner_adapter, 1, "email", "b@y.com")

    response = client.put("/api/v1/admin/moderation/partner/1", json={"email": {"message": "x"}})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["field"] == "email"


def test_unknown_field_is_distinct_error(client, moderation_engine, object_adapter, sanatorium) -> None:
    """Unknown fields are reported with 422, and nothing is applied."""
    moderation_engine.submit(object_adapter, 33, "stars", 4)

    response = client.put(
        "/api/v1/admin/moderation/object/33",
        json={"stars": {"approve": True}, "color": {"approve": True}},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["field"] == "color"
    assert client.get("/api/v1/public/object/33").json()["stars"] == 3


def test_moderate_missing_entity(client, reference_data) -> None:
    response = client.put("/api/v1/admin/moderation/object/999", json={"stars": {"approve": True}})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_unknown_kind(client) -> None:
    response = client.get("/api/v1/admin/moderation/chat/1")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_pending_list(client, moderation_engine, object_adapter, sanatorium) -> None:
    """The queue uses the paginator shape with camelCase page size."""
    moderation_engine.submit(object_adapter, 33, "stars", 4)

    response = client.get(
        "/api/v1/admin/moderation/object",
        params={"page": 1, "rowsPerPage": 5, "searchKey": "rus", "sorting": json.dumps({"title": "asc"})},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["page"] == 1
    assert data["rowsPerPage"] == 5
    assert data["total"] == 1
    assert data["items"][0]["id"] == 33
    assert data["items"][0]["pending_fields"] == ["stars"]


def test_pending_list_bad_sorting(client, object_adapter, sanatorium) -> None:
    response = client.get("/api/v1/admin/moderation/object", params={"sorting": "title"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["field"] == "sorting"

    response = client.get("/api/v1/admin/moderation/object", params={"sorting": '{"password": "asc"}'})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_pending_detail(client, moderation_engine, partner_adapter, partner) -> None:
    """Detail carries public values and the moderation map side by side."""
    moderation_engine.submit(partner_adapter, 1, "email", "b@y.com")
    moderation_engine.reject(partner_adapter, 1, "email", "invalid domain")

    response = client.get("/api/v1/admin/moderation/partner/1")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["email"] == "a@x.com"
    assert data["moderation"]["email"]["status"] == "rejected"
    assert data["moderation"]["email"]["value"] == "b@y.com"
    assert data["moderation"]["email"]["message"] == "invalid domain"
    assert data["moderation"]["address"] == {
        "status": "approved",
        "value": None,
        "message": None,
        "updated_at": None,
    }


def test_moderate_image(client, moderation_engine, publication_adapter, publication) -> None:
    """Images are approved one at a time."""
    image = moderation_engine.add_image(publication_adapter, 10, "https://cdn.example/pub.jpg", None)
    url = f"/api/v1/admin/moderation/publication/10/images/{image.id}"

    assert client.put(url, json={"approve": False}).status_code == status.HTTP_400_BAD_REQUEST
    assert client.put(url, json={"message": "x"}).status_code == status.HTTP_400_BAD_REQUEST

    response = client.put(url, json={"approve": True})

    assert response.status_code == status.HTTP_200_OK
    images = client.get("/api/v1/public/publication/10").json()["images"]
    assert [item["id"] for item in images] == [image.id]


def test_moderate_foreign_image(client, moderation_engine, publication_adapter, object_adapter, publication, sanatorium) -> None:
    """An image of another entity is not found under this one."""
    image = moderation_engine.add_image(object_adapter, 33, "https://cdn.example/obj.jpg", None)

    response = client.put(
        f"/api/v1/admin/moderation/publication/10/images/{image.id}",
        json={"approve": True},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_history(client, moderation_engine, partner_adapter, partner) -> None:
    moderation_engine.submit(partner_adapter, 1, "email", "b@y.com")
    moderation_engine.reject(partner_adapter, 1, "email", "invalid domain")

    response = client.get("/api/v1/admin/moderation/partner/1/history", params={"limit": 10})

    assert response.status_code == status.HTTP_200_OK
    events = response.json()
    assert [event["action"] for event in events] == ["rejected", "submitted"]
    assert events[0]["message"] == "invalid domain"
    assert events[0]["entity_type"] == "partner"


def test_history_missing_entity(client) -> None:
    response = client.get("/api/v1/admin/moderation/partner/404/history")
    assert response.status_code == status.HTTP_404_NOT_FOUND
