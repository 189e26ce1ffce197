# tests/v1/test_account.py
"""Tests for owner edits that go through moderation."""

from fastapi import status


def test_edit_submits_moderated_fields(client, sanatorium) -> None:
    """Moderated fields become pending; the title is saved at once."""
    response = client.patch(
        "/api/v1/account/object/33",
        json={"title": "Sanatorium Rus Premium", "stars": 4, "description": None},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "saved"
    assert data["moderation"]["stars"]["status"] == "pending"
    assert data["moderation"]["stars"]["value"] == 4
    assert data["moderation"]["description"]["status"] == "approved"

    public = client.get("/api/v1/public/object/33").json()
    assert public["title"] == "Sanatorium Rus Premium"
    assert public["stars"] == 3
    assert public["description"] == "Sea view"


def test_edit_unknown_field_writes_nothing(client, sanatorium) -> None:
    """An unsupported key fails the whole edit before anything is saved."""
    response = client.patch(
        "/api/v1/account/object/33",
        json={"title": "Renamed", "color": "red"},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert client.get("/api/v1/public/object/33").json()["title"] == "Sanatorium Rus"


def test_edit_validates_values(client, sanatorium) -> None:
    response = client.patch("/api/v1/account/object/33", json={"stars": 7})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["field"] == "stars"

    response = client.patch("/api/v1/account/object/33", json={"title": "   "})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_edit_missing_relation(client, publication) -> None:
    """Id-set members must exist."""
    response = client.patch("/api/v1/account/publication/10", json={"therapies": [1, 42]})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "Therapy 42" in response.json()["detail"]


def test_edit_geography(client, publication) -> None:
    response = client.patch(
        "/api/v1/account/publication/10",
        json={"geography": {"country_id": 2, "region_id": 20, "city_id": 200}},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["moderation"]["geography"]["value"] == {
        "country_id": 2,
        "region_id": 20,
        "city_id": 200,
    }

    response = client.patch(
        "/api/v1/account/publication/10",
        json={"geography": {"country_id": 2, "region_id": 10}},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["field"] == "geography"


def test_edit_missing_entity(client) -> None:
    response = client.patch("/api/v1/account/partner/5", json={"email": "b@y.com"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_add_image(client, partner) -> None:
    """New images are unpublished and wait for approval."""
    response = client.post(
        "/api/v1/account/partner/1/images",
        json={"url": "https://cdn.example/logo.png", "description": "Office"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["url"] == "https://cdn.example/logo.png"
    assert data["is_published"] is False
    assert data["moderation"]["status"] == "pending"
    assert data["moderation"]["value"] is True
    assert client.get("/api/v1/public/partner/1").json()["images"] == []


def test_add_image_requires_url(client, partner) -> None:
    response = client.post("/api/v1/account/partner/1/images", json={"url": ""})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
