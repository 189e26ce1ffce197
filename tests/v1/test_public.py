# tests/v1/test_public.py
"""Tests for public read endpoints."""

from fastapi import status


def test_public_publication(client, moderation_engine, publication_adapter, publication) -> None:
    """Pending relation changes stay invisible until approved."""
    moderation_engine.submit(publication_adapter, 10, "medical_profiles", [5, 7, 6])

    data = client.get("/api/v1/public/publication/10").json()
    assert [item["id"] for item in data["medical_profiles"]] == [5, 7]
    assert "moderation" not in data

    moderation_engine.approve(publication_adapter, 10, "medical_profiles")

    data = client.get("/api/v1/public/publication/10").json()
    assert [item["id"] for item in data["medical_profiles"]] == [5, 6, 7]


def test_public_missing(client, reference_data) -> None:
    response = client.get("/api/v1/public/object/1")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_public_inactive_publication(client, publication, db_session) -> None:
    publication.active = False
    db_session.commit()

    response = client.get("/api/v1/public/publication/10")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_public_hidden_object(client, sanatorium, db_session) -> None:
    sanatorium.is_visible = False
    db_session.commit()

    response = client.get("/api/v1/public/object/33")
    assert response.status_code == status.HTTP_404_NOT_FOUND
