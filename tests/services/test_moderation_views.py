# tests/services/test_moderation_views.py
"""Tests for public, moderation and history projections."""

import pytest

from resort_catalog.core.exceptions import NotFoundError
from resort_catalog.models import ModerationStatus


def test_untouched_fields_read_as_approved(views, object_adapter, sanatorium) -> None:
    """Fields never submitted show APPROVED with no value."""
    projection = views.moderation_projection(object_adapter, sanatorium)

    assert set(projection) == set(object_adapter.registry.names)
    for state in projection.values():
        assert state["status"] == ModerationStatus.APPROVED
        assert state["value"] is None
        assert state["message"] is None


def test_public_projection_shows_entity_values(views, object_adapter, sanatorium) -> None:
    """The public view carries the entity's own values."""
    public = views.public(object_adapter, 33)

    assert public["title"] == "Sanatorium Rus"
    assert public["stars"] == 3
    assert public["description"] == "Sea view"
    assert public["city"] == {"id": 100, "name": "Sochi", "alias": "sochi"}
    assert public["medical_profiles"] == [{"id": 5, "name": "Cardiology", "alias": "cardiology"}]
    assert public["images"] == []


def test_object_stars_scenario(views, moderation_engine, object_adapter, sanatorium) -> None:
    """Object #33: stars 3 -> submit 4 -> approve."""
    moderation_engine.submit(object_adapter, 33, "stars", 4)

    projection = views.moderation_projection(object_adapter, sanatorium)
    assert projection["stars"]["status"] == ModerationStatus.PENDING
    assert projection["stars"]["value"] == 4
    assert views.public(object_adapter, 33)["stars"] == 3

    moderation_engine.approve(object_adapter, 33, "stars")

    assert views.public(object_adapter, 33)["stars"] == 4
    projection = views.moderation_projection(object_adapter, sanatorium)
    assert projection["stars"]["status"] == ModerationStatus.APPROVED
    assert projection["stars"]["value"] is None


def test_partner_email_scenario(views, moderation_engine, partner_adapter, partner) -> None:
    """Partner #1: rejected e-mail stays out of the public view."""
    moderation_engine.submit(partner_adapter, 1, "email", "b@y.com")
    moderation_engine.reject(partner_adapter, 1, "email", "invalid domain")

    assert views.public(partner_adapter, 1)["email"] == "a@x.com"
    state = views.moderation_projection(partner_adapter, partner)["email"]
    assert state["status"] == ModerationStatus.REJECTED
    assert state["value"] == "b@y.com"
    assert state["message"] == "invalid domain"
    assert state["updated_at"].tzinfo is not None


def test_publication_profiles_scenario(views, moderation_engine, publication_adapter, publication) -> None:
    """Publication #10: an approved id-set resolves to profile summaries."""
    moderation_engine.submit(publication_adapter, 10, "medical_profiles", [5, 7, 6])
    assert [item["id"] for item in views.public(publication_adapter, 10)["medical_profiles"]] == [5, 7]

    moderation_engine.approve(publication_adapter, 10, "medical_profiles")

    profiles = views.public(publication_adapter, 10)["medical_profiles"]
    assert {item["id"] for item in profiles} == {5, 6, 7}
    assert {item["name"] for item in profiles} == {"Cardiology", "Neurology", "Gastroenterology"}


def test_pending_value_never_public(views, moderation_engine, publication_adapter, publication) -> None:
    """A pending geography does not appear in the public view until approved."""
    triple = {"country_id": 1, "region_id": 10, "city_id": 100}
    moderation_engine.submit(publication_adapter, 10, "geography", triple)

    assert views.public(publication_adapter, 10)["geography"] is None
    assert views.moderation_projection(publication_adapter, publication)["geography"]["value"] == triple

    moderation_engine.approve(publication_adapter, 10, "geography")

    geography = views.public(publication_adapter, 10)["geography"]
    assert geography["country"]["name"] == "Russia"
    assert geography["region"]["name"] == "Krasnodar Krai"
    assert geography["city"]["name"] == "Sochi"


def test_inactive_publication_is_hidden(views, publication_adapter, publication, db_session) -> None:
    """Inactive publications are not served publicly."""
    publication.active = False
    db_session.commit()

    with pytest.raises(NotFoundError):
        views.public(publication_adapter, 10)


def test_invisible_object_is_not_public(views, object_adapter, sanatorium, db_session) -> None:
    """Hidden objects stay reachable from the back office only."""
    sanatorium.is_visible = False
    db_session.commit()

    with pytest.raises(NotFoundError):
        views.public(object_adapter, 33)
    assert views.detail(object_adapter, 33)["is_visible"] is False


def test_deleted_object_is_hidden(views, object_adapter, sanatorium, db_session) -> None:
    """Soft-deleted objects disappear from every projection."""
    sanatorium.is_deleted = True
    db_session.commit()

    with pytest.raises(NotFoundError):
        views.public(object_adapter, 33)
    with pytest.raises(NotFoundError):
        views.detail(object_adapter, 33)


def test_detail_combines_public_and_moderation(views, moderation_engine, object_adapter, sanatorium) -> None:
    """The back-office detail carries both projections and every image."""
    moderation_engine.submit(object_adapter, 33, "description", "Renovated")
    moderation_engine.add_image(object_adapter, 33, "https://cdn.example/rus-1.jpg", "Lobby")

    detail = views.detail(object_adapter, 33)

    assert detail["description"] == "Sea view"
    assert detail["moderation"]["description"]["value"] == "Renovated"
    assert len(detail["images"]) == 1
    assert detail["images"][0]["is_published"] is False
    assert detail["images"][0]["moderation"]["status"] == ModerationStatus.PENDING


def test_only_published_images_are_public(views, moderation_engine, partner_adapter, partner) -> None:
    """Gallery images become public once their publication is approved."""
    first = moderation_engine.add_image(partner_adapter, 1, "https://cdn.example/p-1.jpg", None)
    second = moderation_engine.add_image(partner_adapter, 1, "https://cdn.example/p-2.jpg", "Office")
    assert views.public(partner_adapter, 1)["images"] == []

    moderation_engine.moderate_image(partner_adapter, 1, second.id, {"approve": True})
    moderation_engine.moderate_image(partner_adapter, 1, first.id, {"approve": False, "message": "Blurry"})

    images = views.public(partner_adapter, 1)["images"]
    assert [image["id"] for image in images] == [second.id]
    first_view = views.image_view(partner_adapter.gallery, first)
    assert first_view["moderation"]["status"] == ModerationStatus.REJECTED
    assert first_view["moderation"]["message"] == "Blurry"


def test_history_is_newest_first(views, moderation_engine, partner_adapter, partner) -> None:
    """History lists entity and gallery events, newest first."""
    moderation_engine.submit(partner_adapter, 1, "email", "b@y.com")
    image = moderation_engine.add_image(partner_adapter, 1, "https://cdn.example/p-1.jpg", None)
    moderation_engine.approve(partner_adapter, 1, "email")

    events = views.history(partner_adapter, 1)

    assert [(event.field_name, event.action.value) for event in events] == [
        ("email", "approved"),
        ("published", "submitted"),
        ("email", "submitted"),
    ]
    assert events[1].entity_id == image.id

    assert len(views.history(partner_adapter, 1, limit=1)) == 1
