"""Read projections of moderated entities.

The public projection only ever shows approved values. The moderation
projection is a flat map keyed by field name exposing status, the value
awaiting (or refused by) review and the rejection message.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from resort_catalog.core.exceptions import NotFoundError
from resort_catalog.core.settings import settings
from resort_catalog.db.time import ensure_utc
from resort_catalog.models.moderation import ModeratedField, ModerationEvent, ModerationStatus
from resort_catalog.repositories.moderation_repo import ModerationRepository
from resort_catalog.services.adapters import PUBLISHED_FIELD, EntityAdapter, GalleryAdapter

_VISIBLE_STATES = (ModerationStatus.PENDING, ModerationStatus.REJECTED)


def field_view(record: ModeratedField | None) -> dict[str, Any]:
    """Return `{status, value, message, updated_at}` for one moderation row.

    A field that was never submitted reads as approved with nothing pending.
    """
    if record is None:
        return {"status": ModerationStatus.APPROVED, "value": None, "message": None, "updated_at": None}
    return {
        "status": record.status,
        "value": record.pending_value if record.status in _VISIBLE_STATES else None,
        "message": record.message if record.status == ModerationStatus.REJECTED else None,
        "updated_at": ensure_utc(record.updated_at),
    }


class ModerationViewAssembler:
    """Builds public, moderation and history views for one entity."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = ModerationRepository(session)

    def moderation_projection(self, adapter: EntityAdapter, entity: Any) -> dict[str, dict[str, Any]]:
        records = {record.field_name: record for record in self.repo.list_for_entity(adapter.entity_type, entity.id)}
        return {spec.name: field_view(records.get(spec.name)) for spec in adapter.registry}

    def public_projection(self, adapter: EntityAdapter, entity: Any) -> dict[str, Any]:
        """Entity attributes plus approved values of every moderated field."""
        data = adapter.public_attributes(entity)
        for spec in adapter.registry:
            data[spec.name] = adapter.present(self.session, entity, spec)
        if adapter.gallery is not None:
            data["images"] = [
                adapter.gallery.public_attributes(image)
                for image in adapter.gallery.images_of(self.session, entity.id)
                if image.is_published
            ]
        return data

    def public(self, adapter: EntityAdapter, entity_id: int) -> dict[str, Any]:
        """Public projection of a live, publicly visible entity.

        Raises:
            NotFoundError: If the entity is missing, deleted or hidden.
        """
        entity = adapter.get_entity(self.session, entity_id)
        if not adapter.is_public(entity):
            raise NotFoundError(f"{adapter.label} {entity_id} not found")
        return self.public_projection(adapter, entity)

    def image_view(self, gallery: GalleryAdapter, image: Any) -> dict[str, Any]:
        record = self.repo.get(gallery.entity_type, image.id, PUBLISHED_FIELD)
        data = gallery.public_attributes(image)
        data["is_published"] = image.is_published
        data["moderation"] = field_view(record)
        return data

    def detail(self, adapter: EntityAdapter, entity_id: int) -> dict[str, Any]:
        """Back-office view: public projection, moderation map and every image."""
        entity = adapter.get_entity(self.session, entity_id)
        data = self.public_projection(adapter, entity)
        data["moderation"] = self.moderation_projection(adapter, entity)
        if adapter.gallery is not None:
            data["images"] = [
                self.image_view(adapter.gallery, image)
                for image in adapter.gallery.images_of(self.session, entity.id)
            ]
        return data

    def history(self, adapter: EntityAdapter, entity_id: int, limit: int | None = None) -> list[ModerationEvent]:
        """Audit trail of the entity and its gallery, newest first."""
        entity = adapter.get_entity(self.session, entity_id)
        scopes = [(adapter.entity_type, [entity.id])]
        if adapter.gallery is not None:
            image_ids = [image.id for image in adapter.gallery.images_of(self.session, entity.id)]
            scopes.append((adapter.gallery.entity_type, image_ids))
        return self.repo.list_events(scopes, limit or settings.moderation_history_limit)
