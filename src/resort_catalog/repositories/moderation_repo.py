"""Keyed storage for per-field moderation state and its audit trail."""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session

from resort_catalog.db.time import utcnow
from resort_catalog.models.moderation import (
    EntityType,
    ModeratedField,
    ModerationAction,
    ModerationEvent,
    ModerationStatus,
)

__all__ = ["ModerationRepository"]


class ModerationRepository:
    """Thin wrapper around database access for `ModeratedField` rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(
        self,
        entity_type: EntityType,
        entity_id: int,
        field_name: str,
    ) -> ModeratedField | None:
        """Return the moderation row for one field, if it was ever submitted."""
        return self.session.get(ModeratedField, (entity_type, entity_id, field_name))

    def list_for_entity(self, entity_type: EntityType, entity_id: int) -> list[ModeratedField]:
        """Return every moderation row of one entity ordered by field name."""
        result = self.session.execute(
            select(ModeratedField)
            .where(
                ModeratedField.entity_type == entity_type,
                ModeratedField.entity_id == entity_id,
            )
            .order_by(ModeratedField.field_name)
        )
        return list(result.scalars())

    def map_for_entities(
        self,
        entity_type: EntityType,
        entity_ids: Iterable[int],
    ) -> dict[int, dict[str, ModeratedField]]:
        """Return moderation rows grouped by entity id, then by field name."""
        ids = list(entity_ids)
        grouped: dict[int, dict[str, ModeratedField]] = defaultdict(dict)
        if not ids:
            return grouped
        result = self.session.execute(
            select(ModeratedField).where(
                ModeratedField.entity_type == entity_type,
                ModeratedField.entity_id.in_(ids),
            )
        )
        for record in result.scalars():
            grouped[record.entity_id][record.field_name] = record
        return grouped

    def upsert(
        self,
        entity_type: EntityType,
        entity_id: int,
        field_name: str,
        *,
        status: ModerationStatus,
        pending_value: Any,
        message: str | None,
    ) -> ModeratedField:
        """Create or update the single row stored for `(entity, field)`.

        The row is flushed immediately so that a second upsert of the same key
        within one unit of work finds it through the identity map.
        """
        record = self.get(entity_type, entity_id, field_name)
        if record is None:
            record = ModeratedField(
                entity_type=entity_type,
                entity_id=entity_id,
                field_name=field_name,
            )
            self.session.add(record)
        record.status = status
        record.pending_value = pending_value
        record.message = message
        record.updated_at = utcnow()
        self.session.flush()
        return record

    def pending_entity_ids(self, entity_type: EntityType) -> Select[tuple[int]]:
        """Return a selectable of entity ids having at least one PENDING field."""
        return (
            select(ModeratedField.entity_id)
            .where(
                ModeratedField.entity_type == entity_type,
                ModeratedField.status == ModerationStatus.PENDING,
            )
            .distinct()
        )

    def record_event(
        self,
        entity_type: EntityType,
        entity_id: int,
        field_name: str,
        action: ModerationAction,
        *,
        value: Any = None,
        message: str | None = None,
    ) -> ModerationEvent:
        """Append an audit record for a transition."""
        moderation_event = ModerationEvent(
            entity_type=entity_type,
            entity_id=entity_id,
            field_name=field_name,
            action=action,
            value=value,
            message=message,
        )
        self.session.add(moderation_event)
        return moderation_event

    def list_events(
        self,
        scopes: Iterable[tuple[EntityType, Iterable[int]]],
        limit: int,
    ) -> list[ModerationEvent]:
        """Return audit records for the given `(entity_type, ids)` scopes, newest first."""
        conditions = []
        for entity_type, ids in scopes:
            id_list = list(ids)
            if id_list:
                conditions.append(
                    (ModerationEvent.entity_type == entity_type)
                    & ModerationEvent.entity_id.in_(id_list)
                )
        if not conditions:
            return []
        result = self.session.execute(
            select(ModerationEvent)
            .where(or_(*conditions))
            .order_by(ModerationEvent.created_at.desc(), ModerationEvent.id.desc())
            .limit(limit)
        )
        return list(result.scalars())
