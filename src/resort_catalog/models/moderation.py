# src/resort_catalog/models/moderation.py
"""Models holding per-field moderation state and its audit trail."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import JSON, DateTime, Enum, Index, Integer, String, Text, delete, event
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from resort_catalog.db.session import Base
from resort_catalog.db.time import utcnow


class ModerationStatus(str, enum.Enum):
    """Lifecycle states of a moderated field."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EntityType(str, enum.Enum):
    """Entity families whose fields go through moderation."""

    OBJECT = "object"
    PARTNER = "partner"
    PUBLICATION = "publication"
    OBJECT_IMAGE = "object_image"
    PARTNER_IMAGE = "partner_image"
    PUBLICATION_IMAGE = "publication_image"


class ModerationAction(str, enum.Enum):
    """Transitions recorded in the audit trail."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def _enum_column(enum_cls: type[enum.Enum]) -> Enum:
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=_enum_values,
        validate_strings=True,
    )


class ModeratedField(Base):
    """Moderation state of one field of one entity.

    The public value lives on the entity itself; this row carries the
    pending replacement, its status and the moderator's rejection message.
    """

    __tablename__ = "moderated_field"
    __table_args__ = (Index("ix_moderated_field_status", "entity_type", "status"),)

    entity_type: Mapped[EntityType] = mapped_column(_enum_column(EntityType), primary_key=True)
    entity_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    field_name: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[ModerationStatus] = mapped_column(
        _enum_column(ModerationStatus),
        nullable=False,
        default=ModerationStatus.PENDING,
    )
    # Opaque to the engine: scalar, id list or composite dict depending on field kind.
    pending_value: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    # Set only while status is REJECTED.
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class ModerationEvent(Base):
    """Audit record of a single moderation transition."""

    __tablename__ = "moderation_event"
    __table_args__ = (Index("ix_moderation_event_entity", "entity_type", "entity_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_type: Mapped[EntityType] = mapped_column(_enum_column(EntityType), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    field_name: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[ModerationAction] = mapped_column(
        _enum_column(ModerationAction),
        nullable=False,
    )
    value: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class ModeratedEntity:
    """Mixin for aggregate roots that own moderation rows."""

    __moderation_entity_type__: ClassVar[EntityType | None] = None


@event.listens_for(ModeratedEntity, "after_delete", propagate=True)
def purge_moderation_rows(mapper: Mapper[Any], connection: Connection, target: Any) -> None:
    """Remove moderation state and history together with the owning entity."""
    entity_type = target.__moderation_entity_type__
    connection.execute(
        delete(ModeratedField).where(
            ModeratedField.entity_type == entity_type,
            ModeratedField.entity_id == target.id,
        )
    )
    connection.execute(
        delete(ModerationEvent).where(
            ModerationEvent.entity_type == entity_type,
            ModerationEvent.entity_id == target.id,
        )
    )
