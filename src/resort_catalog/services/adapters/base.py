"""Generic plumbing shared by every entity moderation adapter."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from resort_catalog.core.exceptions import NotFoundError
from resort_catalog.models.moderation import EntityType, ModeratedField, ModerationStatus
from resort_catalog.services.moderation_registry import FieldKind, FieldRegistry, FieldSpec


class EntityAdapter:
    """Maps the generic moderation engine onto one concrete model.

    Subclasses only declare tables: which model they wrap, which fields are
    moderated, which attributes an owner may change directly, and which
    columns the back-office queue may search and sort on. Methods can be
    overridden for fields whose public value is not a plain attribute.
    """

    label: ClassVar[str]
    model: ClassVar[type[Any]]
    registry: ClassVar[FieldRegistry]
    # Attributes an owner edits without moderation.
    direct_fields: ClassVar[FieldRegistry | None] = None
    search_columns: ClassVar[tuple[str, ...]] = ()
    sortable_columns: ClassVar[tuple[str, ...]] = ("id",)
    gallery: ClassVar[GalleryAdapter | None] = None

    @property
    def entity_type(self) -> EntityType:
        return self.registry.entity_type

    # Lookup

    def base_query(self) -> Select[Any]:
        """Return the statement selecting live entities of this kind."""
        stmt = select(self.model)
        if hasattr(self.model, "is_deleted"):
            stmt = stmt.where(self.model.is_deleted.is_(False))
        return stmt

    def get_entity(self, db: Session, entity_id: int) -> Any:
        """Load a live entity by id.

        Raises:
            NotFoundError: If the entity does not exist or was soft-deleted.
        """
        entity = db.scalar(self.base_query().where(self.model.id == entity_id))
        if entity is None:
            raise NotFoundError(f"{self.label} {entity_id} not found")
        return entity

    def is_public(self, entity: Any) -> bool:
        """Whether the entity may be shown on the public site."""
        return True

    # Values

    def validate_value(self, db: Session, spec: FieldSpec, value: Any) -> Any:
        """Coerce a submitted value and check that referenced rows exist.

        Raises:
            ValidationError: If the value has the wrong shape.
            NotFoundError: If an id-set names a missing row.
        """
        coerced = spec.coerce(value)
        if spec.kind is FieldKind.ID_SET and coerced:
            ensure_exists(db, spec.target, coerced)
        return coerced

    def read_public(self, entity: Any, spec: FieldSpec) -> Any:
        """Return the public value of a field in its stored (serialisable) form."""
        current = getattr(entity, spec.attr)
        if spec.kind is FieldKind.ID_SET:
            return sorted(item.id for item in current)
        return current

    def write_public(self, db: Session, entity: Any, spec: FieldSpec, value: Any) -> None:
        """Replace the public value of a field with an approved value."""
        if spec.kind is FieldKind.ID_SET:
            ids = list(value or [])
            rows = db.scalars(select(spec.target).where(spec.target.id.in_(ids))).all() if ids else []
            by_id = {row.id: row for row in rows}
            setattr(entity, spec.attr, [by_id[item] for item in ids if item in by_id])
            return
        setattr(entity, spec.attr, value)

    def present(self, db: Session, entity: Any, spec: FieldSpec) -> Any:
        """Return the public value of a field resolved for display."""
        if spec.kind is FieldKind.ID_SET:
            return [item.summary() for item in sorted(getattr(entity, spec.attr), key=lambda row: row.id)]
        return getattr(entity, spec.attr)

    # Payload fragments

    def public_attributes(self, entity: Any) -> dict[str, Any]:
        """Non-moderated attributes included in every projection."""
        return {"id": entity.id}

    def summary(self, entity: Any) -> dict[str, Any]:
        """Lightweight representation used by the moderation queue."""
        return {"id": entity.id}


class GalleryAdapter(EntityAdapter):
    """Adapter for gallery images; a single boolean `published` field."""

    owner_column: ClassVar[str]

    @property
    def owner_attr(self) -> Any:
        return getattr(self.model, self.owner_column)

    def get_owned(self, db: Session, owner_id: int, image_id: int) -> Any:
        """Load an image that belongs to the given owner.

        Raises:
            NotFoundError: If no such image is attached to the owner.
        """
        image = db.scalar(
            select(self.model).where(self.model.id == image_id, self.owner_attr == owner_id)
        )
        if image is None:
            raise NotFoundError(f"{self.label} {image_id} not found for {self.owner_column}={owner_id}")
        return image

    def images_of(self, db: Session, owner_id: int) -> list[Any]:
        """Return every image of an owner in display order."""
        return list(
            db.scalars(
                select(self.model)
                .where(self.owner_attr == owner_id)
                .order_by(self.model.sorting_rule, self.model.id)
            )
        )

    def create(self, db: Session, owner_id: int, url: str, description: str | None) -> Any:
        """Attach a new, unpublished image at the end of the gallery."""
        last = db.scalar(select(func.max(self.model.sorting_rule)).where(self.owner_attr == owner_id))
        image = self.model(
            url=url,
            description=description,
            sorting_rule=(last or 0) + 1,
            is_published=False,
        )
        setattr(image, self.owner_column, owner_id)
        db.add(image)
        db.flush()
        return image

    def pending_owner_ids(self) -> Select[Any]:
        """Return a selectable of owner ids having an image awaiting moderation."""
        return (
            select(self.owner_attr)
            .join(
                ModeratedField,
                (ModeratedField.entity_type == self.entity_type)
                & (ModeratedField.entity_id == self.model.id),
            )
            .where(ModeratedField.status == ModerationStatus.PENDING)
            .distinct()
        )

    def pending_counts(self, db: Session, owner_ids: Sequence[int]) -> dict[int, int]:
        """Return the number of pending images per owner id."""
        if not owner_ids:
            return {}
        rows = db.execute(
            select(self.owner_attr, func.count(self.model.id))
            .join(
                ModeratedField,
                (ModeratedField.entity_type == self.entity_type)
                & (ModeratedField.entity_id == self.model.id),
            )
            .where(
                ModeratedField.status == ModerationStatus.PENDING,
                self.owner_attr.in_(list(owner_ids)),
            )
            .group_by(self.owner_attr)
        )
        return {owner_id: count for owner_id, count in rows}

    def public_attributes(self, image: Any) -> dict[str, Any]:
        return {
            "id": image.id,
            "url": image.url,
            "description": image.description,
            "sorting_rule": image.sorting_rule,
        }


def ensure_exists(db: Session, model: Any, ids: Sequence[int]) -> None:
    """Raise `NotFoundError` naming the first id of `ids` missing from `model`."""
    found = set(db.scalars(select(model.id).where(model.id.in_(list(ids)))))
    for item in ids:
        if item not in found:
            raise NotFoundError(f"{model.__name__} {item} not found")
