"""Moderation adapter for sanatorium objects."""

from __future__ import annotations

from typing import Any

from resort_catalog.models import MedicalProfile, SanatoriumObject, Service, Therapy
from resort_catalog.models.moderation import EntityType
from resort_catalog.services.moderation_registry import FieldKind, FieldRegistry, FieldSpec

from .base import EntityAdapter
from .gallery import ObjectGalleryAdapter
from .validators import non_blank, string_mapping

OBJECT_FIELDS = FieldRegistry(
    EntityType.OBJECT,
    [
        FieldSpec("description", FieldKind.TEXT, "Description"),
        FieldSpec("stars", FieldKind.NUMBER, "Stars", minimum=1, maximum=5, integer=True),
        FieldSpec("payment_description", FieldKind.TEXT, "Payment terms"),
        FieldSpec("documents", FieldKind.TEXT, "Required documents"),
        FieldSpec("contraindications", FieldKind.TEXT, "Contraindications"),
        FieldSpec("services", FieldKind.ID_SET, "Services", target=Service),
        FieldSpec("medical_profiles", FieldKind.ID_SET, "Medical profiles", target=MedicalProfile),
        FieldSpec("therapies", FieldKind.ID_SET, "Therapies", target=Therapy),
        FieldSpec("contacts", FieldKind.STRUCTURED, "Contacts", validator=string_mapping),
    ],
)


class ObjectAdapter(EntityAdapter):
    label = "Object"
    model = SanatoriumObject
    registry = OBJECT_FIELDS
    direct_fields = FieldRegistry(
        EntityType.OBJECT,
        [FieldSpec("title", FieldKind.TEXT, "Title", validator=non_blank)],
    )
    search_columns = ("title", "alias")
    sortable_columns = ("id", "title", "alias", "stars")
    gallery = ObjectGalleryAdapter()

    def public_attributes(self, entity: SanatoriumObject) -> dict[str, Any]:
        return {
            "id": entity.id,
            "title": entity.title,
            "alias": entity.alias,
            "is_visible": entity.is_visible,
            "country": entity.country.summary() if entity.country else None,
            "region": entity.region.summary() if entity.region else None,
            "city": entity.city.summary() if entity.city else None,
        }

    def is_public(self, entity: SanatoriumObject) -> bool:
        return entity.is_visible

    def summary(self, entity: SanatoriumObject) -> dict[str, Any]:
        return {"id": entity.id, "title": entity.title, "alias": entity.alias}
