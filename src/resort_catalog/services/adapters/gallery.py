"""Gallery image adapters for objects, partners and publications."""

from __future__ import annotations

from typing import Any

from resort_catalog.models import ObjectImage, PartnerGallery, PublicationGallery
from resort_catalog.models.moderation import EntityType
from resort_catalog.services.moderation_registry import FieldKind, FieldRegistry, FieldSpec

from .base import GalleryAdapter

PUBLISHED_FIELD = "published"


def _published_registry(entity_type: EntityType) -> FieldRegistry:
    return FieldRegistry(
        entity_type,
        [FieldSpec(PUBLISHED_FIELD, FieldKind.BOOLEAN, "Published", attribute="is_published")],
    )


class ObjectGalleryAdapter(GalleryAdapter):
    label = "Object image"
    model = ObjectImage
    owner_column = "object_id"
    registry = _published_registry(EntityType.OBJECT_IMAGE)

    def public_attributes(self, image: ObjectImage) -> dict[str, Any]:
        data = super().public_attributes(image)
        data["is_main"] = image.is_main
        return data


class PartnerGalleryAdapter(GalleryAdapter):
    label = "Partner image"
    model = PartnerGallery
    owner_column = "partner_id"
    registry = _published_registry(EntityType.PARTNER_IMAGE)


class PublicationGalleryAdapter(GalleryAdapter):
    label = "Publication image"
    model = PublicationGallery
    owner_column = "publication_id"
    registry = _published_registry(EntityType.PUBLICATION_IMAGE)
