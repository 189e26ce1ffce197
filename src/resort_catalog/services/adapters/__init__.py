"""Entity moderation adapters and their lookup by URL kind."""

from __future__ import annotations

import enum

from .base import EntityAdapter, GalleryAdapter
from .gallery import (
    PUBLISHED_FIELD,
    ObjectGalleryAdapter,
    PartnerGalleryAdapter,
    PublicationGalleryAdapter,
)
from .partner import PartnerAdapter
from .publication import PublicationAdapter
from .sanatorium import ObjectAdapter


class EntityKind(str, enum.Enum):
    """Entity families addressable through the API."""

    OBJECT = "object"
    PARTNER = "partner"
    PUBLICATION = "publication"


_ADAPTERS: dict[EntityKind, EntityAdapter] = {
    EntityKind.OBJECT: ObjectAdapter(),
    EntityKind.PARTNER: PartnerAdapter(),
    EntityKind.PUBLICATION: PublicationAdapter(),
}


def get_adapter(kind: EntityKind | str) -> EntityAdapter:
    """Return the adapter registered for `kind`."""
    return _ADAPTERS[EntityKind(kind)]


__all__ = [
    "EntityAdapter", "EntityKind", "GalleryAdapter", "get_adapter",
    "ObjectAdapter", "PartnerAdapter", "PublicationAdapter",
    "ObjectGalleryAdapter", "PartnerGalleryAdapter", "PublicationGalleryAdapter",
    "PUBLISHED_FIELD",
]
