# src/resort_catalog/models/__init__.py
"""SQLAlchemy models for the resort catalog."""

from .geography import City, Country, Region
from .medical import Disease, MedicalProfile, Therapy
from .moderation import (
    EntityType,
    ModeratedEntity,
    ModeratedField,
    ModerationAction,
    ModerationEvent,
    ModerationStatus,
)
from .partner import Partner, PartnerGallery
from .publication import Publication, PublicationGallery, PublicationGeography
from .sanatorium import ObjectImage, SanatoriumObject, Service

__all__ = [
    "City", "Country", "Region",
    "Disease", "MedicalProfile", "Therapy",
    "EntityType", "ModeratedEntity", "ModeratedField",
    "ModerationAction", "ModerationEvent", "ModerationStatus",
    "Partner", "PartnerGallery",
    "Publication", "PublicationGallery", "PublicationGeography",
    "ObjectImage", "SanatoriumObject", "Service",
]
