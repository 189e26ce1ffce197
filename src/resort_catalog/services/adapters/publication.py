"""Moderation adapter for partner publications.

Besides id-set relations, a publication carries a composite `geography`
field: the country/region/city triple is approved or rejected as a whole
and stored in `publication_geography`.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from resort_catalog.core.exceptions import NotFoundError, ValidationError
from resort_catalog.models import (
    City,
    Country,
    Disease,
    MedicalProfile,
    Publication,
    PublicationGeography,
    Region,
    SanatoriumObject,
    Therapy,
)
from resort_catalog.models.moderation import EntityType
from resort_catalog.services.moderation_registry import FieldKind, FieldRegistry, FieldSpec

from .base import EntityAdapter
from .gallery import PublicationGalleryAdapter
from .validators import geography_triple, non_blank

GEOGRAPHY_FIELD = "geography"

PUBLICATION_FIELDS = FieldRegistry(
    EntityType.PUBLICATION,
    [
        FieldSpec("description", FieldKind.TEXT, "Description"),
        FieldSpec("medical_profiles", FieldKind.ID_SET, "Medical profiles", target=MedicalProfile),
        FieldSpec("therapies", FieldKind.ID_SET, "Therapies", target=Therapy),
        FieldSpec("diseases", FieldKind.ID_SET, "Diseases", target=Disease),
        FieldSpec("objects", FieldKind.ID_SET, "Objects", target=SanatoriumObject),
        FieldSpec(GEOGRAPHY_FIELD, FieldKind.STRUCTURED, "Geography", validator=geography_triple),
    ],
)


class PublicationAdapter(EntityAdapter):
    label = "Publication"
    model = Publication
    registry = PUBLICATION_FIELDS
    direct_fields = FieldRegistry(
        EntityType.PUBLICATION,
        [
            FieldSpec("title", FieldKind.TEXT, "Title", validator=non_blank),
            FieldSpec("author", FieldKind.TEXT, "Author"),
        ],
    )
    search_columns = ("title", "author", "description")
    sortable_columns = ("id", "title", "author", "partner_id")
    gallery = PublicationGalleryAdapter()

    def is_public(self, entity: Publication) -> bool:
        return entity.active

    def validate_value(self, db: Session, spec: FieldSpec, value: Any) -> Any:
        if spec.name != GEOGRAPHY_FIELD:
            return super().validate_value(db, spec, value)
        triple = spec.coerce(value)
        _check_geography(db, triple)
        return triple

    def read_public(self, entity: Publication, spec: FieldSpec) -> Any:
        if spec.name != GEOGRAPHY_FIELD:
            return super().read_public(entity, spec)
        geography = entity.geography
        if geography is None:
            return None
        return {
            "country_id": geography.country_id,
            "region_id": geography.region_id,
            "city_id": geography.city_id,
        }

    def write_public(self, db: Session, entity: Publication, spec: FieldSpec, value: Any) -> None:
        if spec.name != GEOGRAPHY_FIELD:
            super().write_public(db, entity, spec, value)
            return
        if value is None:
            entity.geography = None
            return
        if entity.geography is None:
            entity.geography = PublicationGeography()
        entity.geography.country_id = value.get("country_id")
        entity.geography.region_id = value.get("region_id")
        entity.geography.city_id = value.get("city_id")

    def present(self, db: Session, entity: Publication, spec: FieldSpec) -> Any:
        if spec.name != GEOGRAPHY_FIELD:
            return super().present(db, entity, spec)
        triple = self.read_public(entity, spec)
        if triple is None:
            return None
        # Load by id so a freshly approved triple resolves without a refresh.
        return {
            "country": _summary(db, Country, triple["country_id"]),
            "region": _summary(db, Region, triple["region_id"]),
            "city": _summary(db, City, triple["city_id"]),
        }

    def public_attributes(self, entity: Publication) -> dict[str, Any]:
        return {
            "id": entity.id,
            "partner_id": entity.partner_id,
            "title": entity.title,
            "alias": entity.alias,
            "author": entity.author,
            "active": entity.active,
        }

    def summary(self, entity: Publication) -> dict[str, Any]:
        return {
            "id": entity.id,
            "partner_id": entity.partner_id,
            "title": entity.title,
            "author": entity.author,
        }


def _summary(db: Session, model: Any, row_id: int | None) -> dict[str, Any] | None:
    if row_id is None:
        return None
    row = db.get(model, row_id)
    return row.summary() if row is not None else None


def _check_geography(db: Session, triple: dict[str, int | None]) -> None:
    """Check that the ids exist and that region/city sit inside the country."""
    country_id, region_id, city_id = triple["country_id"], triple["region_id"], triple["city_id"]
    if country_id is not None and db.get(Country, country_id) is None:
        raise NotFoundError(f"Country {country_id} not found")
    if region_id is not None:
        region = db.get(Region, region_id)
        if region is None:
            raise NotFoundError(f"Region {region_id} not found")
        if region.country_id != country_id:
            raise ValidationError(
                f"Region {region_id} does not belong to country {country_id}",
                field=GEOGRAPHY_FIELD,
            )
    if city_id is not None:
        city = db.get(City, city_id)
        if city is None:
            raise NotFoundError(f"City {city_id} not found")
        if city.country_id != country_id:
            raise ValidationError(
                f"City {city_id} does not belong to country {country_id}",
                field=GEOGRAPHY_FIELD,
            )
        if region_id is not None and city.region_id != region_id:
            raise ValidationError(
                f"City {city_id} does not belong to region {region_id}",
                field=GEOGRAPHY_FIELD,
            )
