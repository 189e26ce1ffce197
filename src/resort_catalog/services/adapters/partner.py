"""Moderation adapter for partner organisations."""

from __future__ import annotations

from typing import Any

from resort_catalog.models import Partner
from resort_catalog.models.moderation import EntityType
from resort_catalog.services.moderation_registry import FieldKind, FieldRegistry, FieldSpec

from .base import EntityAdapter
from .gallery import PartnerGalleryAdapter
from .validators import email_address, string_list

PARTNER_FIELDS = FieldRegistry(
    EntityType.PARTNER,
    [
        FieldSpec("manager_name", FieldKind.TEXT, "Manager name"),
        FieldSpec("organisation_short_name", FieldKind.TEXT, "Short name"),
        FieldSpec("organisation_full_name", FieldKind.TEXT, "Full name"),
        FieldSpec("description", FieldKind.TEXT, "Description"),
        FieldSpec("address", FieldKind.TEXT, "Address"),
        FieldSpec("telephones", FieldKind.STRUCTURED, "Telephones", validator=string_list),
        FieldSpec("email", FieldKind.TEXT, "E-mail", validator=email_address),
        FieldSpec("mail_address", FieldKind.TEXT, "Postal address"),
    ],
)


class PartnerAdapter(EntityAdapter):
    label = "Partner"
    model = Partner
    registry = PARTNER_FIELDS
    search_columns = ("organisation_short_name", "organisation_full_name", "manager_name")
    sortable_columns = ("id", "organisation_short_name", "organisation_full_name", "manager_name")
    gallery = PartnerGalleryAdapter()

    def public_attributes(self, entity: Partner) -> dict[str, Any]:
        return {"id": entity.id, "alias": entity.alias, "logo": entity.logo}

    def summary(self, entity: Partner) -> dict[str, Any]:
        return {
            "id": entity.id,
            "alias": entity.alias,
            "organisation_short_name": entity.organisation_short_name,
            "manager_name": entity.manager_name,
        }
