"""initial catalog schema

Revision ID: 5d1c0a7e92b4
Revises:
Create Date: 2026-10-19 10:12:41.503118

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5d1c0a7e92b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _reference_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("alias", sa.Text(), nullable=True),
    ]


def _gallery_columns(owner_column: str, owner_table: str) -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(owner_column, sa.Integer(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sorting_rule", sa.Integer(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint([owner_column], [f"{owner_table}.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    ]


def _link_table(name: str, left: tuple[str, str], right: tuple[str, str]) -> None:
    op.create_table(
        name,
        sa.Column(left[0], sa.Integer(), nullable=False),
        sa.Column(right[0], sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint([left[0]], [f"{left[1]}.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint([right[0]], [f"{right[1]}.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint(left[0], right[0]),
    )


def upgrade() -> None:
    """Create reference data, catalog entities and moderation tables."""
    op.create_table(
        "countries",
        *_reference_columns(),
        sa.Column("is_visible", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "regions",
        *_reference_columns(),
        sa.Column("country_id", sa.Integer(), nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "cities",
        *_reference_columns(),
        sa.Column("country_id", sa.Integer(), nullable=False),
        sa.Column("region_id", sa.Integer(), nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    for table in ("medical_profiles", "therapies", "diseases", "services"):
        op.create_table(table, *_reference_columns(), sa.PrimaryKeyConstraint("id"))

    op.create_table(
        "objects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("alias", sa.Text(), nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("country_id", sa.Integer(), nullable=True),
        sa.Column("region_id", sa.Integer(), nullable=True),
        sa.Column("city_id", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("stars", sa.Integer(), nullable=True),
        sa.Column("payment_description", sa.Text(), nullable=True),
        sa.Column("documents", sa.Text(), nullable=True),
        sa.Column("contraindications", sa.Text(), nullable=True),
        sa.Column("contacts", sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"]),
        sa.ForeignKeyConstraint(["city_id"], ["cities.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("alias"),
    )
    _link_table("object_services", ("object_id", "objects"), ("service_id", "services"))
    _link_table(
        "object_medical_profiles",
        ("object_id", "objects"),
        ("medical_profile_id", "medical_profiles"),
    )
    _link_table("object_therapies", ("object_id", "objects"), ("therapy_id", "therapies"))
    op.create_table(
        "object_images",
        *_gallery_columns("object_id", "objects"),
        sa.Column("is_main", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_object_images_object_id", "object_images", ["object_id"])

    op.create_table(
        "partners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("alias", sa.Text(), nullable=True),
        sa.Column("logo", sa.Text(), nullable=True),
        sa.Column("manager_name", sa.Text(), nullable=True),
        sa.Column("organisation_short_name", sa.Text(), nullable=True),
        sa.Column("organisation_full_name", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("telephones", sa.JSON(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("mail_address", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("alias"),
    )
    op.create_table("partner_galleries", *_gallery_columns("partner_id", "partners"))
    op.create_index("ix_partner_galleries_partner_id", "partner_galleries", ["partner_id"])

    op.create_table(
        "publications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("partner_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("alias", sa.Text(), nullable=True),
        sa.Column("author", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["partner_id"], ["partners.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("alias"),
    )
    op.create_index("ix_publications_partner_id", "publications", ["partner_id"])
    for name, column, target in (
        ("publication_medical_profiles", "medical_profile_id", "medical_profiles"),
        ("publication_therapies", "therapy_id", "therapies"),
        ("publication_diseases", "disease_id", "diseases"),
        ("publication_objects", "object_id", "objects"),
    ):
        _link_table(name, ("publication_id", "publications"), (column, target))
    op.create_table(
        "publication_geography",
        sa.Column("publication_id", sa.Integer(), nullable=False),
        sa.Column("country_id", sa.Integer(), nullable=True),
        sa.Column("region_id", sa.Integer(), nullable=True),
        sa.Column("city_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["publication_id"], ["publications.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"]),
        sa.ForeignKeyConstraint(["city_id"], ["cities.id"]),
        sa.PrimaryKeyConstraint("publication_id"),
    )
    op.create_table("publication_galleries", *_gallery_columns("publication_id", "publications"))
    op.create_index(
        "ix_publication_galleries_publication_id",
        "publication_galleries",
        ["publication_id"],
    )

    op.create_table(
        "moderated_field",
        sa.Column("entity_type", sa.String(length=32), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("field_name", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("pending_value", sa.JSON(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("entity_type", "entity_id", "field_name"),
    )
    op.create_index("ix_moderated_field_status", "moderated_field", ["entity_type", "status"])
    op.create_table(
        "moderation_event",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entity_type", sa.String(length=32), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("field_name", sa.String(length=64), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_moderation_event_entity", "moderation_event", ["entity_type", "entity_id"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_moderation_event_entity", table_name="moderation_event")
    op.drop_table("moderation_event")
    op.drop_index("ix_moderated_field_status", table_name="moderated_field")
    op.drop_table("moderated_field")
    op.drop_index("ix_publication_galleries_publication_id", table_name="publication_galleries")
    op.drop_table("publication_galleries")
    op.drop_table("publication_geography")
    for name in (
        "publication_objects",
        "publication_diseases",
        "publication_therapies",
        "publication_medical_profiles",
    ):
        op.drop_table(name)
    op.drop_index("ix_publications_partner_id", table_name="publications")
    op.drop_table("publications")
    op.drop_index("ix_partner_galleries_partner_id", table_name="partner_galleries")
    op.drop_table("partner_galleries")
    op.drop_table("partners")
    op.drop_index("ix_object_images_object_id", table_name="object_images")
    op.drop_table("object_images")
    for name in ("object_therapies", "object_medical_profiles", "object_services"):
        op.drop_table(name)
    op.drop_table("objects")
    for name in ("services", "diseases", "therapies", "medical_profiles"):
        op.drop_table(name)
    op.drop_table("cities")
    op.drop_table("regions")
    op.drop_table("countries")
