# src/resort_catalog/models/sanatorium.py
"""SQLAlchemy models for sanatorium objects, their services and gallery."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resort_catalog.db.session import Base

from .geography import City, Country, Region
from .medical import MedicalProfile, Therapy
from .moderation import EntityType, ModeratedEntity
from .reference import ReferenceMixin

object_services = Table(
    "object_services",
    Base.metadata,
    Column("object_id", ForeignKey("objects.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
)

object_medical_profiles = Table(
    "object_medical_profiles",
    Base.metadata,
    Column("object_id", ForeignKey("objects.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "medical_profile_id",
        ForeignKey("medical_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

object_therapies = Table(
    "object_therapies",
    Base.metadata,
    Column("object_id", ForeignKey("objects.id", ondelete="CASCADE"), primary_key=True),
    Column("therapy_id", ForeignKey("therapies.id", ondelete="CASCADE"), primary_key=True),
)


class Service(ReferenceMixin, Base):
    """Amenity or service a sanatorium can offer."""

    __tablename__ = "services"


class SanatoriumObject(ModeratedEntity, Base):
    """Sanatorium or resort listed in the directory.

    Columns below hold the publicly visible (approved) values; edits made from
    the owner account wait in `moderated_field` until a moderator decides.
    """

    __tablename__ = "objects"
    __moderation_entity_type__ = EntityType.OBJECT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    alias: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Soft delete; deleted objects disappear from every projection.
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    country_id: Mapped[int | None] = mapped_column(ForeignKey("countries.id"), nullable=True)
    region_id: Mapped[int | None] = mapped_column(ForeignKey("regions.id"), nullable=True)
    city_id: Mapped[int | None] = mapped_column(ForeignKey("cities.id"), nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    stars: Mapped[int | None] = mapped_column(Integer, nullable=True)
    payment_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    documents: Mapped[str | None] = mapped_column(Text, nullable=True)
    contraindications: Mapped[str | None] = mapped_column(Text, nullable=True)
    contacts: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    country: Mapped[Country | None] = relationship(Country)
    region: Mapped[Region | None] = relationship(Region)
    city: Mapped[City | None] = relationship(City)

    services: Mapped[list[Service]] = relationship(secondary=object_services)
    medical_profiles: Mapped[list[MedicalProfile]] = relationship(
        secondary=object_medical_profiles,
    )
    therapies: Mapped[list[Therapy]] = relationship(secondary=object_therapies)

    images: Mapped[list[ObjectImage]] = relationship(
        back_populates="object",
        cascade="all, delete-orphan",
        order_by="ObjectImage.sorting_rule",
    )

    def summary(self) -> dict[str, Any]:
        """Return the compact representation used when other entities link here."""
        return {"id": self.id, "name": self.title, "alias": self.alias}


class ObjectImage(ModeratedEntity, Base):
    """Gallery image of a sanatorium; shown publicly once published."""

    __tablename__ = "object_images"
    __moderation_entity_type__ = EntityType.OBJECT_IMAGE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    object_id: Mapped[int] = mapped_column(
        ForeignKey("objects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sorting_rule: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_main: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    object: Mapped[SanatoriumObject] = relationship(back_populates="images")
