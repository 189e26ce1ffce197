# src/resort_catalog/models/publication.py
"""SQLAlchemy models for partner publications."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resort_catalog.db.session import Base

from .geography import City, Country, Region
from .medical import Disease, MedicalProfile, Therapy
from .moderation import EntityType, ModeratedEntity
from .partner import Partner
from .sanatorium import SanatoriumObject


def _link_table(name: str, column: str, target: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column(
            "publication_id",
            ForeignKey("publications.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(column, ForeignKey(f"{target}.id", ondelete="CASCADE"), primary_key=True),
    )


publication_medical_profiles = _link_table(
    "publication_medical_profiles", "medical_profile_id", "medical_profiles"
)
publication_therapies = _link_table("publication_therapies", "therapy_id", "therapies")
publication_diseases = _link_table("publication_diseases", "disease_id", "diseases")
publication_objects = _link_table("publication_objects", "object_id", "objects")


class Publication(ModeratedEntity, Base):
    """Article or offer published by a partner."""

    __tablename__ = "publications"
    __moderation_entity_type__ = EntityType.PUBLICATION

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    partner_id: Mapped[int] = mapped_column(
        ForeignKey("partners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    alias: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)
    author: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Inactive publications are hidden from the public site.
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    partner: Mapped[Partner] = relationship(back_populates="publications")
    medical_profiles: Mapped[list[MedicalProfile]] = relationship(
        secondary=publication_medical_profiles,
    )
    therapies: Mapped[list[Therapy]] = relationship(secondary=publication_therapies)
    diseases: Mapped[list[Disease]] = relationship(secondary=publication_diseases)
    objects: Mapped[list[SanatoriumObject]] = relationship(secondary=publication_objects)
    geography: Mapped[PublicationGeography | None] = relationship(
        back_populates="publication",
        cascade="all, delete-orphan",
        uselist=False,
    )
    images: Mapped[list[PublicationGallery]] = relationship(
        back_populates="publication",
        cascade="all, delete-orphan",
        order_by="PublicationGallery.sorting_rule",
    )


class PublicationGeography(Base):
    """Country/region/city a publication is about."""

    __tablename__ = "publication_geography"

    publication_id: Mapped[int] = mapped_column(
        ForeignKey("publications.id", ondelete="CASCADE"),
        primary_key=True,
    )
    country_id: Mapped[int | None] = mapped_column(ForeignKey("countries.id"), nullable=True)
    region_id: Mapped[int | None] = mapped_column(ForeignKey("regions.id"), nullable=True)
    city_id: Mapped[int | None] = mapped_column(ForeignKey("cities.id"), nullable=True)

    publication: Mapped[Publication] = relationship(back_populates="geography")
    country: Mapped[Country | None] = relationship(Country)
    region: Mapped[Region | None] = relationship(Region)
    city: Mapped[City | None] = relationship(City)


class PublicationGallery(ModeratedEntity, Base):
    """Gallery image of a publication."""

    __tablename__ = "publication_galleries"
    __moderation_entity_type__ = EntityType.PUBLICATION_IMAGE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    publication_id: Mapped[int] = mapped_column(
        ForeignKey("publications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sorting_rule: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    publication: Mapped[Publication] = relationship(back_populates="images")
