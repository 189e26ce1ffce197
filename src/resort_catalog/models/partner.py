# src/resort_catalog/models/partner.py
"""SQLAlchemy models for partner organisations and their gallery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resort_catalog.db.session import Base

from .moderation import EntityType, ModeratedEntity

if TYPE_CHECKING:
    from .publication import Publication


class Partner(ModeratedEntity, Base):
    """Partner organisation publishing content on the platform."""

    __tablename__ = "partners"
    __moderation_entity_type__ = EntityType.PARTNER

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    alias: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)
    logo: Mapped[str | None] = mapped_column(Text, nullable=True)

    manager_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    organisation_short_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    organisation_full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    telephones: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    mail_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    publications: Mapped[list[Publication]] = relationship(
        back_populates="partner",
        cascade="all, delete-orphan",
    )
    images: Mapped[list[PartnerGallery]] = relationship(
        back_populates="partner",
        cascade="all, delete-orphan",
        order_by="PartnerGallery.sorting_rule",
    )


class PartnerGallery(ModeratedEntity, Base):
    """Gallery image of a partner."""

    __tablename__ = "partner_galleries"
    __moderation_entity_type__ = EntityType.PARTNER_IMAGE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    partner_id: Mapped[int] = mapped_column(
        ForeignKey("partners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sorting_rule: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    partner: Mapped[Partner] = relationship(back_populates="images")
