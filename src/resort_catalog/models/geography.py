# src/resort_catalog/models/geography.py
"""SQLAlchemy models for countries, regions and cities."""

from sqlalchemy import Boolean, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from resort_catalog.db.session import Base

from .reference import ReferenceMixin


class Country(ReferenceMixin, Base):
    """Top level of the geography tree."""

    __tablename__ = "countries"

    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Region(ReferenceMixin, Base):
    """Region inside a country."""

    __tablename__ = "regions"

    country_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("countries.id", ondelete="CASCADE"),
        nullable=False,
    )
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class City(ReferenceMixin, Base):
    """City; the region is optional for countries without one."""

    __tablename__ = "cities"

    country_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("countries.id", ondelete="CASCADE"),
        nullable=False,
    )
    region_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("regions.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
