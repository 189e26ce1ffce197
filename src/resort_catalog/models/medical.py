# src/resort_catalog/models/medical.py
"""Medical taxonomy referenced by objects and publications."""

from resort_catalog.db.session import Base

from .reference import ReferenceMixin


class MedicalProfile(ReferenceMixin, Base):
    """Treatment profile (cardiology, neurology, ...)."""

    __tablename__ = "medical_profiles"


class Therapy(ReferenceMixin, Base):
    """Treatment method offered by sanatoriums."""

    __tablename__ = "therapies"


class Disease(ReferenceMixin, Base):
    """Disease a publication can be tagged with."""

    __tablename__ = "diseases"
