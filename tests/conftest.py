# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from resort_catalog.db.session import Base
from resort_catalog.db.session import get_db as app_get_session
from resort_catalog.main import app as fastapi_app
from resort_catalog.models import (
    City,
    Country,
    Disease,
    MedicalProfile,
    Partner,
    Publication,
    Region,
    SanatoriumObject,
    Service,
    Therapy,
)
from resort_catalog.services.adapters import ObjectAdapter, PartnerAdapter, PublicationAdapter
from resort_catalog.services.moderation_engine import ModerationEngine
from resort_catalog.services.moderation_views import ModerationViewAssembler

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # The moderation engine commits its own unit of work, so tests run against
    # real commits and every table is emptied afterwards.
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def moderation_engine(db_session: Session) -> ModerationEngine:
    return ModerationEngine(db_session)


@pytest.fixture()
def views(db_session: Session) -> ModerationViewAssembler:
    return ModerationViewAssembler(db_session)


@pytest.fixture()
def object_adapter() -> ObjectAdapter:
    return ObjectAdapter()


@pytest.fixture()
def partner_adapter() -> PartnerAdapter:
    return PartnerAdapter()


@pytest.fixture()
def publication_adapter() -> PublicationAdapter:
    return PublicationAdapter()


@pytest.fixture()
def reference_data(db_session: Session) -> None:
    """Seed geography, medical taxonomy and services."""
    db_session.add_all(
        [
            Country(id=1, name="Russia", alias="russia"),
            Country(id=2, name="Georgia", alias="georgia"),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            Region(id=10, name="Krasnodar Krai", alias="krasnodar", country_id=1),
            Region(id=20, name="Imereti", alias="imereti", country_id=2),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            City(id=100, name="Sochi", alias="sochi", country_id=1, region_id=10),
            City(id=200, name="Tskaltubo", alias="tskaltubo", country_id=2, region_id=20),
            MedicalProfile(id=5, name="Cardiology", alias="cardiology"),
            MedicalProfile(id=6, name="Neurology", alias="neurology"),
            MedicalProfile(id=7, name="Gastroenterology", alias="gastro"),
            Therapy(id=1, name="Mud therapy", alias="mud"),
            Therapy(id=2, name="Balneotherapy", alias="balneo"),
            Disease(id=1, name="Hypertension", alias="hypertension"),
            Service(id=1, name="Pool", alias="pool"),
            Service(id=2, name="Wi-Fi", alias="wifi"),
        ]
    )
    db_session.commit()


@pytest.fixture()
def sanatorium(db_session: Session, reference_data: None) -> SanatoriumObject:
    """Object #33 with three stars and one medical profile."""
    obj = SanatoriumObject(
        id=33,
        title="Sanatorium Rus",
        alias="rus",
        description="Sea view",
        stars=3,
        country_id=1,
        region_id=10,
        city_id=100,
    )
    obj.medical_profiles = [db_session.get(MedicalProfile, 5)]
    db_session.add(obj)
    db_session.commit()
    return obj


@pytest.fixture()
def partner(db_session: Session) -> Partner:
    """Partner #1 with e-mail a@x.com."""
    partner = Partner(
        id=1,
        alias="health-tour",
        organisation_short_name="Health Tour",
        organisation_full_name="Health Tour LLC",
        manager_name="Ivan Petrov",
        email="a@x.com",
        telephones=["+7 900 000 00 00"],
    )
    db_session.add(partner)
    db_session.commit()
    return partner


@pytest.fixture()
def publication(db_session: Session, partner: Partner, reference_data: None) -> Publication:
    """Publication #10 tagged with medical profiles 5 and 7."""
    publication = Publication(
        id=10,
        partner_id=partner.id,
        title="Spa season",
        alias="spa-season",
        author="Editorial",
        description="Best resorts of the season",
    )
    publication.medical_profiles = [
        db_session.get(MedicalProfile, 5),
        db_session.get(MedicalProfile, 7),
    ]
    db_session.add(publication)
    db_session.commit()
    return publication
