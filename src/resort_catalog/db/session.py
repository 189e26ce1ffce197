"""Engine and session factory for the catalog database."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from resort_catalog.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by catalog and moderation models."""


# Model modules register their tables on Base.metadata (used by alembic autogenerate).
import resort_catalog.models  # noqa: E402,F401


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections are shared across request threads."""
    kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    new_engine = create_engine(url, **kwargs)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; services commit their own unit of work."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
