"""Database engine, session factory and time helpers."""

from .session import Base, SessionLocal, build_engine, engine, get_db
from .time import ensure_utc, utcnow

__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "ensure_utc", "utcnow"]
