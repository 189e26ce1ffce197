"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from resort_catalog.db.session import get_db
from resort_catalog.services.adapters import EntityAdapter, EntityKind, get_adapter
from resort_catalog.services.moderation_engine import ModerationEngine
from resort_catalog.services.moderation_views import ModerationViewAssembler

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_entity_adapter(kind: EntityKind) -> EntityAdapter:
    """Resolve the `{kind}` path segment to its moderation adapter."""
    return get_adapter(kind)


def get_engine(db: SessionDep) -> ModerationEngine:
    return ModerationEngine(db)


def get_views(db: SessionDep) -> ModerationViewAssembler:
    return ModerationViewAssembler(db)


AdapterDep = Annotated[EntityAdapter, Depends(get_entity_adapter)]
EngineDep = Annotated[ModerationEngine, Depends(get_engine)]
ViewsDep = Annotated[ModerationViewAssembler, Depends(get_views)]
