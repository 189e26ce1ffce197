# src/resort_catalog/schemas/moderation.py
"""Moderation-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from resort_catalog.db.time import ensure_utc
from resort_catalog.models.moderation import EntityType, ModerationAction, ModerationStatus


class ModerationDecision(BaseModel):
    """Moderator's verdict on one field (or one gallery image)."""

    approve: StrictBool = Field(..., description="True to publish the pending value")
    message: str | None = Field(None, description="Rejection reason; required when rejecting")

    model_config = ConfigDict(extra="forbid")


class FieldModerationView(BaseModel):
    """Staff-facing state of one moderated field."""

    status: ModerationStatus
    value: Any = None
    message: str | None = None
    updated_at: datetime | None = None


class ModerationEventResponse(BaseModel):
    """Audit trail entry returned by the history endpoint."""

    id: int
    entity_type: EntityType
    entity_id: int
    field_name: str
    action: ModerationAction
    value: Any = None
    message: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)
