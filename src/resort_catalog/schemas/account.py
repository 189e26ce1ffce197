# src/resort_catalog/schemas/account.py
"""Schemas for owner-account edits of moderated entities."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .moderation import FieldModerationView


class ImageCreate(BaseModel):
    """Reference to already stored media being added to a gallery."""

    url: str = Field(..., min_length=1, max_length=2048)
    description: str | None = Field(None, max_length=1000)


class ImageResponse(BaseModel):
    """Gallery image together with its moderation state."""

    id: int
    url: str
    description: str | None
    is_published: bool
    moderation: FieldModerationView


class EditResponse(BaseModel):
    """Result of an owner edit: acknowledgement plus the moderation projection."""

    message: str
    moderation: dict[str, FieldModerationView]
