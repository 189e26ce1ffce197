# src/resort_catalog/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .account import EditResponse, ImageCreate, ImageResponse
from .common import MessageResponse, Page
from .moderation import FieldModerationView, ModerationDecision, ModerationEventResponse

__all__ = [
    "EditResponse", "ImageCreate", "ImageResponse",
    "MessageResponse", "Page",
    "FieldModerationView", "ModerationDecision", "ModerationEventResponse",
]
