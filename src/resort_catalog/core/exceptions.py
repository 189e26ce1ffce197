"""Domain exceptions raised by the moderation engine and its adapters."""

from __future__ import annotations


class ModerationError(RuntimeError):
    """Base exception for moderation failures.

    The API layer translates subclasses into HTTP responses; services only
    raise them.
    """


class ValidationError(ModerationError):
    """Raised when a moderation or submission payload is malformed.

    Attributes:
        field: Name of the offending field, when one can be identified.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnsupportedFieldError(ModerationError):
    """Raised when a field is not declared for the entity's adapter."""

    def __init__(self, entity_type: str, field: str) -> None:
        super().__init__(f"Field '{field}' is not defined for moderation of {entity_type}")
        self.entity_type = entity_type
        self.field = field


class NotFoundError(ModerationError):
    """Raised when an entity (or a referenced row) does not exist."""
