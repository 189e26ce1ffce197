"""API endpoint modules for version 1."""

from .account import router as account_router
from .moderation import router as moderation_router
from .public import router as public_router

__all__ = [
    "account_router",
    "moderation_router",
    "public_router",
]
