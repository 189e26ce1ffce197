# src/resort_catalog/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import account_router, moderation_router, public_router

__all__ = [
    "account_router",
    "moderation_router",
    "public_router",
]
