# src/resort_catalog/models/reference.py
"""Shared columns for catalog reference tables."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column


class ReferenceMixin:
    """Id/name/alias triple used by taxonomy and geography tables."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    alias: Mapped[str | None] = mapped_column(Text, nullable=True)

    def summary(self) -> dict[str, Any]:
        """Return the compact representation used in public payloads."""
        return {"id": self.id, "name": self.name, "alias": self.alias}
