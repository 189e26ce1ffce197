"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """One page of a back-office list."""

    page: int
    rows_per_page: int = Field(..., alias="rowsPerPage")
    total: int
    items: list[dict[str, Any]]

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by write endpoints."""

    message: str
