"""Public read endpoints; only approved values are exposed."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from resort_catalog.api.v1.dependencies import AdapterDep, ViewsDep

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/{kind}/{entity_id}")
async def get_public_entity(
    entity_id: int,
    adapter: AdapterDep,
    views: ViewsDep,
) -> dict[str, Any]:
    """Return the public projection of an entity."""
    return views.public(adapter, entity_id)
