"""Back-office moderation endpoints."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Body, Query

from resort_catalog.api.v1.dependencies import AdapterDep, EngineDep, SessionDep, ViewsDep
from resort_catalog.core.exceptions import ValidationError
from resort_catalog.models.moderation import ModerationEvent
from resort_catalog.schemas.common import MessageResponse, Page
from resort_catalog.schemas.moderation import ModerationEventResponse
from resort_catalog.services.moderation_queue import pending_list

router = APIRouter(prefix="/admin/moderation", tags=["moderation"])


def _parse_sorting(raw: str | None) -> dict[str, str] | None:
    """Decode the `sorting` query parameter (a JSON object)."""
    if raw is None or not raw.strip():
        return None
    try:
        sorting = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("sorting must be a JSON object", field="sorting") from exc
    if not isinstance(sorting, dict):
        raise ValidationError("sorting must be a JSON object", field="sorting")
    return sorting


@router.get("/{kind}", response_model=Page)
async def get_pending_list(
    adapter: AdapterDep,
    db: SessionDep,
    page: int = Query(1),
    rows_per_page: int | None = Query(None, alias="rowsPerPage"),
    search_key: str | None = Query(None, alias="searchKey"),
    sorting: str | None = Query(None, description='JSON object such as {"title": "asc"}'),
) -> Page:
    """List entities with at least one field or image awaiting moderation."""
    return pending_list(
        db,
        adapter,
        page=page,
        rows_per_page=rows_per_page,
        search_key=search_key,
        sorting=_parse_sorting(sorting),
    )


@router.get("/{kind}/{entity_id}")
async def get_pending_detail(
    entity_id: int,
    adapter: AdapterDep,
    views: ViewsDep,
) -> dict[str, Any]:
    """Return the entity with its public values and the moderation map."""
    return views.detail(adapter, entity_id)


@router.put("/{kind}/{entity_id}", response_model=MessageResponse)
async def moderate_entity(
    entity_id: int,
    adapter: AdapterDep,
    engine: EngineDep,
    payload: dict[str, Any] = Body(..., examples=[{"stars": {"approve": True}}]),
) -> MessageResponse:
    """Approve or reject pending fields; the whole batch is validated first."""
    engine.moderate(adapter, entity_id, payload)
    return MessageResponse(message="moderated")


@router.put("/{kind}/{entity_id}/images/{image_id}", response_model=MessageResponse)
async def moderate_image(
    entity_id: int,
    image_id: int,
    adapter: AdapterDep,
    engine: EngineDep,
    payload: dict[str, Any] = Body(...),
) -> MessageResponse:
    """Approve or reject publication of one gallery image."""
    engine.moderate_image(adapter, entity_id, image_id, payload)
    return MessageResponse(message="moderated")


@router.get("/{kind}/{entity_id}/history", response_model=list[ModerationEventResponse])
async def get_moderation_history(
    entity_id: int,
    adapter: AdapterDep,
    views: ViewsDep,
    limit: int | None = Query(None, ge=1, le=500),
) -> list[ModerationEvent]:
    """Return the moderation audit trail of an entity and its gallery."""
    return views.history(adapter, entity_id, limit)
