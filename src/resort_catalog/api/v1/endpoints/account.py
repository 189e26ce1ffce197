"""Owner-account endpoints that route edits through moderation."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, status

from resort_catalog.api.v1.dependencies import AdapterDep, EngineDep, ViewsDep
from resort_catalog.schemas.account import EditResponse, ImageCreate, ImageResponse

router = APIRouter(prefix="/account", tags=["account"])


@router.patch("/{kind}/{entity_id}", response_model=EditResponse)
async def edit_entity(
    entity_id: int,
    adapter: AdapterDep,
    engine: EngineDep,
    views: ViewsDep,
    changes: dict[str, Any] = Body(...),
) -> EditResponse:
    """Save an owner edit.

    Moderated fields become pending and stay hidden from the public until
    approved; plain attributes such as the title are saved immediately.
    """
    entity = engine.edit(adapter, entity_id, changes)
    return EditResponse(
        message="saved",
        moderation=views.moderation_projection(adapter, entity),
    )


@router.post(
    "/{kind}/{entity_id}/images",
    response_model=ImageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_image(
    entity_id: int,
    image_in: ImageCreate,
    adapter: AdapterDep,
    engine: EngineDep,
    views: ViewsDep,
) -> ImageResponse:
    """Attach an already stored image; it is published once approved."""
    image = engine.add_image(adapter, entity_id, image_in.url, image_in.description)
    return ImageResponse.model_validate(views.image_view(adapter.gallery, image))
