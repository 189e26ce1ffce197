"""Back-office queue of entities awaiting moderation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from resort_catalog.core.exceptions import ValidationError
from resort_catalog.core.settings import settings
from resort_catalog.models.moderation import ModerationStatus
from resort_catalog.repositories.moderation_repo import ModerationRepository
from resort_catalog.schemas.common import Page
from resort_catalog.services.adapters import EntityAdapter

_DIRECTIONS = ("asc", "desc")


def pending_list(
    db: Session,
    adapter: EntityAdapter,
    *,
    page: int = 1,
    rows_per_page: int | None = None,
    search_key: str | None = None,
    sorting: Mapping[str, str] | None = None,
) -> Page:
    """Return one page of entities with a pending field or a pending image.

    Args:
        db: Database session
        adapter: Adapter of the entity family
        page: 1-based page number
        rows_per_page: Page size; capped by settings
        search_key: Case-insensitive substring matched against the search columns
        sorting: `{column: "asc" | "desc"}` restricted to the sortable columns

    Returns:
        Page whose items are entity summaries with `pending_fields` and `pending_images`

    Raises:
        ValidationError: If paging or sorting parameters are invalid
    """
    if page < 1:
        raise ValidationError("page must be at least 1", field="page")
    if rows_per_page is None:
        rows_per_page = settings.moderation_default_rows_per_page
    if rows_per_page < 1:
        raise ValidationError("rowsPerPage must be at least 1", field="rowsPerPage")
    rows_per_page = min(rows_per_page, settings.moderation_max_rows_per_page)

    model = adapter.model
    repo = ModerationRepository(db)

    waiting = [model.id.in_(repo.pending_entity_ids(adapter.entity_type))]
    if adapter.gallery is not None:
        waiting.append(model.id.in_(adapter.gallery.pending_owner_ids()))
    stmt = adapter.base_query().where(or_(*waiting))

    if search_key and search_key.strip():
        needle = search_key.strip().lower()
        stmt = stmt.where(
            or_(
                *(
                    func.lower(getattr(model, column)).contains(needle, autoescape=True)
                    for column in adapter.search_columns
                )
            )
        )

    total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0

    stmt = stmt.order_by(*_order_by(adapter, sorting))
    rows = list(db.scalars(stmt.offset((page - 1) * rows_per_page).limit(rows_per_page)))

    ids = [row.id for row in rows]
    records = repo.map_for_entities(adapter.entity_type, ids)
    image_counts = adapter.gallery.pending_counts(db, ids) if adapter.gallery is not None else {}

    items = []
    for row in rows:
        item = adapter.summary(row)
        item["pending_fields"] = sorted(
            name
            for name, record in records.get(row.id, {}).items()
            if record.status == ModerationStatus.PENDING
        )
        item["pending_images"] = image_counts.get(row.id, 0)
        items.append(item)

    return Page(page=page, rows_per_page=rows_per_page, total=total, items=items)


def _order_by(adapter: EntityAdapter, sorting: Mapping[str, str] | None) -> list[Any]:
    clauses = []
    for column, direction in (sorting or {}).items():
        if column not in adapter.sortable_columns:
            raise ValidationError(f"Sorting by '{column}' is not supported", field="sorting")
        if not isinstance(direction, str) or direction.lower() not in _DIRECTIONS:
            raise ValidationError(f"Sorting direction for '{column}' must be asc or desc", field="sorting")
        attr = getattr(adapter.model, column)
        clauses.append(attr.desc() if direction.lower() == "desc" else attr.asc())
    if not sorting or "id" not in sorting:
        clauses.append(adapter.model.id.asc())
    return clauses
