# src/resort_catalog/services/moderation_engine.py
"""Field-level moderation transitions.

Owners submit values, moderators approve or reject them. A submitted value
waits in `moderated_field.pending_value` while the entity keeps showing the
previously approved value; approval copies the pending value onto the
entity. Every transition is written to the audit trail in the same unit of
work.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import pydantic
from sqlalchemy.orm import Session

from resort_catalog.core.exceptions import ModerationError, UnsupportedFieldError, ValidationError
from resort_catalog.models.moderation import ModeratedField, ModerationAction, ModerationStatus
from resort_catalog.repositories.moderation_repo import ModerationRepository
from resort_catalog.schemas.moderation import ModerationDecision
from resort_catalog.services.adapters import PUBLISHED_FIELD, EntityAdapter
from resort_catalog.services.moderation_registry import FieldSpec

logger = logging.getLogger(__name__)


class ModerationEngine:
    """Applies submit/approve/reject transitions to moderated fields."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = ModerationRepository(session)
        self._depth = 0

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        """Commit once when the outermost block exits, roll back on any error.

        Blocks nest: transitions called from inside `moderate()` join the
        batch's transaction instead of committing on their own.
        """
        self._depth += 1
        try:
            yield self.session
            if self._depth == 1:
                self.session.commit()
        except Exception:
            if self._depth == 1:
                self.session.rollback()
            raise
        finally:
            self._depth -= 1

    # Single-field transitions

    def submit(self, adapter: EntityAdapter, entity_id: int, field_name: str, value: Any) -> ModeratedField:
        """Store `value` as the pending value of a field.

        Allowed from any state; clears a previous rejection message and
        leaves the public value untouched.
        """
        spec = adapter.registry.get(field_name)
        entity = adapter.get_entity(self.session, entity_id)
        coerced = adapter.validate_value(self.session, spec, value)
        with self.unit_of_work():
            return self._submit(adapter, entity, spec, coerced)

    def approve(self, adapter: EntityAdapter, entity_id: int, field_name: str) -> ModeratedField | None:
        """Publish the pending value of a field.

        Returns None when the field was never submitted; approving it is a
        no-op.
        """
        spec = adapter.registry.get(field_name)
        entity = adapter.get_entity(self.session, entity_id)
        with self.unit_of_work():
            return self._approve(adapter, entity, spec)

    def reject(
        self,
        adapter: EntityAdapter,
        entity_id: int,
        field_name: str,
        message: str | None,
    ) -> ModeratedField | None:
        """Refuse the pending value of a field with a mandatory reason.

        Raises:
            ValidationError: If `message` is empty.
        """
        spec = adapter.registry.get(field_name)
        reason = _require_reason(field_name, message)
        entity = adapter.get_entity(self.session, entity_id)
        with self.unit_of_work():
            return self._reject(adapter, entity, spec, reason)

    # Batches

    def moderate(self, adapter: EntityAdapter, entity_id: int, payload: Mapping[str, Any]) -> list[ModeratedField]:
        """Apply a moderator's decisions for several fields of one entity.

        Every decision is validated before any transition runs; the batch is
        committed as one transaction.

        Args:
            adapter: Adapter of the entity family.
            entity_id: Entity being moderated.
            payload: `{field_name: {"approve": bool, "message": str | None}}`.

        Returns:
            The moderation rows touched by the batch.

        Raises:
            NotFoundError: If the entity does not exist.
            UnsupportedFieldError: If a key is not a moderated field.
            ValidationError: If a decision is malformed or a rejection has no reason.
        """
        entity = adapter.get_entity(self.session, entity_id)
        try:
            decisions = [
                (adapter.registry.get(name), _parse_decision(name, raw))
                for name, raw in payload.items()
            ]
        except (UnsupportedFieldError, ValidationError) as exc:
            logger.warning(
                "Rejected moderation batch for %s #%s: %s",
                adapter.entity_type.value,
                entity_id,
                exc,
            )
            raise

        touched: list[ModeratedField] = []
        with self.unit_of_work():
            for spec, decision in decisions:
                record = self._decide(adapter, entity, spec, decision)
                if record is not None:
                    touched.append(record)
        return touched

    def moderate_image(
        self,
        adapter: EntityAdapter,
        owner_id: int,
        image_id: int,
        payload: Any,
    ) -> ModeratedField | None:
        """Approve or reject publication of one gallery image."""
        gallery = _gallery_of(adapter)
        adapter.get_entity(self.session, owner_id)
        image = gallery.get_owned(self.session, owner_id, image_id)
        spec = gallery.registry.get(PUBLISHED_FIELD)
        try:
            decision = _parse_decision(PUBLISHED_FIELD, payload)
        except ValidationError as exc:
            logger.warning(
                "Rejected image moderation for %s #%s: %s",
                gallery.entity_type.value,
                image_id,
                exc,
            )
            raise
        with self.unit_of_work():
            return self._decide(gallery, image, spec, decision)

    # Owner side

    def edit(self, adapter: EntityAdapter, entity_id: int, changes: Mapping[str, Any]) -> Any:
        """Apply an owner edit.

        Moderated keys are submitted for review, directly editable keys are
        written at once. `None` values of moderated keys are skipped. The
        whole request is validated before anything is written.

        Raises:
            UnsupportedFieldError: If a key is neither moderated nor editable.
        """
        entity = adapter.get_entity(self.session, entity_id)
        submissions: list[tuple[FieldSpec, Any]] = []
        direct: list[tuple[FieldSpec, Any]] = []
        for name, value in changes.items():
            if name in adapter.registry:
                if value is None:
                    continue
                spec = adapter.registry.get(name)
                submissions.append((spec, adapter.validate_value(self.session, spec, value)))
            elif adapter.direct_fields is not None and name in adapter.direct_fields:
                spec = adapter.direct_fields.get(name)
                direct.append((spec, spec.coerce(value)))
            else:
                raise UnsupportedFieldError(adapter.entity_type.value, name)

        with self.unit_of_work():
            for spec, value in direct:
                setattr(entity, spec.attr, value)
            for spec, value in submissions:
                self._submit(adapter, entity, spec, value)
        return entity

    def add_image(self, adapter: EntityAdapter, owner_id: int, url: str, description: str | None) -> Any:
        """Attach an unpublished image and submit it for publication."""
        gallery = _gallery_of(adapter)
        adapter.get_entity(self.session, owner_id)
        spec = gallery.registry.get(PUBLISHED_FIELD)
        with self.unit_of_work():
            image = gallery.create(self.session, owner_id, url, description)
            self._submit(gallery, image, spec, True)
        return image

    # Internals

    def _decide(
        self,
        adapter: EntityAdapter,
        entity: Any,
        spec: FieldSpec,
        decision: ModerationDecision,
    ) -> ModeratedField | None:
        if decision.approve:
            return self._approve(adapter, entity, spec)
        return self._reject(adapter, entity, spec, decision.message or "")

    def _submit(self, adapter: EntityAdapter, entity: Any, spec: FieldSpec, value: Any) -> ModeratedField:
        record = self.repo.upsert(
            adapter.entity_type,
            entity.id,
            spec.name,
            status=ModerationStatus.PENDING,
            pending_value=value,
            message=None,
        )
        self.repo.record_event(
            adapter.entity_type,
            entity.id,
            spec.name,
            ModerationAction.SUBMITTED,
            value=value,
        )
        _log_transition(adapter, entity.id, spec, record.status)
        return record

    def _approve(self, adapter: EntityAdapter, entity: Any, spec: FieldSpec) -> ModeratedField | None:
        record = self.repo.get(adapter.entity_type, entity.id, spec.name)
        if record is None or record.status == ModerationStatus.APPROVED:
            return record
        value = record.pending_value
        adapter.write_public(self.session, entity, spec, value)
        record = self.repo.upsert(
            adapter.entity_type,
            entity.id,
            spec.name,
            status=ModerationStatus.APPROVED,
            pending_value=None,
            message=None,
        )
        self.repo.record_event(
            adapter.entity_type,
            entity.id,
            spec.name,
            ModerationAction.APPROVED,
            value=value,
        )
        _log_transition(adapter, entity.id, spec, record.status)
        return record

    def _reject(self, adapter: EntityAdapter, entity: Any, spec: FieldSpec, message: str) -> ModeratedField | None:
        record = self.repo.get(adapter.entity_type, entity.id, spec.name)
        if record is None:
            return None
        record = self.repo.upsert(
            adapter.entity_type,
            entity.id,
            spec.name,
            status=ModerationStatus.REJECTED,
            pending_value=record.pending_value,
            message=message,
        )
        self.repo.record_event(
            adapter.entity_type,
            entity.id,
            spec.name,
            ModerationAction.REJECTED,
            value=record.pending_value,
            message=message,
        )
        _log_transition(adapter, entity.id, spec, record.status)
        return record


def _parse_decision(field_name: str, raw: Any) -> ModerationDecision:
    """Validate one `{approve, message}` item of a moderation payload."""
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Invalid format of moderation decision for '{field_name}'", field=field_name)
    if "approve" not in raw:
        raise ValidationError(f"Missing 'approve' for '{field_name}'", field=field_name)
    try:
        decision = ModerationDecision.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(
            f"Invalid moderation decision for '{field_name}': {location} {first['msg']}".strip(),
            field=field_name,
        ) from exc
    if not decision.approve:
        decision.message = _require_reason(field_name, decision.message)
    return decision


def _require_reason(field_name: str, message: str | None) -> str:
    if message is None or not message.strip():
        raise ValidationError(f"Rejection reason required for '{field_name}'", field=field_name)
    return message.strip()


def _gallery_of(adapter: EntityAdapter) -> Any:
    if adapter.gallery is None:
        raise ModerationError(f"{adapter.label} has no gallery")
    return adapter.gallery


def _log_transition(adapter: EntityAdapter, entity_id: int, spec: FieldSpec, new_status: ModerationStatus) -> None:
    logger.info(
        "Moderation %s #%s field=%s -> %s",
        adapter.entity_type.value,
        entity_id,
        spec.name,
        new_status.value,
    )
