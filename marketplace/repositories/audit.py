"""Audit trail repository (append-only)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.domain.audit import AuditAction, AuditEntity, AuditTrail


class AuditRepository:
    """Rows are never updated or deleted, so this does not extend BaseRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def record(
        self,
        action: AuditAction,
        entity_type: AuditEntity,
        entity_id: str | None,
        *,
        old_value: Any = None,
        new_value: Any = None,
        description: str | None = None,
        actor_id: str | None = None,
    ) -> AuditTrail:
        """Stage a row; it is flushed and committed with the caller's transaction."""
        row = AuditTrail(
            actor_id=actor_id,
            action=AuditAction(action).value,
            entity_type=AuditEntity(entity_type).value,
            entity_id=entity_id,
            old_value=old_value,
            new_value=new_value,
            description=description,
        )
        self._session.add(row)
        return row

    async def list_for_entity(
        self, entity_type: AuditEntity, entity_id: str
    ) -> list[AuditTrail]:
        """Oldest first."""
        result = await self._session.execute(
            select(AuditTrail)
            .where(AuditTrail.entity_type == AuditEntity(entity_type).value)
            .where(AuditTrail.entity_id == entity_id)
            .order_by(AuditTrail.created_at.asc())
        )
        return list(result.scalars().all())
