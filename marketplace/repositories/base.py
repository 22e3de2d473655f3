"""Generic async repository over soft-deletable marketplace tables."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """CRUD helpers shared by the table repositories.

    Rows with ``deleted_at`` set are invisible to every read here. Reads use
    ``populate_existing`` so objects already in the session are refreshed from
    the row; sessions run with autoflush off, so callers flush before re-reading.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _base_query(self) -> Select:
        q = select(self.model)
        if hasattr(self.model, "deleted_at"):
            q = q.where(self.model.deleted_at.is_(None))
        return q

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query()
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def paginate(
        self,
        q: Select | None = None,
        *,
        offset: int = 0,
        limit: int = 20,
        newest_first: bool = True,
    ) -> tuple[list[ModelT], int]:
        """Return (page of items, total matching) for ``q`` (default: all live rows)."""
        q = q if q is not None else self._base_query()

        total = (
            await self._session.execute(select(func.count()).select_from(q.subquery()))
        ).scalar_one()

        created = self.model.created_at
        q = q.order_by(created.desc() if newest_first else created.asc())
        items = (await self._session.execute(q.offset(offset).limit(limit))).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **values: Any) -> ModelT:
        instance = self.model(**values)
        self._session.add(instance)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **values: Any) -> ModelT | None:
        values.pop("id", None)
        values.setdefault("updated_at", datetime.now(timezone.utc))
        await self._session.execute(
            update(self.model).where(self.model.id == entity_id).values(**values)
        )
        await self._session.flush()
        return await self.get_by_id(entity_id)

    async def soft_delete(self, entity_id: str) -> bool:
        """Mark a live row deleted; False when it is missing or already deleted."""
        result = await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()
        return result.rowcount > 0
