"""Store document repository - every query is scoped by the owning vendor."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import func, or_, select, update

from marketplace.domain.enums import DocumentStatus
from marketplace.domain.store_document import StoreDocument
from marketplace.domain.user import User
from marketplace.repositories.base import BaseRepository


class StoreDocumentRepository(BaseRepository[StoreDocument]):
    model = StoreDocument

    def _owned(self, vendor_id: str):
        return self._base_query().where(StoreDocument.owner_vendor_id == vendor_id)

    async def list_for_vendor(self, vendor_id: str) -> list[StoreDocument]:
        result = await self._session.execute(
            self._owned(vendor_id)
            .order_by(StoreDocument.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_for_vendors(self, vendor_ids: Iterable[str]) -> dict[str, list[StoreDocument]]:
        """Group the live documents of several vendors by owner, newest first."""
        ids = list(vendor_ids)
        grouped: dict[str, list[StoreDocument]] = {vid: [] for vid in ids}
        if not ids:
            return grouped
        result = await self._session.execute(
            self._base_query()
            .where(StoreDocument.owner_vendor_id.in_(ids))
            .order_by(StoreDocument.created_at.desc())
            .execution_options(populate_existing=True)
        )
        for doc in result.scalars().all():
            grouped[doc.owner_vendor_id].append(doc)
        return grouped

    async def get_owned(self, vendor_id: str, document_id: str) -> StoreDocument | None:
        result = await self._session.execute(
            self._owned(vendor_id)
            .where(StoreDocument.id == document_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def set_status_if_owned(
        self, vendor_id: str, document_id: str, status: DocumentStatus
    ) -> int:
        """Conditional update; returns the number of rows touched (0 when not owned)."""
        result = await self._session.execute(
            update(StoreDocument)
            .where(StoreDocument.id == document_id)
            .where(StoreDocument.owner_vendor_id == vendor_id)
            .where(StoreDocument.deleted_at.is_(None))
            .values(status=status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def set_status_for_vendor(self, vendor_id: str, status: DocumentStatus) -> int:
        result = await self._session.execute(
            update(StoreDocument)
            .where(StoreDocument.owner_vendor_id == vendor_id)
            .where(StoreDocument.deleted_at.is_(None))
            .values(status=status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def search_with_owner(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
        document_type: str | None = None,
    ) -> tuple[list[tuple[StoreDocument, User]], int]:
        """Admin listing: every live document joined to its owner."""
        q = (
            select(StoreDocument, User)
            .join(User, User.id == StoreDocument.owner_vendor_id)
            .where(StoreDocument.deleted_at.is_(None))
        )
        if search:
            pattern = f"%{search.strip().lower()}%"
            q = q.where(
                or_(
                    func.lower(StoreDocument.document_type).like(pattern),
                    func.lower(StoreDocument.file_url).like(pattern),
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                    func.lower(User.email).like(pattern),
                )
            )
        if document_type:
            q = q.where(
                func.lower(StoreDocument.document_type).like(f"%{document_type.strip().lower()}%")
            )

        total = (
            await self._session.execute(select(func.count()).select_from(q.subquery()))
        ).scalar_one()
        rows = await self._session.execute(
            q.order_by(StoreDocument.created_at.desc()).offset(offset).limit(limit)
        )
        return [(doc, owner) for doc, owner in rows.all()], total
