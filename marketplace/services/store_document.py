"""Vendor document uploads and the admin-wide document listing.

Files themselves are stored elsewhere; this service records the resulting
URLs. Status changes belong to :mod:`marketplace.services.verification`.
"""

import logging
import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.exceptions import InvalidArgumentError, NotFoundError
from marketplace.core.pagination import PaginationParams
from marketplace.domain.store_document import StoreDocument
from marketplace.repositories.store import StoreRepository
from marketplace.repositories.store_document import StoreDocumentRepository
from marketplace.repositories.user import UserRepository
from marketplace.schemas.store_document import DocumentUploadResult, StoreDocumentOut

logger = logging.getLogger(__name__)

# Upload forms sometimes send social links as "documents"; they belong on the profile
_SOCIAL_URL_TYPES = re.compile(r"^(facebook_url|instagram_url|youtube_url)$", re.IGNORECASE)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


class StoreDocumentService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._users = UserRepository(session)
        self._stores = StoreRepository(session)
        self._repo = StoreDocumentRepository(session)

    async def upload_documents(self, vendor_id: str, documents: Sequence[Any]) -> DocumentUploadResult:
        if not documents:
            raise InvalidArgumentError("Documents array is required")

        user = await self._users.get_by_id(vendor_id)
        if not user:
            raise NotFoundError("User", vendor_id)
        store = await self._stores.get_by_vendor(vendor_id)
        if not store:
            raise NotFoundError("Store for user", vendor_id)

        created = 0
        for item in documents:
            document_type = str(_field(item, "document_type") or "").strip()
            file_url = str(_field(item, "file_url") or "").strip()
            if not document_type or not file_url:
                continue
            if _SOCIAL_URL_TYPES.match(document_type):
                setattr(user, document_type.lower(), file_url)
                continue
            self._session.add(
                StoreDocument(
                    owner_vendor_id=vendor_id,
                    document_type=document_type,
                    file_url=file_url,
                )
            )
            created += 1
        await self._session.flush()

        logger.info("Vendor %s uploaded %d document(s)", vendor_id, created)
        current = await self._repo.list_for_vendor(vendor_id)
        return DocumentUploadResult(
            store_id=store.id,
            documents=[StoreDocumentOut.model_validate(d) for d in current],
        )

    async def list_documents(self, vendor_id: str) -> list[StoreDocument]:
        if not await self._users.get_by_id(vendor_id):
            raise NotFoundError("User", vendor_id)
        return await self._repo.list_for_vendor(vendor_id)

    async def get_document(self, vendor_id: str, document_id: str) -> StoreDocument:
        document = await self._repo.get_owned(vendor_id, document_id)
        if not document:
            raise NotFoundError("Store document", document_id)
        return document

    async def delete_document(self, vendor_id: str, document_id: str) -> None:
        _ = await self.get_document(vendor_id, document_id)  # raises 404 if missing or not owned
        await self._repo.soft_delete(document_id)

    async def list_all_documents(
        self,
        pagination: PaginationParams,
        search: str | None = None,
        document_type: str | None = None,
    ):
        return await self._repo.search_with_owner(
            offset=pagination.offset,
            limit=pagination.limit,
            search=search,
            document_type=document_type,
        )
