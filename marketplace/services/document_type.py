"""Document type catalog service."""


from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from marketplace.core.pagination import PaginationParams
from marketplace.domain.document_type import DocumentType
from marketplace.repositories.document_type import DocumentTypeRepository
from marketplace.schemas.document_type import DocumentTypeCreate, DocumentTypeUpdate


class DocumentTypeService:
    def __init__(self, session: AsyncSession):
        self._repo = DocumentTypeRepository(session)

    async def list_document_types(self, pagination: PaginationParams, search: str | None = None):
        return await self._repo.search(
            offset=pagination.offset, limit=pagination.limit, search=search
        )

    async def get_document_type(self, type_id: str) -> DocumentType:
        item = await self._repo.get_by_id(type_id)
        if not item:
            raise NotFoundError("Document type", type_id)
        return item

    async def create_document_type(self, data: DocumentTypeCreate) -> DocumentType:
        name = await self._available_name(data.name)
        return await self._repo.create(name=name)

    async def update_document_type(self, type_id: str, data: DocumentTypeUpdate) -> DocumentType:
        current = await self.get_document_type(type_id)  # raises 404 if missing
        if data.name is None:
            return current
        name = await self._available_name(data.name, exclude_id=type_id)
        updated = await self._repo.update(type_id, name=name)
        return updated  # type: ignore[return-value]

    async def delete_document_type(self, type_id: str) -> None:
        deleted = await self._repo.soft_delete(type_id)
        if not deleted:
            raise NotFoundError("Document type", type_id)

    async def _available_name(self, raw: str, exclude_id: str | None = None) -> str:
        name = (raw or "").strip()
        if not name:
            raise InvalidArgumentError("Name is required")
        existing = await self._repo.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ConflictError("Document type already exists")
        return name
