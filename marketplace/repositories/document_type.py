"""Document type repository."""


from sqlalchemy import func

from marketplace.domain.document_type import DocumentType
from marketplace.repositories.base import BaseRepository


class DocumentTypeRepository(BaseRepository[DocumentType]):
    model = DocumentType

    async def get_by_name(self, name: str) -> DocumentType | None:
        result = await self._session.execute(
            self._base_query().where(func.lower(DocumentType.name) == name.strip().lower())
        )
        return result.scalars().first()

    async def search(self, *, offset: int, limit: int, search: str | None = None):
        q = self._base_query()
        if search:
            q = q.where(func.lower(DocumentType.name).like(f"%{search.strip().lower()}%"))
        return await self.paginate(q, offset=offset, limit=limit)
