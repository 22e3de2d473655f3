"""Document type catalog router (admin)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.pagination import PaginationParams
from marketplace.core.response import DataResponse, ListResponse, envelope, paginated
from marketplace.db.base import get_db
from marketplace.schemas.document_type import DocumentTypeCreate, DocumentTypeOut, DocumentTypeUpdate
from marketplace.services.document_type import DocumentTypeService

router = APIRouter(prefix="/admin/document-types", tags=["Document Types"])


@router.get("", response_model=ListResponse[DocumentTypeOut])
async def list_document_types(
    search: Optional[str] = Query(default=None, description="Case-insensitive name filter"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    items, total = await DocumentTypeService(session).list_document_types(pagination, search)
    return paginated(
        [DocumentTypeOut.model_validate(t) for t in items],
        total, pagination.page, pagination.limit,
    )


@router.post("", response_model=DataResponse[DocumentTypeOut], status_code=status.HTTP_201_CREATED)
async def create_document_type(
    body: DocumentTypeCreate,
    session: AsyncSession = Depends(get_db),
):
    item = await DocumentTypeService(session).create_document_type(body)
    return envelope(DocumentTypeOut.model_validate(item), "Document type created")


@router.put("/{type_id}", response_model=DataResponse[DocumentTypeOut])
async def update_document_type(
    type_id: str,
    body: DocumentTypeUpdate,
    session: AsyncSession = Depends(get_db),
):
    item = await DocumentTypeService(session).update_document_type(type_id, body)
    return envelope(DocumentTypeOut.model_validate(item), "Document type updated")


@router.delete("/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document_type(
    type_id: str,
    session: AsyncSession = Depends(get_db),
):
    await DocumentTypeService(session).delete_document_type(type_id)
