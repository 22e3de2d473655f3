"""Vendor self-service router - seller application and verification documents.

The caller's identity is resolved upstream; ``user_id`` in the path is the
authenticated vendor.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.response import DataResponse, envelope
from marketplace.db.base import get_db
from marketplace.schemas.store_document import (
    DocumentUploadRequest,
    DocumentUploadResult,
    StoreDocumentOut,
)
from marketplace.schemas.vendor_request import (
    VendorRequestCreate,
    VendorRequestOut,
    VendorRequestStatusOut,
)
from marketplace.services.store_document import StoreDocumentService
from marketplace.services.vendor_request import VendorRequestService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


# ------------------------------------------------------------------
# Seller application
# ------------------------------------------------------------------

@router.post(
    "/{user_id}/request",
    response_model=DataResponse[VendorRequestOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_vendor_request(
    user_id: str,
    body: VendorRequestCreate,
    session: AsyncSession = Depends(get_db),
):
    result = await VendorRequestService(session).create_vendor_request(user_id, body)
    return envelope(result, "Vendor request created successfully")


@router.get("/{user_id}/request", response_model=DataResponse[VendorRequestStatusOut])
async def get_vendor_request_status(
    user_id: str,
    session: AsyncSession = Depends(get_db),
):
    return envelope(await VendorRequestService(session).get_vendor_request_status(user_id))


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------

@router.post(
    "/{user_id}/documents",
    response_model=DataResponse[DocumentUploadResult],
    status_code=status.HTTP_201_CREATED,
)
async def upload_documents(
    user_id: str,
    body: DocumentUploadRequest,
    session: AsyncSession = Depends(get_db),
):
    result = await StoreDocumentService(session).upload_documents(user_id, body.documents)
    return envelope(result, "Documents uploaded successfully")


@router.get("/{user_id}/documents", response_model=DataResponse[list[StoreDocumentOut]])
async def list_documents(
    user_id: str,
    session: AsyncSession = Depends(get_db),
):
    documents = await StoreDocumentService(session).list_documents(user_id)
    return envelope([StoreDocumentOut.model_validate(d) for d in documents])


@router.get("/{user_id}/documents/{document_id}", response_model=DataResponse[StoreDocumentOut])
async def get_document(
    user_id: str,
    document_id: str,
    session: AsyncSession = Depends(get_db),
):
    document = await StoreDocumentService(session).get_document(user_id, document_id)
    return envelope(StoreDocumentOut.model_validate(document))


@router.delete("/{user_id}/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    user_id: str,
    document_id: str,
    session: AsyncSession = Depends(get_db),
):
    await StoreDocumentService(session).delete_document(user_id, document_id)
