"""Admin vendor-verification router - review queue, document moderation, decisions.

Authentication happens upstream; the gateway forwards the acting admin's id in
``X-Admin-Id`` and it is recorded on the audit trail.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.pagination import PaginationParams
from marketplace.core.response import (
    ActionResult,
    DataResponse,
    ListResponse,
    envelope,
    paginated,
)
from marketplace.db.base import get_db
from marketplace.schemas.common import ReasonBody
from marketplace.schemas.store_document import (
    BulkDocumentStatusChange,
    DocumentOwnerOut,
    DocumentStatusChange,
    StoreDocumentOut,
    StoreDocumentWithOwnerOut,
)
from marketplace.schemas.verification import VendorDetailResponse, VendorQueueResponse
from marketplace.services.store_document import StoreDocumentService
from marketplace.services.verification import VerificationService

router = APIRouter(prefix="/admin", tags=["Admin Verification"])


# ------------------------------------------------------------------
# Helper - instantiate service with session + acting admin
# ------------------------------------------------------------------

def _svc(session: AsyncSession, admin_id: str | None = None) -> VerificationService:
    return VerificationService(session, actor_id=admin_id)


def _documents_out(documents) -> list[StoreDocumentOut]:
    return [StoreDocumentOut.model_validate(d) for d in documents]


# ------------------------------------------------------------------
# Review queue
# ------------------------------------------------------------------

@router.get("/verification/unverified-vendors", response_model=VendorQueueResponse)
async def list_unverified_vendors(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=200),
    search: Optional[str] = Query(default=None),
    filter_status: Optional[str] = Query(
        default=None, alias="status",
        description="VERIFIED | APPROVED | UNVERIFIED | PENDING | FORM_APPROVED | REJECTED",
    ),
    document_status: Optional[str] = Query(
        default=None, alias="documentStatus", description="PENDING | APPROVED | REJECTED",
    ),
    session: AsyncSession = Depends(get_db),
):
    """Vendors awaiting review, with stats computed over the whole queue."""
    return await _svc(session).list_unverified_vendors(
        page=page,
        limit=limit,
        search=search,
        status=filter_status,
        document_status=document_status,
    )


# ------------------------------------------------------------------
# Decisions
# ------------------------------------------------------------------

@router.post("/verification/{user_id}/reject", response_model=DataResponse[ActionResult])
async def reject_vendor_request(
    user_id: str,
    body: ReasonBody | None = None,
    admin_id: Optional[str] = Header(default=None, alias="X-Admin-Id"),
    session: AsyncSession = Depends(get_db),
):
    result = await _svc(session, admin_id).reject_vendor_request(
        user_id, body.reason if body else None
    )
    return envelope(ActionResult(**result), "Vendor request rejected successfully")


@router.post("/verification/{user_id}/approve-form", response_model=DataResponse[ActionResult])
async def approve_vendor_form(
    user_id: str,
    admin_id: Optional[str] = Header(default=None, alias="X-Admin-Id"),
    session: AsyncSession = Depends(get_db),
):
    result = await _svc(session, admin_id).approve_vendor_form(user_id)
    return envelope(ActionResult(**result), "Vendor form approved successfully")


@router.post("/verification/{user_id}/approve-final", response_model=DataResponse[ActionResult])
async def approve_vendor_final(
    user_id: str,
    body: ReasonBody | None = None,
    admin_id: Optional[str] = Header(default=None, alias="X-Admin-Id"),
    session: AsyncSession = Depends(get_db),
):
    result = await _svc(session, admin_id).approve_vendor_final(
        user_id, body.reason if body else None
    )
    return envelope(ActionResult(**result), "Vendor approved and store verified successfully")


# ------------------------------------------------------------------
# Per-vendor documents
# ------------------------------------------------------------------

@router.get("/users/{user_id}/documents", response_model=DataResponse[list[StoreDocumentOut]])
async def get_user_documents(
    user_id: str,
    session: AsyncSession = Depends(get_db),
):
    documents = await _svc(session).get_user_documents(user_id)
    return envelope(_documents_out(documents))


@router.patch("/users/{user_id}/documents/status", response_model=DataResponse[list[StoreDocumentOut]])
async def update_user_documents_status(
    user_id: str,
    body: BulkDocumentStatusChange,
    admin_id: Optional[str] = Header(default=None, alias="X-Admin-Id"),
    session: AsyncSession = Depends(get_db),
):
    """Bulk status change; ids not owned by the vendor are ignored."""
    documents = await _svc(session, admin_id).update_documents_status(user_id, body.updates)
    return envelope(_documents_out(documents), "User documents status updated successfully")


@router.patch(
    "/users/{user_id}/documents/{document_id}/status",
    response_model=DataResponse[list[StoreDocumentOut]],
)
async def update_user_document_status(
    user_id: str,
    document_id: str,
    body: DocumentStatusChange,
    admin_id: Optional[str] = Header(default=None, alias="X-Admin-Id"),
    session: AsyncSession = Depends(get_db),
):
    documents = await _svc(session, admin_id).update_document_status(
        user_id, document_id, body.status, body.reason
    )
    return envelope(_documents_out(documents), "User document status updated successfully")


@router.get("/users/{user_id}/detail", response_model=DataResponse[VendorDetailResponse])
async def get_user_detail(
    user_id: str,
    session: AsyncSession = Depends(get_db),
):
    return envelope(await _svc(session).get_user_detail(user_id))


# ------------------------------------------------------------------
# All documents
# ------------------------------------------------------------------

@router.get("/store-documents", response_model=ListResponse[StoreDocumentWithOwnerOut])
async def list_store_documents(
    search: Optional[str] = Query(default=None),
    document_type: Optional[str] = Query(default=None, alias="documentType"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    rows, total = await StoreDocumentService(session).list_all_documents(
        pagination, search=search, document_type=document_type
    )
    items = [
        StoreDocumentWithOwnerOut(
            **StoreDocumentOut.model_validate(doc).model_dump(),
            owner=DocumentOwnerOut.model_validate(owner),
        )
        for doc, owner in rows
    ]
    return paginated(items, total, pagination.page, pagination.limit)
