"""Store document Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from marketplace.domain.enums import DocumentStatus
from marketplace.schemas.common import CamelModel


class StoreDocumentOut(CamelModel):
    id: str
    owner_vendor_id: str
    document_type: str
    file_url: str
    status: DocumentStatus
    reason: str | None = None
    created_at: datetime
    updated_at: datetime


class DocumentOwnerOut(CamelModel):
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    mobile: str | None = None


class StoreDocumentWithOwnerOut(StoreDocumentOut):
    owner: DocumentOwnerOut


# ---------------------------------------------------------------------------
# Vendor uploads
# ---------------------------------------------------------------------------

class DocumentUpload(CamelModel):
    # Either may be blank; blank entries are dropped by the service
    document_type: str | None = None
    file_url: str | None = None


class DocumentUploadRequest(CamelModel):
    documents: list[DocumentUpload] = Field(default_factory=list)


class DocumentUploadResult(CamelModel):
    store_id: str
    documents: list[StoreDocumentOut]


# ---------------------------------------------------------------------------
# Admin status updates - statuses stay raw strings here and are parsed by the
# service so a bad entry rejects the whole batch with INVALID_ARGUMENT.
# ---------------------------------------------------------------------------

class DocumentStatusChange(CamelModel):
    status: str
    reason: str | None = None


class DocumentStatusItem(CamelModel):
    id: str | None = None
    status: str | None = None


class BulkDocumentStatusChange(CamelModel):
    updates: list[DocumentStatusItem] = Field(default_factory=list)
