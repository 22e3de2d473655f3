"""Admin verification queue and vendor detail schemas."""

from pydantic import Field

from marketplace.core.pagination import PageInfo
from marketplace.domain.enums import UserRole
from marketplace.schemas.common import CamelModel
from marketplace.schemas.store import StoreOut
from marketplace.schemas.store_document import StoreDocumentOut


class VendorSummaryOut(CamelModel):
    """Vendor as shown in the review queue; ``status`` is the resolved status."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    mobile: str | None = None
    role: UserRole
    status: str
    is_active: bool


class VendorDetailOut(VendorSummaryOut):
    business_type: str | None = None
    facebook_url: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


class VendorQueueItem(CamelModel):
    vendor: VendorSummaryOut
    store: StoreOut
    documents: list[StoreDocumentOut]


class VendorQueueStats(CamelModel):
    total_vendors: int
    verified_count: int
    unverified_count: int
    rejected_count: int
    # Keyed by document status, e.g. {"PENDING": 3, "APPROVED": 1, "REJECTED": 0}
    documents: dict[str, int] = Field(default_factory=dict)


class VendorQueueResponse(CamelModel):
    data: list[VendorQueueItem]
    pagination: PageInfo
    stats: VendorQueueStats


class VendorDetailResponse(CamelModel):
    user: VendorDetailOut
    store: StoreOut | None = None
    documents: list[StoreDocumentOut]
