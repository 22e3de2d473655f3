"""Vendor request (seller application) schemas."""


from marketplace.domain.enums import UserRole
from marketplace.schemas.common import CamelModel
from marketplace.schemas.store import StoreOut
from marketplace.schemas.store_document import StoreDocumentOut


class VendorRequestCreate(CamelModel):
    store_name: str

    # Profile fields copied onto the user when present
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    business_type: str | None = None
    pin_code: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    facebook_url: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None

    # Store address
    store_address: str | None = None
    store_pin_code: str | None = None
    store_city: str | None = None
    store_state: str | None = None
    store_country: str | None = None


class VendorRequestOut(CamelModel):
    user_id: str
    store_id: str
    role: UserRole
    status: str


class VendorRequestStatusOut(CamelModel):
    user_id: str
    role: UserRole
    status: str
    store: StoreOut | None = None
    documents: list[StoreDocumentOut]
