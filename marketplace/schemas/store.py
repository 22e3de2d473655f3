"""Store response model."""


from datetime import datetime

from marketplace.schemas.common import CamelModel


class StoreOut(CamelModel):
    id: str
    vendor_id: str
    store_name: str
    user_name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    pin_code: str | None = None
    is_verified: bool
    is_rejected: bool
    reason: str | None = None
    created_at: datetime
    updated_at: datetime
