"""Seller applications - an existing customer asks to become a vendor.

The vendor's store is created here, at request time, so the review queue
normally finds one already in place.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from marketplace.domain.enums import UserRole, UserStatus
from marketplace.repositories.store import StoreRepository, placeholder_store_fields
from marketplace.repositories.store_document import StoreDocumentRepository
from marketplace.repositories.user import UserRepository
from marketplace.schemas.store import StoreOut
from marketplace.schemas.store_document import StoreDocumentOut
from marketplace.schemas.vendor_request import (
    VendorRequestCreate,
    VendorRequestOut,
    VendorRequestStatusOut,
)
from marketplace.services.status_resolver import resolve_status, status_value

logger = logging.getLogger(__name__)

# Accounts that already sell or administer cannot apply
_INELIGIBLE_ROLES = {
    UserRole.VENDOR,
    UserRole.VENDOR_STAFF,
    UserRole.ADMIN,
    UserRole.ADMIN_STAFF,
}

_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "business_type",
    "pin_code",
    "city",
    "state",
    "country",
    "facebook_url",
    "instagram_url",
    "youtube_url",
)


class VendorRequestService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._users = UserRepository(session)
        self._stores = StoreRepository(session)
        self._documents = StoreDocumentRepository(session)

    async def create_vendor_request(self, user_id: str, data: VendorRequestCreate) -> VendorRequestOut:
        store_name = (data.store_name or "").strip()
        if not store_name:
            raise InvalidArgumentError("Store name is required")

        user = await self._users.get_for_update(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        if user.role in _INELIGIBLE_ROLES:
            raise ConflictError("User is already a vendor or cannot apply as one")
        if await self._stores.name_taken(store_name, exclude_vendor_id=user_id):
            raise ConflictError("Store name already exists")
        if data.email and data.email != user.email:
            owner = await self._users.get_by_email(data.email)
            if owner is not None and owner.id != user.id:
                raise ConflictError("Email is already in use")

        for field in _PROFILE_FIELDS:
            value = getattr(data, field)
            if value:
                setattr(user, field, value)
        user.role = UserRole.VENDOR_PENDING
        user.status = UserStatus.PENDING

        store_values = {
            "store_name": store_name,
            "street": data.store_address or None,
            "city": data.store_city or None,
            "state": data.store_state or None,
            "country": data.store_country or None,
            "pin_code": data.store_pin_code or None,
        }
        store = await self._stores.get_by_vendor(user_id)
        if store is None:
            handle = placeholder_store_fields(user)["user_name"]
            store = await self._stores.create(
                vendor_id=user_id,
                user_name=await self._stores.available_user_name(handle, user_id),
                is_verified=False,
                **store_values,
            )
            logger.info("Vendor request from %s created store %s", user_id, store.id)
        else:
            # Re-application: refresh the storefront and clear the previous rejection
            for key, value in store_values.items():
                setattr(store, key, value)
            store.is_rejected = False
            store.reason = None
            logger.info("Vendor request from %s reopened store %s", user_id, store.id)
        await self._session.flush()

        return VendorRequestOut(
            user_id=user.id,
            store_id=store.id,
            role=user.role,
            status=status_value(resolve_status(user, store)),
        )

    async def get_vendor_request_status(self, user_id: str) -> VendorRequestStatusOut:
        user = await self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        store = await self._stores.get_by_vendor(user_id)
        documents = await self._documents.list_for_vendor(user_id)
        return VendorRequestStatusOut(
            user_id=user.id,
            role=user.role,
            status=status_value(resolve_status(user, store)),
            store=StoreOut.model_validate(store) if store else None,
            documents=[StoreDocumentOut.model_validate(d) for d in documents],
        )
