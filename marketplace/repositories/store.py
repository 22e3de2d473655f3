"""Store repository, including the idempotent "ensure a store exists" path."""

import logging
import re

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from marketplace.domain.store import Store
from marketplace.domain.user import User
from marketplace.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

PLACEHOLDER_PIN_CODE = "000000"


def placeholder_store_fields(vendor: User) -> dict:
    """Column values for a store materialised on a vendor's behalf."""
    handle = f"{vendor.first_name or 'user'}{vendor.last_name or ''}"
    pin_code = (vendor.pin_code or "").strip()
    return {
        "vendor_id": vendor.id,
        "store_name": f"{vendor.first_name or 'store'}'s Store",
        "user_name": re.sub(r"\s+", "", handle).lower(),
        "pin_code": pin_code or PLACEHOLDER_PIN_CODE,
        "city": vendor.city or None,
        "state": vendor.state or None,
        "country": vendor.country or None,
        "is_verified": False,
    }


class StoreRepository(BaseRepository[Store]):
    model = Store

    async def get_by_vendor(self, vendor_id: str) -> Store | None:
        result = await self._session.execute(
            self._base_query()
            .where(Store.vendor_id == vendor_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def name_taken(self, store_name: str, exclude_vendor_id: str | None = None) -> bool:
        q = select(func.count()).select_from(Store).where(Store.store_name == store_name)
        if exclude_vendor_id:
            q = q.where(Store.vendor_id != exclude_vendor_id)
        return (await self._session.execute(q)).scalar_one() > 0

    async def available_user_name(self, handle: str, vendor_id: str) -> str:
        """``handle`` if no store uses it yet, else ``handle`` suffixed with the vendor id."""
        q = select(func.count()).select_from(Store).where(Store.user_name == handle)
        if (await self._session.execute(q)).scalar_one() == 0:
            return handle
        return f"{handle}-{vendor_id[:8]}"

    async def ensure_for_vendor(self, vendor: User) -> Store | None:
        """Return the vendor's store, creating a placeholder one if missing.

        The insert runs in a SAVEPOINT so a unique-constraint race (another
        request created the store first) only undoes this insert; the winner's
        row is then re-read. Returns None when no store can be obtained.
        """
        store = await self.get_by_vendor(vendor.id)
        if store is not None:
            return store

        values = placeholder_store_fields(vendor)
        values["user_name"] = await self.available_user_name(values["user_name"], vendor.id)
        try:
            async with self._session.begin_nested():
                store = Store(**values)
                self._session.add(store)
        except IntegrityError as exc:
            logger.info("Store for vendor %s already materialised: %s", vendor.id, exc.orig)
            return await self.get_by_vendor(vendor.id)

        logger.info("Created placeholder store %s for vendor %s", store.id, vendor.id)
        return store
