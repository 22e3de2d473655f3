"""Vendor verification workflow - document moderation, admin decisions, review queue.

State lives in three records per vendor: the user (role + coarse status), the
store (verification flags) and the vendor's documents. Every trigger here
changes them together inside one SAVEPOINT, after locking the vendor's user row,
so a trigger is all-or-nothing even if the caller keeps using the session.

Auto-promotion: when a status change approves the last non-approved document of
a vendor, the same transaction approves the user, grants the VENDOR role and
verifies the store. Repeating it is harmless.

Rule: No FastAPI here. Callers own the session and commit it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.config import settings
from marketplace.core.exceptions import InvalidArgumentError, NotFoundError
from marketplace.core.pagination import PageInfo, slice_page
from marketplace.domain.audit import AuditAction, AuditEntity
from marketplace.domain.enums import DocumentStatus, UserRole, UserStatus, VerificationStatus
from marketplace.domain.store import Store
from marketplace.domain.store_document import StoreDocument
from marketplace.domain.user import User
from marketplace.repositories.audit import AuditRepository
from marketplace.repositories.store import StoreRepository
from marketplace.repositories.store_document import StoreDocumentRepository
from marketplace.repositories.user import UserRepository
from marketplace.schemas.store import StoreOut
from marketplace.schemas.store_document import StoreDocumentOut
from marketplace.schemas.verification import (
    VendorDetailOut,
    VendorDetailResponse,
    VendorQueueItem,
    VendorQueueResponse,
    VendorQueueStats,
    VendorSummaryOut,
)
from marketplace.services.status_resolver import resolve_status, status_value

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Review-queue ?status= values and the resolved status each one selects
QUEUE_STATUS_FILTERS: dict[str, VerificationStatus] = {
    "VERIFIED": VerificationStatus.APPROVED,
    "APPROVED": VerificationStatus.APPROVED,
    "UNVERIFIED": VerificationStatus.PENDING,
    "PENDING": VerificationStatus.PENDING,
    "FORM_APPROVED": VerificationStatus.FORM_APPROVED,
    "REJECTED": VerificationStatus.REJECTED,
}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _QueueEntry(NamedTuple):
    vendor: User
    store: Store
    documents: list[StoreDocument]
    status: VerificationStatus | str


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _snapshot(user: User, store: Store | None) -> dict[str, Any]:
    """JSON-safe view of the verification-relevant state, for the audit trail."""
    snap: dict[str, Any] = {"role": user.role.value, "status": user.status.value}
    if store is not None:
        snap.update(
            isVerified=store.is_verified,
            isRejected=store.is_rejected,
            reason=store.reason,
        )
    return snap


def _set_store_flags(store: Store, *, verified: bool | None, rejected: bool, reason: str | None) -> None:
    if verified is not None:
        store.is_verified = verified
    store.is_rejected = rejected
    store.reason = reason


def vendor_out(schema: type[VendorSummaryOut], user: User, status: VerificationStatus | str):
    """Build a vendor response model with ``status`` replaced by the resolved status."""
    values = {name: getattr(user, name) for name in schema.model_fields if name != "status"}
    return schema(**values, status=status_value(status))


def parse_queue_status(value: str | None) -> VerificationStatus | None:
    """Resolved status selected by a ?status= value; None (no filtering) when blank or unknown."""
    if not value or not str(value).strip():
        return None
    return QUEUE_STATUS_FILTERS.get(str(value).strip().upper())


def _matches_search(entry: _QueueEntry, needle: str) -> bool:
    vendor, store = entry.vendor, entry.store
    haystack = (
        vendor.first_name,
        vendor.last_name,
        vendor.email,
        vendor.mobile,
        store.store_name,
        store.user_name,
    )
    return any(value and needle in value.lower() for value in haystack)


def _queue_stats(entries: list[_QueueEntry]) -> VendorQueueStats:
    document_counts = {s.value: 0 for s in DocumentStatus}
    for entry in entries:
        for doc in entry.documents:
            document_counts[doc.status.value] += 1
    return VendorQueueStats(
        total_vendors=len(entries),
        verified_count=sum(1 for e in entries if e.store.is_verified),
        unverified_count=sum(
            1 for e in entries if not e.store.is_verified and not e.store.is_rejected
        ),
        rejected_count=sum(1 for e in entries if e.store.is_rejected),
        documents=document_counts,
    )

# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class VerificationService:
    def __init__(
        self,
        session: AsyncSession,
        actor_id: str | None = None,
        include_pending_in_queue: bool | None = None,
    ):
        self._session = session
        self._actor_id = actor_id
        self._include_pending = (
            settings.verification_queue_include_pending
            if include_pending_in_queue is None
            else include_pending_in_queue
        )
        self._users = UserRepository(session)
        self._stores = StoreRepository(session)
        self._documents = StoreDocumentRepository(session)
        self._audit = AuditRepository(session)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def _require_user(self, vendor_id: str) -> User:
        user = await self._users.get_by_id(vendor_id)
        if not user:
            raise NotFoundError("User", vendor_id)
        return user

    async def get_user_documents(self, vendor_id: str) -> list[StoreDocument]:
        await self._require_user(vendor_id)
        return await self._documents.list_for_vendor(vendor_id)

    async def get_user_detail(self, vendor_id: str) -> VendorDetailResponse:
        user = await self._require_user(vendor_id)
        store = await self._stores.get_by_vendor(vendor_id)
        documents = await self._documents.list_for_vendor(vendor_id)
        return VendorDetailResponse(
            user=vendor_out(VendorDetailOut, user, resolve_status(user, store)),
            store=StoreOut.model_validate(store) if store else None,
            documents=[StoreDocumentOut.model_validate(d) for d in documents],
        )

    # ------------------------------------------------------------------
    # Document triggers
    # ------------------------------------------------------------------

    async def update_document_status(
        self,
        vendor_id: str,
        document_id: str,
        status: str | DocumentStatus,
        reason: str | None = None,
    ) -> list[StoreDocument]:
        """Set one document's status; approving the last open document promotes the vendor.

        An omitted ``reason`` leaves the stored one untouched.
        """
        if not document_id:
            raise InvalidArgumentError("documentId and status are required")
        next_status = DocumentStatus.parse(status)

        async with self._session.begin_nested():
            vendor = await self._lock_vendor(vendor_id)
            document = await self._documents.get_owned(vendor_id, document_id)
            if document is None:
                raise NotFoundError("Document", document_id)

            previous = {"status": document.status.value, "reason": document.reason}
            document.status = next_status
            if reason is not None:
                document.reason = reason
            await self._session.flush()

            self._audit.record(
                AuditAction.DOCUMENT_STATUS,
                AuditEntity.STORE_DOCUMENT,
                document.id,
                old_value=previous,
                new_value={"status": next_status.value, "reason": document.reason},
                description=f"Document {document.id} of vendor {vendor_id} set to {next_status.value}",
                actor_id=self._actor_id,
            )

            if next_status is DocumentStatus.APPROVED:
                await self._promote_if_complete(vendor)

        return await self._documents.list_for_vendor(vendor_id)

    async def update_documents_status(
        self, vendor_id: str, updates: Sequence[Any]
    ) -> list[StoreDocument]:
        """Apply several ``{id, status}`` changes at once.

        Every entry is validated before anything is written. Ids that do not
        belong to the vendor are skipped without error.
        """
        if not updates:
            raise InvalidArgumentError("Updates array is required")

        parsed: list[tuple[str, DocumentStatus]] = []
        for item in updates:
            document_id, raw_status = _field(item, "id"), _field(item, "status")
            if not document_id or not raw_status:
                raise InvalidArgumentError("Each update must include id and status")
            parsed.append((str(document_id), DocumentStatus.parse(raw_status)))

        async with self._session.begin_nested():
            vendor = await self._lock_vendor(vendor_id)

            applied = 0
            for document_id, next_status in parsed:
                applied += await self._documents.set_status_if_owned(
                    vendor_id, document_id, next_status
                )

            self._audit.record(
                AuditAction.DOCUMENTS_STATUS,
                AuditEntity.VENDOR,
                vendor_id,
                new_value={
                    "updates": [{"id": d, "status": s.value} for d, s in parsed],
                    "applied": applied,
                },
                description=f"Bulk status update: {applied} of {len(parsed)} document(s) applied",
                actor_id=self._actor_id,
            )

            if any(s is DocumentStatus.APPROVED for _, s in parsed):
                await self._promote_if_complete(vendor)

        return await self._documents.list_for_vendor(vendor_id)

    # ------------------------------------------------------------------
    # Admin decisions
    # ------------------------------------------------------------------

    async def reject_vendor_request(self, vendor_id: str, reason: str | None = None) -> dict:
        """Reject the vendor; the store is flagged and every document is rejected."""
        async with self._session.begin_nested():
            vendor = await self._lock_vendor(vendor_id)
            store = await self._stores.get_by_vendor(vendor_id)
            before = _snapshot(vendor, store)

            vendor.status = UserStatus.REJECTED
            rejected_documents = 0
            if store is not None:
                _set_store_flags(store, verified=False, rejected=True, reason=reason or None)
                rejected_documents = await self._documents.set_status_for_vendor(
                    vendor_id, DocumentStatus.REJECTED
                )
            await self._session.flush()

            self._audit.record(
                AuditAction.REJECT,
                AuditEntity.VENDOR,
                vendor_id,
                old_value=before,
                new_value={**_snapshot(vendor, store), "rejectedDocuments": rejected_documents},
                description=reason or None,
                actor_id=self._actor_id,
            )

        logger.info(
            "Vendor %s rejected (%d document(s) rejected, store %s)",
            vendor_id, rejected_documents, "flagged" if store else "missing",
        )
        return {"success": True}

    async def approve_vendor_form(self, vendor_id: str) -> dict:
        """Accept the application form; store verification stays as it is."""
        async with self._session.begin_nested():
            vendor = await self._lock_vendor(vendor_id)
            store = await self._stores.get_by_vendor(vendor_id)
            before = _snapshot(vendor, store)

            vendor.status = UserStatus.APPROVED
            if store is not None:
                _set_store_flags(store, verified=None, rejected=False, reason=None)
            await self._session.flush()

            self._audit.record(
                AuditAction.APPROVE_FORM,
                AuditEntity.VENDOR,
                vendor_id,
                old_value=before,
                new_value=_snapshot(vendor, store),
                actor_id=self._actor_id,
            )

        logger.info("Vendor %s form approved", vendor_id)
        return {"success": True}

    async def approve_vendor_final(self, vendor_id: str, reason: str | None = None) -> dict:
        """Approve the vendor and verify the store regardless of document state."""
        async with self._session.begin_nested():
            vendor = await self._lock_vendor(vendor_id)
            store = await self._stores.get_by_vendor(vendor_id)
            before = _snapshot(vendor, store)

            vendor.status = UserStatus.APPROVED
            if store is not None:
                _set_store_flags(store, verified=True, rejected=False, reason=reason or None)
            await self._session.flush()

            self._audit.record(
                AuditAction.APPROVE_FINAL,
                AuditEntity.VENDOR,
                vendor_id,
                old_value=before,
                new_value=_snapshot(vendor, store),
                description=reason or None,
                actor_id=self._actor_id,
            )

        logger.info("Vendor %s approved and store verified", vendor_id)
        return {"success": True}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _lock_vendor(self, vendor_id: str) -> User:
        vendor = await self._users.get_for_update(vendor_id)
        if vendor is None:
            raise NotFoundError("User", vendor_id)
        return vendor

    async def _promote_if_complete(self, vendor: User) -> bool:
        """Promote the vendor when it has documents and all of them are approved."""
        documents = await self._documents.list_for_vendor(vendor.id)
        if not documents or any(d.status != DocumentStatus.APPROVED for d in documents):
            return False

        store = await self._stores.get_by_vendor(vendor.id)
        before = _snapshot(vendor, store)

        vendor.status = UserStatus.APPROVED
        vendor.role = UserRole.VENDOR
        if store is not None:
            _set_store_flags(store, verified=True, rejected=False, reason=None)
        await self._session.flush()

        self._audit.record(
            AuditAction.AUTO_PROMOTE,
            AuditEntity.VENDOR,
            vendor.id,
            old_value=before,
            new_value=_snapshot(vendor, store),
            description=f"All {len(documents)} document(s) approved",
            actor_id=self._actor_id,
        )
        logger.info(
            "All %d document(s) approved for vendor %s; promoted to VENDOR%s",
            len(documents), vendor.id, "" if store else " (no store to verify)",
        )
        return True

    # ------------------------------------------------------------------
    # Review queue
    # ------------------------------------------------------------------

    async def list_unverified_vendors(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        search: str | None = "",
        status: str | None = "",
        document_status: str | None = "",
    ) -> VendorQueueResponse:
        """Admin review queue.

        Stats cover every vendor in the queue; filters, search and paging are
        applied afterwards, in memory.
        """
        page, limit = max(1, int(page)), max(1, int(limit))
        status_filter = parse_queue_status(status)
        document_filter = (document_status or "").strip().upper() or None

        roles = [UserRole.VENDOR]
        if self._include_pending:
            roles.append(UserRole.VENDOR_PENDING)
        vendors = await self._users.list_by_roles(roles)

        hydrated: list[tuple[User, Store]] = []
        for vendor in vendors:
            store = await self._materialise_store(vendor)
            if store is not None:
                hydrated.append((vendor, store))

        documents = await self._documents.list_for_vendors(v.id for v, _ in hydrated)
        entries = [
            _QueueEntry(vendor, store, documents[vendor.id], resolve_status(vendor, store))
            for vendor, store in hydrated
        ]
        stats = _queue_stats(entries)

        filtered = entries
        if status_filter is not None:
            filtered = [e for e in filtered if e.status == status_filter]
        if document_filter is not None:
            filtered = [
                e for e in filtered if any(d.status.value == document_filter for d in e.documents)
            ]
        needle = (search or "").strip().lower()
        if needle:
            filtered = [e for e in filtered if _matches_search(e, needle)]

        return VendorQueueResponse(
            data=[
                VendorQueueItem(
                    vendor=vendor_out(VendorSummaryOut, e.vendor, e.status),
                    store=StoreOut.model_validate(e.store),
                    documents=[StoreDocumentOut.model_validate(d) for d in e.documents],
                )
                for e in slice_page(filtered, page, limit)
            ],
            pagination=PageInfo.build(len(filtered), page, limit),
            stats=stats,
        )

    async def _materialise_store(self, vendor: User) -> Store | None:
        try:
            store = await self._stores.ensure_for_vendor(vendor)
        except SQLAlchemyError as exc:
            logger.warning("Could not materialise store for vendor %s: %s", vendor.id, exc)
            return None
        if store is None:
            logger.warning("Vendor %s has no store and none could be created; skipped", vendor.id)
        return store
