"""SQLAlchemy ORM model for vendor verification documents."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base
from marketplace.domain.enums import DocumentStatus
from marketplace.domain.mixins import SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class StoreDocument(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    """One uploaded verification artifact (ID proof, licence, ...).

    Documents hang off the vendor's user id, not the store row, so a vendor's
    uploads survive a store being recreated.
    """

    __tablename__ = "store_documents"

    owner_vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    document_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_url: Mapped[str] = mapped_column(String(1000), nullable=False)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False, length=20),
        default=DocumentStatus.PENDING,
        nullable=False,
        index=True,
    )
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
