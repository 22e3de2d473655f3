"""SQLAlchemy ORM model for vendor stores.

One row per vendor (``vendor_id`` is unique). The verification flags are
written only by the verification workflow; everything else is storefront
metadata.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base
from marketplace.domain.mixins import SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Store(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "stores"

    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    store_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    user_name: Mapped[Optional[str]] = mapped_column(String(100), unique=True, nullable=True)

    street: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pin_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Verification flags - never both true
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_rejected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
