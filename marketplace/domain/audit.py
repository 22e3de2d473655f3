"""Verification audit trail: one row per moderation trigger or automatic promotion."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, JSON, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base
from marketplace.domain.mixins import UUIDPrimaryKeyMixin, utcnow


class AuditAction(str, enum.Enum):
    DOCUMENT_STATUS = "verification.document_status"
    DOCUMENTS_STATUS = "verification.documents_status"
    REJECT = "verification.reject"
    APPROVE_FORM = "verification.approve_form"
    APPROVE_FINAL = "verification.approve_final"
    AUTO_PROMOTE = "verification.auto_promote"


class AuditEntity(str, enum.Enum):
    VENDOR = "vendor"
    STORE_DOCUMENT = "store_document"


class AuditTrail(Base, UUIDPrimaryKeyMixin):
    """Append-only; rows carry no updated_at or deleted_at."""

    __tablename__ = "audit_trail"

    # Acting admin from X-Admin-Id; NULL for system actions
    actor_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # JSON snapshots of user/store/document state around the change
    old_value: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    new_value: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
