"""SQLAlchemy ORM model for the admin-managed document type catalog."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base
from marketplace.domain.mixins import SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class DocumentType(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "document_types"

    # Uniqueness is checked case-insensitively among live rows by the service
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
