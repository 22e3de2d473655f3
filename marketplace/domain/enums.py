"""Closed value sets shared by the ORM models, services and schemas."""

from __future__ import annotations

import enum

from marketplace.core.exceptions import InvalidArgumentError


class UserRole(str, enum.Enum):
    GUEST = "GUEST"
    CUSTOMER = "CUSTOMER"
    VENDOR_PENDING = "VENDOR_PENDING"
    VENDOR = "VENDOR"
    VENDOR_STAFF = "VENDOR_STAFF"
    ADMIN = "ADMIN"
    ADMIN_STAFF = "ADMIN_STAFF"


class UserStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DocumentStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: object) -> DocumentStatus:
        """Accept any casing of a known status; raise InvalidArgumentError otherwise."""
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().upper()
        try:
            return cls(raw)
        except ValueError:
            raise InvalidArgumentError(f"Invalid status: {value}") from None


class VerificationStatus(str, enum.Enum):
    """Externally reported vendor state, derived from user + store (never stored)."""

    PENDING = "PENDING"
    FORM_APPROVED = "FORM_APPROVED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
