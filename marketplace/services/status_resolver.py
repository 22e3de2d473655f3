"""Combined vendor verification status.

A vendor's externally visible state depends on two records: the user's coarse
``status`` and the store's verification flags. Nothing stores the combination;
it is recomputed from whatever is persisted at read time.

    user.status   store.is_rejected  store.is_verified   ->  resolved
    REJECTED      any                any                     REJECTED
    any           True               any                     REJECTED
    PENDING       False              False                   PENDING
    APPROVED      False              False                   FORM_APPROVED
    APPROVED      False              True                    APPROVED
    PENDING       False              True                    PENDING (raw value)
"""

from __future__ import annotations

import enum
from typing import Any

from marketplace.domain.enums import VerificationStatus


def _raw_status(user: Any) -> str:
    value = getattr(user, "status", None) if user is not None else None
    if isinstance(value, enum.Enum):
        value = value.value
    return str(value or "PENDING").upper()


def resolve_status(user: Any, store: Any | None) -> VerificationStatus | str:
    """Project (user.status, store.is_verified, store.is_rejected) onto one status.

    ``user`` and ``store`` may be ORM rows or any objects exposing the same
    attributes; ``store`` may be None. Neither is modified.
    """
    user_status = _raw_status(user)
    is_verified = bool(getattr(store, "is_verified", False)) if store is not None else False
    is_rejected = bool(getattr(store, "is_rejected", False)) if store is not None else False

    if user_status == "REJECTED" or is_rejected:
        return VerificationStatus.REJECTED
    if user_status == "PENDING" and not is_verified:
        return VerificationStatus.PENDING
    if user_status == "APPROVED" and not is_verified:
        return VerificationStatus.FORM_APPROVED
    if user_status == "APPROVED" and is_verified:
        return VerificationStatus.APPROVED

    try:
        return VerificationStatus(user_status)
    except ValueError:
        return user_status


def status_value(status: VerificationStatus | str) -> str:
    """Wire form of a resolved status."""
    return status.value if isinstance(status, VerificationStatus) else str(status)
