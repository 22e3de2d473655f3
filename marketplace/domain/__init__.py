"""Domain package - all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  user.py            - user accounts (role + coarse status)
  store.py           - one store per vendor, carries the verification flags
  store_document.py  - verification documents owned by a vendor
  document_type.py   - admin-managed catalog of document kinds
  audit.py           - immutable audit trail of verification decisions
  enums.py           - closed role / status value sets
  mixins.py          - shared UUID primary key, timestamp and soft-delete columns
"""

from marketplace.domain.audit import AuditAction, AuditEntity, AuditTrail
from marketplace.domain.document_type import DocumentType
from marketplace.domain.enums import DocumentStatus, UserRole, UserStatus, VerificationStatus
from marketplace.domain.store import Store
from marketplace.domain.store_document import StoreDocument
from marketplace.domain.user import User

__all__ = [
    "AuditAction",
    "AuditEntity",
    "AuditTrail",
    "DocumentStatus",
    "DocumentType",
    "Store",
    "StoreDocument",
    "User",
    "UserRole",
    "UserStatus",
    "VerificationStatus",
]
