"""Repositories package - the only layer that builds SQLAlchemy queries.

Files:
  base.py            - generic soft-delete aware CRUD (subclass with `model = ...`)
  user.py            - user lookups, row locking, role listings
  store.py           - store lookups and lazy "ensure store exists"
  store_document.py  - vendor-scoped document reads and conditional status updates
  document_type.py   - document type catalog
  audit.py           - append-only audit rows
"""
