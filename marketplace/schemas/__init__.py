"""Pydantic schemas package.

Folder intent:
  common.py          - CamelModel base, ReasonBody, HealthResponse (all schemas inherit CamelModel)
  store.py           - store response model
  store_document.py  - document uploads, admin status changes, document responses
  verification.py    - admin review queue + vendor detail responses
  vendor_request.py  - seller application request/response
  document_type.py   - document type catalog
"""
