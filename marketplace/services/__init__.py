"""Services package - all business logic lives here, never in routers.

Files:
  status_resolver.py  - pure combined verification status (user + store)
  verification.py     - document moderation, admin decisions, auto-promotion, review queue
  vendor_request.py   - seller applications (creates the vendor's store)
  store_document.py   - vendor document uploads + admin document listing
  document_type.py    - document type catalog

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
