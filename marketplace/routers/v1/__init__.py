"""v1 router package - all /api/v1/* endpoints live here.

Files:
  admin_verification.py  - review queue, document moderation, vendor decisions
  document_types.py      - document type catalog (admin)
  vendors.py             - vendor self-service: seller application + document uploads

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to marketplace/services/.
"""
