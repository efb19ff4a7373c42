"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO) and the blob store on top of it
- Job dispatch to background workers (Celery)
- Metadata helpers (MIME type, derived locators)

Keep infrastructure concerns separate from business logic.
"""
