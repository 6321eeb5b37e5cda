"""Infrastructure layer for projects app.

This package contains integrations with external systems:
- Filesystem storage backend for project folders
- Metadata extraction (MIME type, extension, filename checks)

Keep infrastructure concerns separate from business logic.
"""
