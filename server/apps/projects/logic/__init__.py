"""Business logic layer for projects app.

This package contains all business logic for projects:
- Admission policy for uploaded files
- Storage folder allocation and file persistence
- Project records: create, list, like, collaborate, comment
- Authorization of mutations
- File download and text preview
- Project deletion (files first, then record)

All business logic should be implemented here, separate from
models (data layer), infrastructure (filesystem) and views (HTTP).
"""
