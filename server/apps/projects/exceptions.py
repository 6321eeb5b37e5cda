"""Exceptions for projects app.

Invalid input is reported with Django's ``ValidationError``; everything
else a project operation can fail with is defined here.
"""

import enum


class NotAuthenticatedError(Exception):
    """Raised when an action needs an identity and the request has none."""

    def __init__(self, action: str) -> None:
        """Initialize NotAuthenticatedError.

        Args:
            action: Name of the action that was attempted.
        """
        self.action = action
        super().__init__(f'Authentication required to {action} a project')


class ForbiddenError(Exception):
    """Raised when an authenticated user may not perform an action."""


class ProjectNotFoundError(Exception):
    """Raised when a project id does not resolve to a record."""

    def __init__(self, project_id: object) -> None:
        """Initialize ProjectNotFoundError.

        Args:
            project_id: Requested project id.
        """
        self.project_id = project_id
        super().__init__('Project not found')


class ProjectFileNotFoundError(Exception):
    """Raised when a project has no file with the requested name."""

    def __init__(self, project_id: object, filename: str) -> None:
        """Initialize ProjectFileNotFoundError.

        Args:
            project_id: Project that was searched.
            filename: Requested filename.
        """
        self.project_id = project_id
        self.filename = filename
        super().__init__('File not found')


class ConflictError(Exception):
    """Raised when a request duplicates existing state."""


class UnsupportedPreviewError(Exception):
    """Raised when a file cannot be previewed as text."""

    def __init__(self, filename: str, mime_type: str) -> None:
        """Initialize UnsupportedPreviewError.

        Args:
            filename: Name of the file.
            mime_type: Recorded MIME type of the file.
        """
        self.filename = filename
        self.mime_type = mime_type
        super().__init__('File type not supported for preview')


class StorageError(Exception):
    """Raised when reading or writing project files fails."""

    def __init__(self, storage_path: str, message: str) -> None:
        """Initialize StorageError.

        Args:
            storage_path: Path (relative to the uploads root) involved.
            message: Human readable description.
        """
        self.storage_path = storage_path
        super().__init__(message)


@enum.unique
class RejectionReason(enum.StrEnum):
    """Why the admission filter refused a file."""

    OVERSIZE = 'oversize'
    TOO_MANY_FILES = 'too-many-files'
    UNEXPECTED_FIELD = 'unexpected-field'
    DISALLOWED_TYPE = 'disallowed-type'
    DUPLICATE_FILENAME = 'duplicate-filename'


_REJECTION_MESSAGES = {  # noqa: WPS407
    RejectionReason.OVERSIZE: 'File too large. Maximum size is {limit}.',
    RejectionReason.TOO_MANY_FILES: 'Too many files. Maximum is {limit} files.',
    RejectionReason.UNEXPECTED_FIELD: 'Unexpected field name for file upload.',
    RejectionReason.DISALLOWED_TYPE: 'File type not allowed: {filename}',
    RejectionReason.DUPLICATE_FILENAME: 'Duplicate filename in upload: {filename}',
}


class AdmissionRejectedError(Exception):
    """Raised when an uploaded file violates the admission policy."""

    def __init__(
        self,
        reason: RejectionReason,
        filename: str = '',
        limit: object = None,
    ) -> None:
        """Initialize AdmissionRejectedError.

        Args:
            reason: Rejection reason.
            filename: Offending filename, if any.
            limit: Limit that was exceeded, for size and count rejections.
        """
        self.reason = reason
        self.filename = filename
        self.limit = limit
        super().__init__(
            _REJECTION_MESSAGES[reason].format(filename=filename, limit=limit),
        )
