"""Admission policy for uploaded project files.

A file is admitted when it fits the size and count limits and either
its declared MIME type or its extension is on the allow-list. Client
reported MIME types are unreliable, hence the logical OR.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final, Protocol, Self

from django.conf import settings

from server.apps.projects.exceptions import (
    AdmissionRejectedError,
    RejectionReason,
)
from server.apps.projects.infrastructure.metadata import (
    format_size,
    get_file_extension,
    is_plain_filename,
)

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES: Final = frozenset((
    'text/html',
    'text/css',
    'text/javascript',
    'application/javascript',
    'text/plain',
    'application/json',
    'text/markdown',
    'image/jpeg',
    'image/png',
    'image/gif',
    'image/svg+xml',
    'image/webp',
    'application/zip',
    'application/x-zip-compressed',
    'application/pdf',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'application/vnd.ms-powerpoint',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.ms-excel',
))

ALLOWED_EXTENSIONS: Final = frozenset((
    'html', 'css', 'js', 'json', 'md', 'txt',
    'jpg', 'jpeg', 'png', 'gif', 'svg', 'webp',
    'zip', 'pdf',
    'pptx', 'ppt', 'docx', 'doc', 'xlsx', 'xls',
))


class UploadCandidate(Protocol):
    """What the filter needs to know about a file (UploadedFile fits)."""

    name: str | None
    content_type: str | None
    size: int | None


@dataclass(frozen=True, slots=True)
class AdmissionPolicy:
    """Size, count and type limits for one upload request."""

    max_files: int
    max_file_size: int
    upload_field: str = 'files'
    allowed_mime_types: frozenset[str] = ALLOWED_MIME_TYPES
    allowed_extensions: frozenset[str] = ALLOWED_EXTENSIONS

    @classmethod
    def from_settings(cls) -> Self:
        """Build the policy from Django settings.

        Returns:
            AdmissionPolicy configured by ``PROJECTS_*`` settings.
        """
        return cls(
            max_files=settings.PROJECTS_MAX_FILES,
            max_file_size=settings.PROJECTS_MAX_FILE_SIZE,
            upload_field=settings.PROJECTS_UPLOAD_FIELD,
        )

    def is_allowed_type(self, filename: str, content_type: str | None) -> bool:
        """Check the type allow-lists (MIME type OR extension).

        Args:
            filename: Original filename.
            content_type: Declared MIME type.

        Returns:
            True if either list matches.
        """
        if content_type and content_type in self.allowed_mime_types:
            return True
        return get_file_extension(filename) in self.allowed_extensions


def check_file(
    candidate: UploadCandidate,
    accepted_count: int,
    policy: AdmissionPolicy,
) -> None:
    """Decide whether one file may be persisted.

    Args:
        candidate: File to check.
        accepted_count: Files already accepted in this request.
        policy: Limits to apply.

    Raises:
        AdmissionRejectedError: With the specific rejection reason.
    """
    filename = candidate.name or ''

    if accepted_count + 1 > policy.max_files:
        raise AdmissionRejectedError(
            RejectionReason.TOO_MANY_FILES,
            filename,
            limit=policy.max_files,
        )

    if not is_plain_filename(filename):
        logger.warning('Rejected file with unusable name: %r', filename)
        raise AdmissionRejectedError(
            RejectionReason.UNEXPECTED_FIELD,
            filename,
        )

    if (candidate.size or 0) > policy.max_file_size:
        raise AdmissionRejectedError(
            RejectionReason.OVERSIZE,
            filename,
            limit=format_size(policy.max_file_size),
        )

    if not policy.is_allowed_type(filename, candidate.content_type):
        logger.warning(
            'Rejected file: %s with MIME type: %s',
            filename,
            candidate.content_type,
        )
        raise AdmissionRejectedError(
            RejectionReason.DISALLOWED_TYPE,
            filename,
        )


def check_upload_fields(
    field_names: Iterable[str],
    policy: AdmissionPolicy | None = None,
) -> None:
    """Reject multipart file fields other than the upload field.

    Args:
        field_names: Names of the multipart fields carrying files.
        policy: Limits to apply, defaults to settings.

    Raises:
        AdmissionRejectedError: For the first unexpected field.
    """
    policy = policy or AdmissionPolicy.from_settings()
    for field_name in field_names:
        if field_name != policy.upload_field:
            logger.warning('Unexpected upload field: %s', field_name)
            raise AdmissionRejectedError(RejectionReason.UNEXPECTED_FIELD)


def admit_batch(
    candidates: Sequence[UploadCandidate],
    policy: AdmissionPolicy | None = None,
) -> None:
    """Check a whole upload batch before anything is written.

    A single rejected file rejects the batch.

    Args:
        candidates: Files of one upload request, in order.
        policy: Limits to apply, defaults to settings.

    Raises:
        AdmissionRejectedError: For the first file that violates the policy.
    """
    policy = policy or AdmissionPolicy.from_settings()
    seen_names: set[str] = set()

    for accepted_count, candidate in enumerate(candidates):
        check_file(candidate, accepted_count, policy)
        filename = candidate.name or ''
        if filename in seen_names:
            raise AdmissionRejectedError(
                RejectionReason.DUPLICATE_FILENAME,
                filename,
            )
        seen_names.add(filename)

    logger.debug('Admitted upload batch of %d files', len(candidates))
