"""Resolving, downloading and previewing project files."""

import logging
from dataclasses import dataclass
from typing import Any, Final

from django.core.files import File as DjangoFile

from server.apps.projects.exceptions import (
    ProjectFileNotFoundError,
    StorageError,
    UnsupportedPreviewError,
)
from server.apps.projects.logic.authorization import Action, authorize
from server.apps.projects.logic.project_operations import get_project
from server.apps.projects.logic.storage_operations import get_storage
from server.apps.projects.models import Project, ProjectFile

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)

TEXT_PREVIEW_MIME_TYPES: Final = frozenset((
    'text/html',
    'text/css',
    'text/javascript',
    'application/javascript',
    'text/plain',
    'application/json',
))

TEXT_PREVIEW_EXTENSIONS: Final = frozenset((
    'html', 'css', 'js', 'json', 'md', 'txt',
))


@dataclass(frozen=True, slots=True)
class FilePreview:
    """Decoded text content of a project file."""

    content: str
    filename: str
    mime_type: str


def find_file(project: Project, filename: str) -> ProjectFile:
    """Find a file in a project by exact name.

    Args:
        project: Project whose files are searched (in upload order).
        filename: Stored filename to match.

    Returns:
        First matching ProjectFile.

    Raises:
        ProjectFileNotFoundError: If no file matches.
    """
    for project_file in project.files.all():
        if project_file.stored_name == filename:
            return project_file
    logger.info('File not found in project %s: %s', project.pk, filename)
    raise ProjectFileNotFoundError(project.pk, filename)


def resolve_file(project_id: object, filename: str) -> ProjectFile:
    """Resolve a (project, filename) pair to file metadata.

    Args:
        project_id: Project id.
        filename: Stored filename.

    Returns:
        Matching ProjectFile.

    Raises:
        ProjectNotFoundError: If the project does not exist.
        ProjectFileNotFoundError: If the project has no such file.
    """
    return find_file(get_project(project_id), filename)


def is_previewable(project_file: ProjectFile) -> bool:
    """Check whether a file can be shown inline as text.

    Args:
        project_file: File metadata.

    Returns:
        True for text-like MIME types or extensions.
    """
    return (
        project_file.mime_type in TEXT_PREVIEW_MIME_TYPES
        or project_file.get_extension() in TEXT_PREVIEW_EXTENSIONS
    )


def _open_stored(project_file: ProjectFile) -> DjangoFile:
    storage_path = project_file.storage_path
    try:
        return get_storage().open(storage_path, 'rb')
    except OSError as exc:
        logger.exception('Failed to open stored file: %s', storage_path)
        raise StorageError(
            storage_path,
            f'Stored file is not readable: {project_file.original_name}',
        ) from exc


def open_download(
    project_id: object,
    filename: str,
    user: _User,
) -> tuple[ProjectFile, DjangoFile]:
    """Open a project file for download.

    There is no existence pre-check on disk: a missing file surfaces
    as a StorageError when it is opened.

    Args:
        project_id: Project id.
        filename: Stored filename.
        user: Requesting user.

    Returns:
        File metadata and an open binary handle. The caller closes it.

    Raises:
        NotAuthenticatedError: If user is not authenticated.
        ProjectNotFoundError: If the project does not exist.
        ProjectFileNotFoundError: If the project has no such file.
        StorageError: If the stored bytes cannot be opened.
    """
    authorize(Action.DOWNLOAD, None, user)
    project_file = resolve_file(project_id, filename)
    logger.info('Download of %s by %s', project_file.storage_path, user.username)
    return project_file, _open_stored(project_file)


def read_preview(project_id: object, filename: str, user: _User) -> FilePreview:
    """Read a text file for inline preview.

    Args:
        project_id: Project id.
        filename: Stored filename.
        user: Requesting user.

    Returns:
        Decoded text with filename and MIME type.

    Raises:
        NotAuthenticatedError: If user is not authenticated.
        ProjectNotFoundError: If the project does not exist.
        ProjectFileNotFoundError: If the project has no such file.
        UnsupportedPreviewError: If the file is not text.
        StorageError: If the stored bytes cannot be read.
    """
    authorize(Action.PREVIEW, None, user)
    project_file = resolve_file(project_id, filename)
    if not is_previewable(project_file):
        raise UnsupportedPreviewError(
            project_file.original_name,
            project_file.mime_type,
        )

    with _open_stored(project_file) as handle:
        raw_content = handle.read()

    try:
        content = raw_content.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise UnsupportedPreviewError(
            project_file.original_name,
            project_file.mime_type,
        ) from exc

    return FilePreview(
        content=content,
        filename=project_file.original_name,
        mime_type=project_file.mime_type,
    )
