"""Storage folder allocation and file persistence."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Final

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.utils import timezone

from server.apps.projects.infrastructure.metadata import (
    build_storage_path,
    detect_mime_type,
)
from server.apps.projects.models import Project

if TYPE_CHECKING:
    from server.apps.projects.infrastructure.storage import ProjectStorage

logger = logging.getLogger(__name__)

PROJECTS_FOLDER: Final = 'projects'


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """Description of a file that is fully written to storage."""

    original_name: str
    stored_name: str
    storage_path: str
    size_bytes: int
    mime_type: str
    uploaded_at: datetime


def get_storage() -> 'ProjectStorage':
    """Get the configured default storage backend.

    Returns:
        ProjectStorage instance rooted at the uploads directory.
    """
    return default_storage  # type: ignore[return-value]


def folder_for(project: Project) -> str:
    """Name the storage folder of a project.

    Args:
        project: Project with an assigned id.

    Returns:
        Folder path relative to the uploads root ('projects/<id>').
    """
    return f'{PROJECTS_FOLDER}/{project.pk}'


def allocate_storage_folder(project: Project) -> str:
    """Create the storage folder of a project.

    The folder is derived from the project id, so two projects never
    share one. Creating an existing folder is not an error.

    Args:
        project: Project with an assigned id.

    Returns:
        Allocated folder path.

    Raises:
        StorageError: If the directory cannot be created.
    """
    folder = folder_for(project)
    get_storage().allocate_folder(folder)
    logger.info('Allocated storage folder for project %s: %s', project.pk, folder)
    return folder


def persist_file(folder: str, uploaded_file: UploadedFile) -> FileMetadata:
    """Write an uploaded file into a project folder.

    The filename is kept as given. Metadata is only produced after the
    file is completely on disk.

    Args:
        folder: Allocated project folder.
        uploaded_file: File received in the request.

    Returns:
        Metadata of the stored file.

    Raises:
        StorageError: If the write fails (no partial file is left).
    """
    filename = uploaded_file.name or ''
    storage = get_storage()
    storage_path = build_storage_path(folder, filename)

    saved_path = storage.save(storage_path, uploaded_file)

    return FileMetadata(
        original_name=filename,
        stored_name=filename,
        storage_path=saved_path,
        size_bytes=storage.size(saved_path),
        mime_type=detect_mime_type(filename, uploaded_file.content_type),
        uploaded_at=timezone.now(),
    )
