"""Filesystem storage backend for project files."""

import logging
import os
from typing import Any, final, override

from django.core.files.storage import FileSystemStorage

from server.apps.projects.exceptions import StorageError

logger = logging.getLogger(__name__)


@final
class ProjectStorage(FileSystemStorage):
    """Local filesystem storage rooted at the uploads directory.

    Extends Django's FileSystemStorage with:
    - Idempotent folder allocation
    - All-or-nothing writes (partial files are removed)
    - Best-effort rollback and folder removal for consistency repair
    """

    @override
    def save(
        self,
        name: str | None,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to disk with error handling and logging.

        Args:
            name: Storage path for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the filename.

        Returns:
            Storage path used.

        Raises:
            StorageError: If the write fails. Nothing is left on disk.
        """
        try:
            logger.info('Writing file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
        except OSError as exc:
            logger.exception('Failed to write file to storage: %s', name)
            self._discard_partial(name)
            raise StorageError(
                str(name),
                f'Failed to store file: {name}',
            ) from exc
        logger.info('Successfully wrote file: %s', saved_name)
        return saved_name

    @override
    def delete(self, name: str) -> None:
        """Delete file from disk with error handling and logging.

        Args:
            name: Storage path of file to delete.

        Raises:
            StorageError: If the file exists but cannot be removed.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
        except OSError as exc:
            logger.exception('Failed to delete file from storage: %s', name)
            raise StorageError(name, f'Failed to delete file: {name}') from exc
        logger.info('Successfully deleted file: %s', name)

    def allocate_folder(self, folder: str) -> str:
        """Create a project folder if it does not exist yet.

        Args:
            folder: Folder path relative to the storage root.

        Returns:
            The folder path, unchanged.

        Raises:
            StorageError: If the directory cannot be created.
        """
        try:
            os.makedirs(self.path(folder), exist_ok=True)
        except OSError as exc:
            logger.exception('Failed to create folder: %s', folder)
            raise StorageError(
                folder,
                f'Failed to create folder: {folder}',
            ) from exc
        logger.debug('Allocated folder: %s', folder)
        return folder

    def has_file(self, name: str) -> bool:
        """Check that a stored file is present on disk.

        With overwrites allowed, ``exists()`` is not a reliable presence
        check, so the path is tested directly.

        Args:
            name: Storage path of the file.

        Returns:
            True if a regular file is stored under the name.
        """
        return os.path.isfile(self.path(name))

    def rollback_upload(self, name: str) -> None:
        """Delete a stored file after the surrounding operation failed.

        This is a best-effort operation - if deletion fails, the error
        is logged but not raised. The orphaned file is picked up by the
        ``cleanup_orphaned_storage`` command.

        Args:
            name: Storage path of file to delete.
        """
        try:
            logger.warning('Rolling back upload, deleting file: %s', name)
            self.delete(name)
        except StorageError:
            logger.exception(
                'Failed to rollback upload, orphaned file: %s',
                name,
            )

    def remove_folder(self, folder: str) -> bool:
        """Remove an empty project folder (best effort).

        Args:
            folder: Folder path relative to the storage root.

        Returns:
            True if the folder is gone afterwards, False otherwise.
        """
        try:
            os.rmdir(self.path(folder))
        except FileNotFoundError:
            return True
        except OSError:
            logger.warning('Could not remove folder (not empty?): %s', folder)
            return False
        logger.info('Removed folder: %s', folder)
        return True

    def _discard_partial(self, name: str | None) -> None:
        if not name:
            return
        try:
            os.remove(self.path(name))
        except FileNotFoundError:
            return
        except OSError:
            logger.exception('Failed to discard partial file: %s', name)
        else:
            logger.warning('Discarded partially written file: %s', name)
