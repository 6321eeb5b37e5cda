"""Project deletion: stored files first, then the record."""

import logging
from typing import Any

from django.db import transaction

from server.apps.projects.exceptions import StorageError
from server.apps.projects.logic.authorization import Action, authorize
from server.apps.projects.logic.project_operations import get_project
from server.apps.projects.logic.storage_operations import get_storage
from server.apps.projects.models import Project

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def _delete_stored_files(project: Project) -> int:
    """Remove every stored file of a project (best effort).

    Missing or undeletable files are logged and skipped.

    Returns:
        Number of files removed from disk.
    """
    storage = get_storage()
    removed = 0
    for project_file in project.files.all():
        storage_path = project_file.storage_path
        if not storage.has_file(storage_path):
            logger.warning(
                'File not found in storage (already deleted?): %s',
                storage_path,
            )
            continue
        try:
            storage.delete(storage_path)
        except StorageError:
            logger.exception('Failed to delete file (orphaned): %s', storage_path)
            continue
        removed += 1
    return removed


def delete_project(project_id: object, user: _User) -> None:
    """Delete a project with all of its files.

    Only the owner may delete. Files are removed before the record so
    that a failure leaves at most a record pointing at missing files,
    never files without a record. The emptied folder is removed last;
    leftovers are swept by ``cleanup_orphaned_storage``.

    Args:
        project_id: Project id.
        user: Requesting user.

    Raises:
        ProjectNotFoundError: If the project does not exist.
        NotAuthenticatedError: If user is not authenticated.
        ForbiddenError: If user is not the owner.
    """
    project = get_project(project_id)
    authorize(Action.DELETE, project, user)
    purge_project(project)


def purge_project(project: Project) -> None:
    """Remove a project's stored files, then its record, then its folder.

    No authorization is done here; callers check who may delete.

    Args:
        project: Project to remove.
    """
    project_id = project.pk
    folder = project.storage_folder
    removed = _delete_stored_files(project)
    logger.info(
        'Removed %d stored files of project %s',
        removed,
        project_id,
    )

    with transaction.atomic():
        project.delete()
    logger.info('Project record deleted: %s', project_id)

    if folder:
        get_storage().remove_folder(folder)
