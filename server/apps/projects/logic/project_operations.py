"""Business logic for project records."""

import logging
import uuid
from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import QuerySet

from server.apps.projects.exceptions import (
    ConflictError,
    ForbiddenError,
    ProjectNotFoundError,
)
from server.apps.projects.logic.admission import admit_batch
from server.apps.projects.logic.authorization import (
    Action,
    authorize,
    is_owner,
)
from server.apps.projects.logic.storage_operations import (
    FileMetadata,
    allocate_storage_folder,
    get_storage,
    persist_file,
)
from server.apps.projects.models import Comment, Project, ProjectFile

# User type for Django's dynamic user model
_User = Any

_UPDATED_AT_FIELD = 'updated_at'

logger = logging.getLogger(__name__)


class LikeState(NamedTuple):
    """Like count and membership after a toggle."""

    likes: int
    liked: bool


def _project_queryset() -> QuerySet[Project]:
    return Project.objects.select_related('owner').prefetch_related(
        'collaborators',
        'likes',
        'files',
        'comments__user',
    )


def _parse_project_id(project_id: object) -> uuid.UUID:
    if isinstance(project_id, uuid.UUID):
        return project_id
    try:
        return uuid.UUID(str(project_id))
    except ValueError as error:
        raise ProjectNotFoundError(project_id) from error


def _require_text(field_name: str, value: str | None, message: str) -> str:
    cleaned = (value or '').strip()
    if not cleaned:
        raise ValidationError(message, code=f'{field_name}_required')
    return cleaned


def _lock_project(project_id: object) -> Project:
    """Fetch a project row for update (caller holds a transaction)."""
    try:
        return Project.objects.select_for_update().get(
            pk=_parse_project_id(project_id),
        )
    except Project.DoesNotExist as error:
        raise ProjectNotFoundError(project_id) from error


def _touch(project: Project) -> None:
    project.save(update_fields=[_UPDATED_AT_FIELD])


def get_project(project_id: object) -> Project:
    """Get a project with owner, members, files and comments loaded.

    Args:
        project_id: Project id (UUID or its string form).

    Returns:
        Project instance.

    Raises:
        ProjectNotFoundError: If the id is malformed or unknown.
    """
    try:
        return _project_queryset().get(pk=_parse_project_id(project_id))
    except Project.DoesNotExist as error:
        logger.info('Project not found: %s', project_id)
        raise ProjectNotFoundError(project_id) from error


def list_projects(owner: _User | None = None) -> QuerySet[Project]:
    """List projects, newest first.

    Args:
        owner: Restrict to projects owned by this user. None lists all.

    Returns:
        QuerySet ordered by creation time descending.
    """
    projects = _project_queryset()
    if owner is not None:
        projects = projects.filter(owner=owner)
    return projects.order_by('-created_at')


def create_project(  # noqa: WPS211
    owner: _User,
    *,
    title: str | None,
    description: str | None,
    technologies: Iterable[str] = (),
    github: str = '',
    demo: str = '',
    files: Sequence[UploadedFile] = (),
) -> Project:
    """Create a project, optionally with its initial file batch.

    The whole batch is admitted before anything is written. Files are
    then stored inside the same transaction that creates the record;
    if any step fails the record is rolled back and the files written
    so far are removed. Either the project exists with all its files,
    or nothing does.

    Args:
        owner: Authenticated caller, becomes the owner.
        title: Project title (required).
        description: Project description (required).
        technologies: Ordered technology names.
        github: Optional repository link.
        demo: Optional demo link.
        files: Uploaded files for the project.

    Returns:
        Created Project instance.

    Raises:
        NotAuthenticatedError: If owner is not authenticated.
        ValidationError: If title or description is missing.
        AdmissionRejectedError: If any file violates the admission policy.
        StorageError: If a file cannot be written.
    """
    authorize(Action.CREATE, None, owner)

    title = _require_text('title', title, 'title and description are required')
    description = _require_text(
        'description',
        description,
        'title and description are required',
    )

    if files:
        admit_batch(files)

    project = Project(
        title=title,
        description=description,
        technologies=[str(name) for name in technologies],
        github=github or '',
        demo=demo or '',
        owner=owner,
    )
    stored: list[FileMetadata] = []
    try:
        with transaction.atomic():
            if files:
                project.storage_folder = allocate_storage_folder(project)
            project.save(force_insert=True)
            for uploaded_file in files:
                stored.append(persist_file(project.storage_folder, uploaded_file))
            _record_files(project, stored)
    except Exception:
        logger.exception(
            'Project creation failed, rolling back %d stored files',
            len(stored),
        )
        _discard_files(
            [entry.storage_path for entry in stored],
            project.storage_folder,
        )
        raise

    logger.info(
        'Project created: %s by %s with %d files',
        project.pk,
        owner.username,
        len(stored),
    )
    return get_project(project.pk)


def _record_files(project: Project, metadata: Sequence[FileMetadata]) -> None:
    ProjectFile.objects.bulk_create([
        ProjectFile(
            project=project,
            original_name=entry.original_name,
            stored_name=entry.stored_name,
            file=entry.storage_path,
            size_bytes=entry.size_bytes,
            mime_type=entry.mime_type,
            position=position,
        )
        for position, entry in enumerate(metadata)
    ])


def _discard_files(storage_paths: Iterable[str], folder: str) -> None:
    storage = get_storage()
    for storage_path in storage_paths:
        storage.rollback_upload(storage_path)
    if folder:
        storage.remove_folder(folder)


def toggle_like(project_id: object, user: _User) -> LikeState:
    """Like the project, or unlike it if the user already does.

    Runs under a row lock so concurrent toggles are serialized.

    Args:
        project_id: Project id.
        user: Requesting user.

    Returns:
        New like count and whether the user now likes the project.

    Raises:
        ProjectNotFoundError: If the project does not exist.
        NotAuthenticatedError: If user is not authenticated.
    """
    with transaction.atomic():
        project = _lock_project(project_id)
        authorize(Action.LIKE, project, user)

        if project.likes.filter(pk=user.pk).exists():
            project.likes.remove(user)
            liked = False
        else:
            project.likes.add(user)
            liked = True

        _touch(project)
        like_count = project.likes.count()

    logger.info(
        'User %s %s project %s (%d likes)',
        user.username,
        'liked' if liked else 'unliked',
        project.pk,
        like_count,
    )
    return LikeState(likes=like_count, liked=liked)


def add_collaborator(project_id: object, user: _User) -> Project:
    """Add the requesting user as a collaborator.

    Args:
        project_id: Project id.
        user: Requesting user, joins the project.

    Returns:
        Updated Project instance.

    Raises:
        ProjectNotFoundError: If the project does not exist.
        NotAuthenticatedError: If user is not authenticated.
        ConflictError: If the user already collaborates.
        ForbiddenError: If the owner joins and the policy forbids it.
    """
    with transaction.atomic():
        project = _lock_project(project_id)
        authorize(Action.COLLABORATE, project, user)

        if project.collaborators.filter(pk=user.pk).exists():
            raise ConflictError('Already a collaborator')

        allow_owner = settings.PROJECTS_ALLOW_OWNER_AS_COLLABORATOR
        if not allow_owner and is_owner(project, user):
            raise ForbiddenError('Owner cannot be added as a collaborator')

        project.collaborators.add(user)
        _touch(project)

    logger.info('User %s joined project %s', user.username, project.pk)
    return get_project(project.pk)


def add_comment(project_id: object, user: _User, text: str | None) -> Comment:
    """Append a comment to a project.

    Comments are never edited or deleted.

    Args:
        project_id: Project id.
        user: Comment author.
        text: Comment text.

    Returns:
        Created Comment instance.

    Raises:
        ValidationError: If the text is empty.
        ProjectNotFoundError: If the project does not exist.
        NotAuthenticatedError: If user is not authenticated.
    """
    text = _require_text('comment', text, 'Comment is required')

    with transaction.atomic():
        project = _lock_project(project_id)
        authorize(Action.COMMENT, project, user)
        comment = Comment.objects.create(project=project, user=user, text=text)
        _touch(project)

    logger.info('User %s commented on project %s', user.username, project.pk)
    return comment
