"""Database models for projects app."""

import uuid
from pathlib import Path
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_TITLE_MAX_LENGTH: Final = 200
_LINK_MAX_LENGTH: Final = 500
_FOLDER_MAX_LENGTH: Final = 255
_FILENAME_MAX_LENGTH: Final = 255
_STORAGE_PATH_MAX_LENGTH: Final = 512
_MIME_TYPE_MAX_LENGTH: Final = 255


@final
class Project(models.Model):
    """Shareable unit of code owned by a user.

    The file set is fixed at creation time. Files live under
    ``storage_folder`` (``projects/<id>``) relative to the uploads root,
    which stays empty for metadata-only projects.
    """

    # Assigned before storage allocation, doubles as the folder name
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    title = models.CharField(max_length=_TITLE_MAX_LENGTH)
    description = models.TextField()

    technologies = models.JSONField(
        default=list,
        blank=True,
        help_text='Ordered list of technology names',
    )

    github = models.CharField(
        max_length=_LINK_MAX_LENGTH,
        blank=True,
        default='',
    )
    demo = models.CharField(
        max_length=_LINK_MAX_LENGTH,
        blank=True,
        default='',
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='projects',
        db_index=True,
    )

    collaborators = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='collaborations',
        blank=True,
    )

    # The through table is unique per (project, user) pair
    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='liked_projects',
        blank=True,
    )

    storage_folder = models.CharField(
        max_length=_FOLDER_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Folder relative to the uploads root: projects/{id}',
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Project'  # type: ignore[mutable-override]
        verbose_name_plural = 'Projects'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['owner', '-created_at'],
                name='projects_owner_recent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.CheckConstraint(
                condition=~models.Q(title=''),
                name='projects_title_not_empty',
            ),
            models.CheckConstraint(
                condition=~models.Q(description=''),
                name='projects_description_not_empty',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner.username}:{self.title}'


@final
class ProjectFile(models.Model):
    """Metadata of one file stored in a project's folder.

    ``stored_name`` equals ``original_name``; ``file`` holds the storage
    path ``projects/{project_id}/{stored_name}``.
    """

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='files',
    )

    original_name = models.CharField(max_length=_FILENAME_MAX_LENGTH)
    stored_name = models.CharField(max_length=_FILENAME_MAX_LENGTH)

    file = models.FileField(
        upload_to='',
        max_length=_STORAGE_PATH_MAX_LENGTH,
        help_text='Path in storage: projects/{project_id}/{filename}',
    )

    size_bytes = models.BigIntegerField(help_text='File size in bytes')

    mime_type = models.CharField(max_length=_MIME_TYPE_MAX_LENGTH)

    # Upload order within the batch
    position = models.PositiveIntegerField(default=0)

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Project file'  # type: ignore[mutable-override]
        verbose_name_plural = 'Project files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['position', 'id']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['project', 'stored_name'],
                name='project_files_name_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.file.name

    @property
    def storage_path(self) -> str:
        """Path of the stored bytes relative to the uploads root."""
        return self.file.name

    def get_extension(self) -> str:
        """Extract file extension.

        Returns:
            Extension without dot (lowercase).
        """
        return Path(self.original_name).suffix.lstrip('.').lower()


@final
class Comment(models.Model):
    """Append-only comment on a project."""

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='comments',
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comments',
    )

    text = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Comment'  # type: ignore[mutable-override]
        verbose_name_plural = 'Comments'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['created_at', 'id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username} on {self.project_id}'
