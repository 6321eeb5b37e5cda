"""Django admin configuration for projects app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.projects.infrastructure.metadata import format_size
from server.apps.projects.logic.deletion import purge_project
from server.apps.projects.models import Comment, Project, ProjectFile

class ProjectFileInline(admin.TabularInline):
    """Read-only file list inside the project page.

    The file set is fixed at creation, so files cannot be added here.
    """

    model = ProjectFile
    extra = 0
    can_delete = False
    fields = ['original_name', 'file', 'mime_type', 'size_bytes', 'uploaded_at']
    readonly_fields = fields

    def has_add_permission(
        self,
        request: HttpRequest,
        obj: Project | None = None,
    ) -> bool:
        """Disallow adding files after creation."""
        return False


class CommentInline(admin.TabularInline):
    """Comments of a project (append-only, read-only here)."""

    model = Comment
    extra = 0
    can_delete = False
    fields = ['user', 'text', 'created_at']
    readonly_fields = fields

    def has_add_permission(
        self,
        request: HttpRequest,
        obj: Project | None = None,
    ) -> bool:
        """Comments are written through the API only."""
        return False


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for Project model."""

    list_display = [
        'title',
        'owner',
        'file_count',
        'storage_size_display',
        'created_at',
    ]

    list_filter = ['created_at']

    search_fields = ['title', 'description', 'owner__username']

    readonly_fields = [
        'id',
        'owner',
        'storage_folder',
        'created_at',
        'updated_at',
    ]

    filter_horizontal = ['collaborators', 'likes']

    inlines = [ProjectFileInline, CommentInline]

    def file_count(self, obj: Project) -> int:
        """Display number of stored files.

        Args:
            obj: Project instance.

        Returns:
            Number of files.
        """
        return len(obj.files.all())
    file_count.short_description = 'Files'  # type: ignore[attr-defined]

    def storage_size_display(self, obj: Project) -> str:
        """Display total stored size.

        Args:
            obj: Project instance.

        Returns:
            Formatted total size of the project's files.
        """
        return format_size(sum(
            project_file.size_bytes for project_file in obj.files.all()
        ))
    storage_size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def delete_model(self, request: HttpRequest, obj: Project) -> None:
        """Delete stored files before the record, as the API does.

        Args:
            request: HTTP request.
            obj: Project to delete.
        """
        purge_project(obj)

    def delete_queryset(
        self,
        request: HttpRequest,
        queryset: QuerySet[Project],
    ) -> None:
        """Bulk delete action, one project at a time.

        Args:
            request: HTTP request.
            queryset: Selected projects.
        """
        for project in queryset.prefetch_related('files'):
            purge_project(project)

    def get_queryset(self, request: HttpRequest) -> QuerySet[Project]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related(
            'owner',
        ).prefetch_related('files')
