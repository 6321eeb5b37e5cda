"""REST API views for projects."""

from typing import Any

from django.conf import settings
from django.http import FileResponse
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from server.apps.projects.logic.admission import check_upload_fields
from server.apps.projects.logic.deletion import delete_project
from server.apps.projects.logic.file_retrieval import open_download, read_preview
from server.apps.projects.logic.project_operations import (
    add_collaborator,
    add_comment,
    create_project,
    get_project,
    list_projects,
    toggle_like,
)
from server.apps.projects.serializers import (
    CommentCreateSerializer,
    CommentSerializer,
    ProjectCreateSerializer,
    ProjectSerializer,
    UserSummarySerializer,
)


def _created(project: Any) -> Response:
    return Response(
        {'success': True, 'project': ProjectSerializer(project).data},
        status=status.HTTP_201_CREATED,
    )


class ProjectListCreateView(APIView):
    """List all projects (public) or create a metadata-only project."""

    def get_permissions(self) -> list[permissions.BasePermission]:
        """Listing is public, creating needs a bearer token."""
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request: Request) -> Response:
        """Return every project, newest first."""
        projects = list_projects()
        return Response({
            'success': True,
            'projects': ProjectSerializer(projects, many=True).data,
        })

    def post(self, request: Request) -> Response:
        """Create a project without files."""
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = create_project(request.user, **serializer.validated_data)
        return _created(project)


class ProjectUploadView(APIView):
    """Create a project together with its file batch."""

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request: Request) -> Response:
        """Admit the batch, store the files and create the record."""
        check_upload_fields(request.FILES.keys())
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = create_project(
            request.user,
            files=request.FILES.getlist(settings.PROJECTS_UPLOAD_FIELD),
            **serializer.validated_data,
        )
        return _created(project)


class MyProjectsView(APIView):
    """Projects owned by the requesting user."""

    def get(self, request: Request) -> Response:
        """Return the caller's projects, newest first."""
        projects = list_projects(owner=request.user)
        return Response({
            'success': True,
            'projects': ProjectSerializer(projects, many=True).data,
        })


class ProjectDetailView(APIView):
    """Show a project (public) or delete it (owner only)."""

    def get_permissions(self) -> list[permissions.BasePermission]:
        """Viewing is public, deleting needs a bearer token."""
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request: Request, project_id: str) -> Response:
        """Return one project."""
        return Response(ProjectSerializer(get_project(project_id)).data)

    def delete(self, request: Request, project_id: str) -> Response:
        """Delete the project files, then the record."""
        delete_project(project_id, request.user)
        return Response({
            'success': True,
            'message': 'Project deleted successfully',
        })


class ProjectLikeView(APIView):
    """Toggle the caller's like."""

    def post(self, request: Request, project_id: str) -> Response:
        """Like or unlike the project."""
        like_state = toggle_like(project_id, request.user)
        return Response({'likes': like_state.likes, 'liked': like_state.liked})


class ProjectCollaborateView(APIView):
    """Join a project as collaborator."""

    def post(self, request: Request, project_id: str) -> Response:
        """Add the caller to the collaborators."""
        project = add_collaborator(project_id, request.user)
        return Response({
            'message': 'Added as collaborator',
            'collaborators': UserSummarySerializer(
                project.collaborators.all(),
                many=True,
            ).data,
        })


class ProjectCommentView(APIView):
    """Append a comment."""

    def post(self, request: Request, project_id: str) -> Response:
        """Add the comment and return the whole thread."""
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = add_comment(
            project_id,
            request.user,
            serializer.validated_data.get('comment'),
        )
        comments = comment.project.comments.select_related('user')
        return Response({
            'message': 'Comment added',
            'comments': CommentSerializer(comments, many=True).data,
        })


class ProjectFileDownloadView(APIView):
    """Download one project file as an attachment."""

    def get(self, request: Request, project_id: str, filename: str) -> FileResponse:
        """Stream the stored bytes under the original filename."""
        project_file, handle = open_download(project_id, filename, request.user)
        return FileResponse(
            handle,
            as_attachment=True,
            filename=project_file.original_name,
            content_type=project_file.mime_type,
        )


class ProjectFileContentView(APIView):
    """Inline text preview of a project file."""

    def get(self, request: Request, project_id: str, filename: str) -> Response:
        """Return decoded text content."""
        preview = read_preview(project_id, filename, request.user)
        return Response({
            'content': preview.content,
            'filename': preview.filename,
            'mimetype': preview.mime_type,
        })
