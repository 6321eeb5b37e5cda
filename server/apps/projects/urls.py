"""URL configuration for projects app."""

from django.urls import path

from server.apps.projects import views

app_name = 'projects'

urlpatterns = [
    path(
        'projects',
        views.ProjectListCreateView.as_view(),
        name='list',
    ),
    path(
        'projects/my',
        views.MyProjectsView.as_view(),
        name='my',
    ),
    path(
        'projects/upload',
        views.ProjectUploadView.as_view(),
        name='upload',
    ),
    path(
        'projects/<str:project_id>',
        views.ProjectDetailView.as_view(),
        name='detail',
    ),
    path(
        'projects/<str:project_id>/like',
        views.ProjectLikeView.as_view(),
        name='like',
    ),
    path(
        'projects/<str:project_id>/collaborate',
        views.ProjectCollaborateView.as_view(),
        name='collaborate',
    ),
    path(
        'projects/<str:project_id>/comment',
        views.ProjectCommentView.as_view(),
        name='comment',
    ),
    path(
        'projects/<str:project_id>/files/<str:filename>',
        views.ProjectFileDownloadView.as_view(),
        name='file-download',
    ),
    path(
        'projects/<str:project_id>/files/<str:filename>/content',
        views.ProjectFileContentView.as_view(),
        name='file-content',
    ),
]
