"""Django app configuration for projects app."""

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """Configuration for projects app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.projects'
    verbose_name = 'Projects'
