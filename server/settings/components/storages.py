"""Django storage configuration for project uploads.

Project files live on the local filesystem under a single uploads root.
Every project gets its own folder below ``projects/``.
"""

from typing import Any, Final

from server.settings.components import BASE_DIR, config

PROJECTS_UPLOAD_ROOT = config(
    'PROJECTS_UPLOAD_ROOT',
    default=str(BASE_DIR.joinpath('uploads')),
)

MEDIA_ROOT = PROJECTS_UPLOAD_ROOT

MEDIA_URL = '/uploads/'

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.projects.infrastructure.storage.ProjectStorage',
        'OPTIONS': {
            'location': PROJECTS_UPLOAD_ROOT,
            'base_url': MEDIA_URL,
            # Stored filename equals the uploaded filename
            'allow_overwrite': True,
        },
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
