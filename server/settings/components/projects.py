"""Admission and collaboration policy for projects."""

from server.settings.components import config

# Maximum number of files accepted in a single upload request
PROJECTS_MAX_FILES = config('PROJECTS_MAX_FILES', cast=int, default=20)

# Per-file size cap in bytes (50 MB)
PROJECTS_MAX_FILE_SIZE = config(
    'PROJECTS_MAX_FILE_SIZE',
    cast=int,
    default=50 * 1024 * 1024,
)

# Multipart field that carries the project files
PROJECTS_UPLOAD_FIELD = config('PROJECTS_UPLOAD_FIELD', default='files')

PROJECTS_ALLOW_OWNER_AS_COLLABORATOR = config(
    'PROJECTS_ALLOW_OWNER_AS_COLLABORATOR',
    cast=bool,
    default=True,
)
