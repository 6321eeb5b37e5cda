"""Metadata extraction utilities for project files."""

import mimetypes
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Final

_FALLBACK_MIME_TYPE: Final = 'application/octet-stream'

_RESERVED_NAMES: Final = frozenset(('', '.', '..'))

_KB: Final = 1024
_MB: Final = _KB * 1024
_GB: Final = _MB * 1024


def detect_mime_type(filename: str, declared: str | None = None) -> str:
    """Pick the MIME type recorded for an uploaded file.

    The type declared by the client wins. Otherwise the type is guessed
    from the filename extension with Python's mimetypes module.

    Args:
        filename: Filename with extension.
        declared: Content type reported by the client, if any.

    Returns:
        MIME type string (e.g., 'text/html', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    if declared and declared != _FALLBACK_MIME_TYPE:
        return declared
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return declared or _FALLBACK_MIME_TYPE
    return mime_type


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'index.HTML').

    Returns:
        Extension without dot, lowercase (e.g., 'html').
        Returns empty string if no extension.
    """
    extension = Path(filename).suffix
    return extension.lstrip('.').lower()


def is_plain_filename(filename: str) -> bool:
    """Check that a filename has no directory components.

    Args:
        filename: Filename as given by the uploader.

    Returns:
        True for names like 'app.js', False for '', '..', 'a/b.js'.
    """
    if filename in _RESERVED_NAMES or '\x00' in filename:
        return False
    return (
        PurePosixPath(filename).name == filename
        and PureWindowsPath(filename).name == filename
    )


def build_storage_path(folder: str, filename: str) -> str:
    """Join a project folder and a filename into a storage path.

    Args:
        folder: Project folder (e.g., 'projects/<id>').
        filename: Plain filename.

    Returns:
        Storage path (e.g., 'projects/<id>/index.html').
    """
    return f'{folder.rstrip("/")}/{filename}'


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '50 MB', '1.5 KB', '234 B').
    """
    for unit_size, unit in ((_GB, 'GB'), (_MB, 'MB'), (_KB, 'KB')):
        if size_bytes >= unit_size:
            scaled = f'{size_bytes / unit_size:.1f}'.removesuffix('.0')
            return f'{scaled} {unit}'
    return f'{size_bytes} B'
