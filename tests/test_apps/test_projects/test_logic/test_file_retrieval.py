"""Tests for file download and preview."""

import pytest

from server.apps.projects.exceptions import (
    NotAuthenticatedError,
    ProjectFileNotFoundError,
    ProjectNotFoundError,
    StorageError,
    UnsupportedPreviewError,
)
from server.apps.projects.logic.file_retrieval import (
    find_file,
    is_previewable,
    open_download,
    read_preview,
    resolve_file,
)
from server.apps.projects.logic.project_operations import create_project

_MISSING_ID = '00000000-0000-0000-0000-000000000000'


@pytest.mark.django_db
def test_find_file(project_with_files):
    """Test file lookup by exact stored name."""
    project_file = find_file(project_with_files, 'logo.png')

    assert project_file.original_name == 'logo.png'
    assert project_file.mime_type == 'image/png'


@pytest.mark.django_db
def test_find_file_is_case_sensitive(project_with_files):
    """Test lookup does not fold case."""
    with pytest.raises(ProjectFileNotFoundError):
        find_file(project_with_files, 'INDEX.html')


@pytest.mark.django_db
def test_resolve_file_unknown_project():
    """Test resolving in a missing project fails with project not found."""
    with pytest.raises(ProjectNotFoundError):
        resolve_file(_MISSING_ID, 'index.html')


@pytest.mark.django_db
def test_resolve_file_unknown_name(project_with_files):
    """Test resolving a missing name fails with file not found."""
    with pytest.raises(ProjectFileNotFoundError):
        resolve_file(project_with_files.pk, 'missing.js')


@pytest.mark.django_db
def test_open_download(project_with_files, other_user):
    """Test any authenticated user can download the exact bytes."""
    project_file, handle = open_download(
        project_with_files.pk,
        'logo.png',
        other_user,
    )
    with handle:
        content = handle.read()

    assert project_file.original_name == 'logo.png'
    assert content == b'\x89PNG\r\n\x1a\n\x00'


@pytest.mark.django_db
def test_open_download_requires_authentication(
    project_with_files,
    anonymous_user,
):
    """Test anonymous downloads are refused."""
    with pytest.raises(NotAuthenticatedError):
        open_download(project_with_files.pk, 'index.html', anonymous_user)


@pytest.mark.django_db
def test_open_download_missing_bytes(project_with_files, user, upload_root):
    """Test a record whose bytes are gone surfaces as a storage error."""
    (upload_root / project_with_files.storage_folder / 'index.html').unlink()

    with pytest.raises(StorageError):
        open_download(project_with_files.pk, 'index.html', user)


@pytest.mark.django_db
def test_read_preview(project_with_files, other_user):
    """Test text files are decoded for preview."""
    preview = read_preview(project_with_files.pk, 'index.html', other_user)

    assert preview.content == '<h1>hello</h1>'
    assert preview.filename == 'index.html'
    assert preview.mime_type == 'text/html'


@pytest.mark.django_db
def test_read_preview_binary_type(project_with_files, user):
    """Test images are not previewable."""
    with pytest.raises(UnsupportedPreviewError) as exc_info:
        read_preview(project_with_files.pk, 'logo.png', user)

    assert exc_info.value.mime_type == 'image/png'


@pytest.mark.django_db
def test_read_preview_by_extension(user, make_upload):
    """Test a text extension is previewable whatever the declared type."""
    project = create_project(
        user,
        title='Docs',
        description='x',
        files=[make_upload('README.md', b'# Title', 'application/octet-stream')],
    )

    preview = read_preview(project.pk, 'README.md', user)

    assert preview.content == '# Title'


@pytest.mark.django_db
def test_read_preview_undecodable(user, make_upload):
    """Test non UTF-8 content is reported as unsupported."""
    project = create_project(
        user,
        title='Latin',
        description='x',
        files=[make_upload('notes.txt', b'caf\xe9 \xff', 'text/plain')],
    )

    with pytest.raises(UnsupportedPreviewError):
        read_preview(project.pk, 'notes.txt', user)


@pytest.mark.django_db
def test_read_preview_requires_authentication(
    project_with_files,
    anonymous_user,
):
    """Test anonymous previews are refused."""
    with pytest.raises(NotAuthenticatedError):
        read_preview(project_with_files.pk, 'index.html', anonymous_user)


@pytest.mark.django_db
def test_is_previewable(project_with_files):
    """Test previewability of stored files."""
    html_file = find_file(project_with_files, 'index.html')
    png_file = find_file(project_with_files, 'logo.png')

    assert is_previewable(html_file)
    assert not is_previewable(png_file)
