"""Tests for the project storage backend."""

import pytest
from django.core.files.base import ContentFile

from server.apps.projects.exceptions import StorageError
from server.apps.projects.infrastructure.storage import ProjectStorage


@pytest.fixture
def storage(upload_root):
    """Create storage rooted at the test uploads directory.

    Returns:
        ProjectStorage instance.
    """
    return ProjectStorage(location=str(upload_root), allow_overwrite=True)


def test_save_keeps_name(storage, upload_root):
    """Test files are stored under the requested name."""
    saved = storage.save('projects/p1/index.html', ContentFile(b'<p>'))

    assert saved == 'projects/p1/index.html'
    assert (upload_root / saved).read_bytes() == b'<p>'


def test_save_failure_raises_storage_error(storage, monkeypatch):
    """Test write errors are wrapped and leave no file behind."""
    def broken_save(name, content):
        raise OSError('disk full')

    monkeypatch.setattr(storage, '_save', broken_save)

    with pytest.raises(StorageError) as exc_info:
        storage.save('projects/p1/index.html', ContentFile(b'<p>'))

    assert exc_info.value.storage_path == 'projects/p1/index.html'
    assert not storage.has_file('projects/p1/index.html')


def test_allocate_folder_is_idempotent(storage, upload_root):
    """Test allocating the same folder twice succeeds."""
    storage.allocate_folder('projects/p1')
    storage.allocate_folder('projects/p1')

    assert (upload_root / 'projects' / 'p1').is_dir()


def test_rollback_upload(storage):
    """Test rollback removes a stored file."""
    storage.save('projects/p1/a.txt', ContentFile(b'a'))

    storage.rollback_upload('projects/p1/a.txt')

    assert not storage.has_file('projects/p1/a.txt')


def test_rollback_upload_swallows_errors(storage, monkeypatch):
    """Test rollback never raises."""
    def broken_delete(name):
        raise StorageError(name, 'denied')

    monkeypatch.setattr(storage, 'delete', broken_delete)

    storage.rollback_upload('projects/p1/a.txt')


def test_remove_folder(storage, upload_root):
    """Test empty folders are removed and missing ones count as removed."""
    storage.allocate_folder('projects/p1')

    assert storage.remove_folder('projects/p1')
    assert not (upload_root / 'projects' / 'p1').exists()
    assert storage.remove_folder('projects/p1')


def test_remove_folder_keeps_non_empty(storage):
    """Test folders with content are left alone."""
    storage.save('projects/p1/a.txt', ContentFile(b'a'))

    assert not storage.remove_folder('projects/p1')
    assert storage.has_file('projects/p1/a.txt')
