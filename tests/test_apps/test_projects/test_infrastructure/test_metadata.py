"""Tests for metadata utilities."""

import pytest

from server.apps.projects.infrastructure.metadata import (
    build_storage_path,
    detect_mime_type,
    format_size,
    get_file_extension,
    is_plain_filename,
)


def test_detect_mime_type():
    """Test MIME type detection from filename."""
    assert detect_mime_type('test.pdf') == 'application/pdf'
    assert detect_mime_type('test.txt') == 'text/plain'
    assert detect_mime_type('test.png') == 'image/png'
    assert detect_mime_type('index.html') == 'text/html'


def test_detect_mime_type_prefers_declared():
    """Test the declared type is recorded as given."""
    assert detect_mime_type('script.js', 'application/javascript') == (
        'application/javascript'
    )


def test_detect_mime_type_ignores_generic_declared():
    """Test a generic declared type falls back to guessing."""
    assert detect_mime_type('test.pdf', 'application/octet-stream') == (
        'application/pdf'
    )


def test_detect_mime_type_unknown():
    """Test MIME type detection for unknown extension."""
    assert detect_mime_type('test.unknown') == 'application/octet-stream'


def test_get_file_extension():
    """Test extension extraction."""
    assert get_file_extension('index.HTML') == 'html'
    assert get_file_extension('archive.tar.gz') == 'gz'
    assert get_file_extension('Makefile') == ''


@pytest.mark.parametrize('filename', ['app.js', 'README.md', 'my file.txt'])
def test_is_plain_filename_accepts(filename):
    """Test ordinary names are plain."""
    assert is_plain_filename(filename)


@pytest.mark.parametrize('filename', [
    '',
    '.',
    '..',
    'a/b.js',
    '../secret.txt',
    'dir\\file.txt',
    'bad\x00.txt',
])
def test_is_plain_filename_rejects(filename):
    """Test names with directory parts are not plain."""
    assert not is_plain_filename(filename)


def test_build_storage_path():
    """Test folder and filename are joined with one separator."""
    assert build_storage_path('projects/abc', 'a.js') == 'projects/abc/a.js'
    assert build_storage_path('projects/abc/', 'a.js') == 'projects/abc/a.js'


def test_format_size():
    """Test human readable sizes."""
    assert format_size(234) == '234 B'
    assert format_size(1536) == '1.5 KB'
    assert format_size(50 * 1024 * 1024) == '50 MB'
    assert format_size(3 * 1024 * 1024 * 1024) == '3 GB'
