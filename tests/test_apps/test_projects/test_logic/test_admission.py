"""Tests for the upload admission policy."""

from types import SimpleNamespace

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from server.apps.projects.exceptions import (
    AdmissionRejectedError,
    RejectionReason,
)
from server.apps.projects.logic.admission import (
    AdmissionPolicy,
    admit_batch,
    check_file,
    check_upload_fields,
)


@pytest.fixture
def policy():
    """Small policy to keep limits easy to reach.

    Returns:
        AdmissionPolicy with 3 files of at most 100 bytes.
    """
    return AdmissionPolicy(max_files=3, max_file_size=100)


def _upload(name, size=10, content_type='text/plain'):
    return SimpleUploadedFile(name, b'x' * size, content_type=content_type)


def test_policy_defaults_from_settings(settings):
    """Test policy reads limits from settings."""
    settings.PROJECTS_MAX_FILES = 7
    settings.PROJECTS_MAX_FILE_SIZE = 1234

    policy = AdmissionPolicy.from_settings()

    assert policy.max_files == 7
    assert policy.max_file_size == 1234
    assert policy.upload_field == 'files'


def test_default_limits():
    """Test the shipped limits: 20 files, 50 MB each."""
    policy = AdmissionPolicy.from_settings()

    assert policy.max_files == 20
    assert policy.max_file_size == 50 * 1024 * 1024


def test_check_file_accepts_allowed_mime_type(policy):
    """Test file with allowed MIME type and unknown extension is accepted."""
    check_file(_upload('notes.unknown', content_type='text/plain'), 0, policy)


def test_check_file_accepts_allowed_extension(policy):
    """Test allowed extension wins over an unreliable MIME type."""
    candidate = _upload('app.JS', content_type='application/octet-stream')

    check_file(candidate, 0, policy)


def test_check_file_rejects_disallowed_type(policy):
    """Test file matching neither allow-list is rejected."""
    candidate = _upload('setup.exe', content_type='application/x-msdownload')

    with pytest.raises(AdmissionRejectedError) as exc_info:
        check_file(candidate, 0, policy)

    assert exc_info.value.reason == RejectionReason.DISALLOWED_TYPE
    assert exc_info.value.filename == 'setup.exe'
    assert 'File type not allowed: setup.exe' in str(exc_info.value)


def test_check_file_accepts_exact_size_limit(policy):
    """Test file at exactly the size limit is accepted."""
    check_file(_upload('a.txt', size=100), 0, policy)


def test_check_file_rejects_oversize(policy):
    """Test file above the size limit is rejected."""
    with pytest.raises(AdmissionRejectedError) as exc_info:
        check_file(_upload('big.txt', size=101), 0, policy)

    assert exc_info.value.reason == RejectionReason.OVERSIZE


def test_oversize_message_uses_megabytes():
    """Test oversize message shows the limit in megabytes."""
    policy = AdmissionPolicy(max_files=1, max_file_size=1024 * 1024)
    candidate = _upload('big.txt', size=1024 * 1024 + 1)

    with pytest.raises(AdmissionRejectedError) as exc_info:
        check_file(candidate, 0, policy)

    assert str(exc_info.value) == 'File too large. Maximum size is 1 MB.'


def test_check_file_rejects_when_count_exceeded(policy):
    """Test the file after the maximum count is rejected."""
    with pytest.raises(AdmissionRejectedError) as exc_info:
        check_file(_upload('d.txt'), 3, policy)

    assert exc_info.value.reason == RejectionReason.TOO_MANY_FILES
    assert exc_info.value.limit == 3


@pytest.mark.parametrize('filename', ['', '.', '..', '../etc.txt', 'a/b.txt'])
def test_check_file_rejects_unusable_names(policy, filename):
    """Test names with directory parts are rejected."""
    candidate = SimpleNamespace(name=filename, content_type='text/plain', size=1)

    with pytest.raises(AdmissionRejectedError) as exc_info:
        check_file(candidate, 0, policy)

    assert exc_info.value.reason == RejectionReason.UNEXPECTED_FIELD


def test_admit_batch_accepts_valid_batch(policy):
    """Test a batch within all limits passes."""
    admit_batch([_upload('a.txt'), _upload('b.css', content_type='text/css')], policy)


def test_admit_batch_rejects_too_many_files(policy):
    """Test batch larger than the count limit is rejected."""
    batch = [_upload(f'{index}.txt') for index in range(4)]

    with pytest.raises(AdmissionRejectedError) as exc_info:
        admit_batch(batch, policy)

    assert exc_info.value.reason == RejectionReason.TOO_MANY_FILES


def test_admit_batch_rejects_whole_batch_for_one_bad_file(policy):
    """Test one disallowed file rejects the entire batch."""
    batch = [
        _upload('a.txt'),
        _upload('virus.exe', content_type='application/x-msdownload'),
    ]

    with pytest.raises(AdmissionRejectedError) as exc_info:
        admit_batch(batch, policy)

    assert exc_info.value.reason == RejectionReason.DISALLOWED_TYPE


def test_admit_batch_rejects_duplicate_names(policy):
    """Test two files with the same name in one batch are rejected."""
    with pytest.raises(AdmissionRejectedError) as exc_info:
        admit_batch([_upload('a.txt'), _upload('a.txt')], policy)

    assert exc_info.value.reason == RejectionReason.DUPLICATE_FILENAME


def test_check_upload_fields_accepts_files_field(policy):
    """Test the configured upload field is accepted."""
    check_upload_fields(['files', 'files'], policy)


def test_check_upload_fields_rejects_other_field(policy):
    """Test files sent under another field name are rejected."""
    with pytest.raises(AdmissionRejectedError) as exc_info:
        check_upload_fields(['files', 'attachment'], policy)

    assert exc_info.value.reason == RejectionReason.UNEXPECTED_FIELD
