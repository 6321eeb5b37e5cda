"""Tests for API error rendering."""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status

from server.apps.projects.exceptions import (
    AdmissionRejectedError,
    RejectionReason,
    StorageError,
)
from server.exception_handler import domain_exception_handler


def test_field_errors_are_flattened():
    """Test serializer errors keep their details next to one message."""
    exc = exceptions.ValidationError({'email': ['Enter a valid email address.']})

    response = domain_exception_handler(exc, {})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data['success'] is False
    assert response.data['message'] == 'email: Enter a valid email address.'
    assert response.data['code'] == 'invalid'
    assert response.data['errors'] == {'email': ['Enter a valid email address.']}


def test_django_validation_error():
    """Test model level validation maps to 400."""
    response = domain_exception_handler(
        DjangoValidationError('Comment is required'),
        {},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data == {
        'success': False,
        'message': 'Comment is required',
        'code': 'invalid',
    }


def test_admission_rejection_reason():
    """Test rejections expose their reason."""
    exc = AdmissionRejectedError(RejectionReason.TOO_MANY_FILES, limit=20)

    response = domain_exception_handler(exc, {})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data['reason'] == 'too-many-files'
    assert response.data['message'] == 'Too many files. Maximum is 20 files.'


def test_oversize_is_payload_too_large():
    """Test oversize rejections use 413."""
    exc = AdmissionRejectedError(RejectionReason.OVERSIZE, 'big.zip', '50 MB')

    response = domain_exception_handler(exc, {})

    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    assert response.data['message'] == 'File too large. Maximum size is 50 MB.'


def test_storage_error_is_server_error():
    """Test storage failures map to 500."""
    response = domain_exception_handler(
        StorageError('projects/x/a.txt', 'Failed to store file'),
        {},
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data['code'] == 'storage_error'


def test_unknown_errors_propagate():
    """Test unrelated exceptions are left to Django."""
    assert domain_exception_handler(RuntimeError('boom'), {}) is None
