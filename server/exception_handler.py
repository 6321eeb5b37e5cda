"""Rendering of API errors.

Every failure is returned as ``{'success': False, 'message', 'code'}``
with a status that tells the error kinds apart.
"""

import logging
from typing import Any, Final

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from server.apps.accounts.exceptions import InvalidCredentialsError
from server.apps.projects.exceptions import (
    AdmissionRejectedError,
    ConflictError,
    ForbiddenError,
    NotAuthenticatedError,
    ProjectFileNotFoundError,
    ProjectNotFoundError,
    RejectionReason,
    StorageError,
    UnsupportedPreviewError,
)

logger = logging.getLogger(__name__)

# Order matters: subclasses must come before their bases
_ERROR_STATUSES: Final = (
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED, 'not_authenticated'),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED, 'invalid_credentials'),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, 'forbidden'),
    (ProjectNotFoundError, status.HTTP_404_NOT_FOUND, 'not_found'),
    (ProjectFileNotFoundError, status.HTTP_404_NOT_FOUND, 'file_not_found'),
    (ConflictError, status.HTTP_409_CONFLICT, 'conflict'),
    (
        UnsupportedPreviewError,
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        'unsupported_type',
    ),
    (AdmissionRejectedError, status.HTTP_400_BAD_REQUEST, 'admission_rejected'),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR, 'storage_error'),
    (DjangoValidationError, status.HTTP_400_BAD_REQUEST, 'invalid'),
)


def _first_message(detail: Any) -> str:
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        if not detail:
            return ''
        field_name, field_detail = next(iter(detail.items()))
        return f'{field_name}: {_first_message(field_detail)}'
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def _domain_message(exc: Exception) -> str:
    if isinstance(exc, DjangoValidationError):
        return ' '.join(exc.messages)
    return str(exc)


def domain_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response | None:
    """Turn API and domain exceptions into JSON error responses.

    Args:
        exc: Raised exception.
        context: View context from DRF.

    Returns:
        Error response, or None to let the exception propagate.
    """
    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data
        response.data = {
            'success': False,
            'message': _first_message(detail),
            'code': getattr(exc, 'default_code', 'error'),
        }
        if isinstance(detail, dict) and 'detail' not in detail:
            response.data['errors'] = detail
        return response

    for error_class, status_code, code in _ERROR_STATUSES:
        if not isinstance(exc, error_class):
            continue
        body: dict[str, Any] = {
            'success': False,
            'message': _domain_message(exc),
            'code': code,
        }
        if isinstance(exc, AdmissionRejectedError):
            body['reason'] = exc.reason.value
            if exc.reason == RejectionReason.OVERSIZE:
                status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error('Request failed: %s', exc)
        return Response(body, status=status_code)

    return None
