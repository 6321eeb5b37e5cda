"""Business logic for registration, login and bearer tokens."""

import logging
import uuid
from typing import Any

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from server.apps.accounts.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
)

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def _require_credentials(username: str | None, password: str | None) -> None:
    if not username or not password:
        raise ValidationError(
            'username and password are required',
            code='credentials_required',
        )


def default_email(username: str) -> str:
    """Build the placeholder email used when none is given.

    Args:
        username: Username of the new account.

    Returns:
        Email like 'alice@codeconnect.local'.
    """
    return f'{username}@{settings.ACCOUNTS_DEFAULT_EMAIL_DOMAIN}'


def _unused_placeholder_email(user_model: Any, username: str) -> str:
    """Placeholder email, with a random tag if another account holds it."""
    email = default_email(username)
    if user_model.objects.filter(email=email).exists():
        local_part, domain = email.rsplit('@', 1)
        email = f'{local_part}+{uuid.uuid4().hex[:8]}@{domain}'
    return email


def register_user(
    username: str | None,
    password: str | None,
    email: str | None = None,
) -> _User:
    """Create a new account.

    Args:
        username: Unique username.
        password: Raw password, stored hashed.
        email: Unique email; defaults to a placeholder address that is
            unique as well.

    Returns:
        Created user.

    Raises:
        ValidationError: If username or password is missing.
        UserAlreadyExistsError: If the username or given email is taken.
    """
    _require_credentials(username, password)
    user_model = get_user_model()
    if email:
        email = email.strip().lower()
    else:
        email = _unused_placeholder_email(user_model, username)

    try:
        with transaction.atomic():
            user = user_model.objects.create_user(
                username=username,
                email=email,
                password=password,
            )
    except IntegrityError as error:
        logger.info('Registration conflict for username %s', username)
        taken_field = (
            'Username'
            if user_model.objects.filter(username=username).exists()
            else 'Email'
        )
        raise UserAlreadyExistsError(taken_field) from error

    logger.info('User registered: %s (ID: %d)', user.username, user.pk)
    return user


def login_user(username: str | None, password: str | None) -> _User:
    """Check credentials of an existing account.

    Args:
        username: Username.
        password: Raw password.

    Returns:
        Authenticated user.

    Raises:
        ValidationError: If username or password is missing.
        InvalidCredentialsError: If the credentials do not match.
    """
    _require_credentials(username, password)
    user = authenticate(username=username, password=password)
    if user is None:
        logger.warning('Login failed for user: %s', username)
        raise InvalidCredentialsError()
    logger.info('User logged in: %s', username)
    return user


def issue_token(user: _User) -> str:
    """Issue a bearer token for the user.

    The token carries the user id and username.

    Args:
        user: Authenticated user.

    Returns:
        Encoded access token.
    """
    token = AccessToken.for_user(user)
    token['username'] = user.username
    return str(token)
