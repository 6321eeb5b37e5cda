"""Exceptions for accounts app."""

from server.apps.projects.exceptions import ConflictError


class UserAlreadyExistsError(ConflictError):
    """Raised when registration reuses a username or email."""

    def __init__(self, field: str = 'Username or email') -> None:
        """Initialize UserAlreadyExistsError.

        Args:
            field: Which credential is taken ('Username' or 'Email').
        """
        self.field = field
        super().__init__(f'{field} already exists')


class InvalidCredentialsError(Exception):
    """Raised when login credentials do not match any active user."""

    def __init__(self) -> None:
        """Initialize InvalidCredentialsError."""
        super().__init__('Invalid credentials')
