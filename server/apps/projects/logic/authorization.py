"""Authorization checks for project actions.

Listing and viewing projects is public. Every other action needs an
authenticated user, and deleting a project is reserved to its owner.
Collaborators have no elevated permissions.
"""

import enum
import logging
from typing import Any, Final

from server.apps.projects.exceptions import ForbiddenError, NotAuthenticatedError
from server.apps.projects.models import Project

# User type for Django's dynamic user model (AnonymousUser included)
_User = Any

logger = logging.getLogger(__name__)


@enum.unique
class Action(enum.StrEnum):
    """Something a requester can do to a project."""

    LIST = 'list'
    VIEW = 'view'
    CREATE = 'create'
    LIKE = 'like'
    COMMENT = 'comment'
    COLLABORATE = 'collaborate'
    DOWNLOAD = 'download'
    PREVIEW = 'preview'
    DELETE = 'delete'


PUBLIC_ACTIONS: Final = frozenset((Action.LIST, Action.VIEW))

OWNER_ONLY_ACTIONS: Final = frozenset((Action.DELETE,))


def is_authenticated(user: _User | None) -> bool:
    """Check whether a request carries a verified identity.

    Args:
        user: request.user or None.

    Returns:
        True for authenticated users.
    """
    return bool(user is not None and user.is_authenticated)


def is_owner(project: Project, user: _User | None) -> bool:
    """Check whether the user owns the project (exact id equality).

    Args:
        project: Project to check.
        user: Requesting user.

    Returns:
        True if the user is the owner.
    """
    if not is_authenticated(user):
        return False
    return str(project.owner_id) == str(user.pk)


def authorize(
    action: Action,
    project: Project | None,
    user: _User | None,
) -> None:
    """Allow the action or raise with the reason.

    Args:
        action: Requested action.
        project: Target project (None for create and list).
        user: Requesting user, None or anonymous when unauthenticated.

    Raises:
        NotAuthenticatedError: If a non-public action has no identity.
        ForbiddenError: If an owner-only action is requested by someone else.
    """
    if action in PUBLIC_ACTIONS:
        return

    if not is_authenticated(user):
        raise NotAuthenticatedError(action.value)

    if action in OWNER_ONLY_ACTIONS:
        if project is None or not is_owner(project, user):
            logger.warning(
                'User %s denied %s on project %s',
                user.pk,
                action.value,
                getattr(project, 'pk', None),
            )
            raise ForbiddenError(f'Not authorized to {action.value} this project')
