"""Shared fixtures for projects app tests."""

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.core.files.uploadedfile import SimpleUploadedFile

from server.apps.projects.logic.project_operations import create_project

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def anonymous_user():
    """Unauthenticated requester.

    Returns:
        AnonymousUser instance.
    """
    return AnonymousUser()


@pytest.fixture
def make_upload():
    """Factory for uploaded files.

    Returns:
        Callable building SimpleUploadedFile instances.
    """
    def factory(
        name: str = 'index.html',
        content: bytes = b'<h1>hello</h1>',
        content_type: str = 'text/html',
    ) -> SimpleUploadedFile:
        return SimpleUploadedFile(name, content, content_type=content_type)

    return factory


@pytest.fixture
def project(user):
    """Create metadata-only project owned by ``user``.

    Returns:
        Project instance.
    """
    return create_project(
        user,
        title='Demo',
        description='A demo project',
        technologies=['python', 'django'],
    )


@pytest.fixture
def project_with_files(user, make_upload):
    """Create project owned by ``user`` with two stored files.

    Returns:
        Project instance with 'index.html' and 'logo.png'.
    """
    return create_project(
        user,
        title='Website',
        description='Static website',
        files=[
            make_upload('index.html', b'<h1>hello</h1>', 'text/html'),
            make_upload('logo.png', b'\x89PNG\r\n\x1a\n\x00', 'image/png'),
        ],
    )


@pytest.fixture
def auth_client(api_client, user):
    """DRF client authenticated as ``user``.

    Returns:
        APIClient instance.
    """
    api_client.force_authenticate(user=user)
    return api_client
