"""Fixtures shared by the whole test suite."""

import pytest
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def upload_root(settings, tmp_path):
    """Point project storage at a temporary uploads directory.

    Returns:
        Path of the uploads root used by the storage backend.
    """
    root = tmp_path / 'uploads'
    settings.STORAGES = {
        **settings.STORAGES,
        'default': {
            'BACKEND': (
                'server.apps.projects.infrastructure.storage.ProjectStorage'
            ),
            'OPTIONS': {
                'location': str(root),
                'base_url': '/uploads/',
                'allow_overwrite': True,
            },
        },
    }
    return root


@pytest.fixture
def api_client():
    """Create an unauthenticated DRF test client.

    Returns:
        APIClient instance.
    """
    return APIClient()
