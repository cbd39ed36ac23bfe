"""
Pytest configuration for Django app tests.
"""

from django.contrib.auth import get_user_model
from django.test import Client as DjangoClient

import pytest

User = get_user_model()


@pytest.fixture
def user(db) -> User:
    """A staff user who may edit content and reservations."""
    return User.objects.create_user(
        username="testuser",
        email="testuser@example.com",
        password="testpass123",
        role=User.Role.STAFF,
    )


@pytest.fixture
def readonly_user(db) -> User:
    """A user who may browse the dashboard but not change anything."""
    return User.objects.create_user(
        username="viewer",
        email="viewer@example.com",
        password="testpass123",
        role=User.Role.READONLY,
    )


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for public API requests."""
    return DjangoClient()


@pytest.fixture
def staff_client(user) -> DjangoClient:
    """Test client logged in as an editor."""
    http_client = DjangoClient()
    http_client.force_login(user)
    return http_client


@pytest.fixture
def readonly_client(readonly_user) -> DjangoClient:
    """Test client logged in as a read-only user."""
    http_client = DjangoClient()
    http_client.force_login(readonly_user)
    return http_client
