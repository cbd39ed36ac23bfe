"""
Tests for core models.
"""

from django.contrib.auth import get_user_model

import pytest

from apps.web.restaurant.models import AboutSection

User = get_user_model()


@pytest.mark.django_db
class TestUser:
    """Tests for User roles."""

    def test_staff_can_edit(self, user):
        assert user.can_edit is True

    def test_readonly_cannot_edit(self, readonly_user):
        assert readonly_user.can_edit is False

    def test_superuser_can_always_edit(self):
        admin = User.objects.create_superuser(
            username="root", email="", password="x", role=User.Role.READONLY
        )

        assert admin.can_edit is True

    def test_actor_label_prefers_email(self, user):
        assert user.actor_label == "testuser@example.com"

    def test_actor_label_falls_back_to_username(self):
        nameless = User.objects.create_user(username="kasir", password="x")

        assert nameless.actor_label == "kasir"


@pytest.mark.django_db
class TestSingletonModel:
    """Tests for SingletonModel via AboutSection."""

    def test_load_returns_none_before_first_save(self):
        assert AboutSection.load() is None

    def test_saves_always_target_one_row(self):
        AboutSection(title="First", content="a").save()
        AboutSection(title="Second", content="b").save()

        assert AboutSection.objects.count() == 1
        assert AboutSection.load().title == "Second"
