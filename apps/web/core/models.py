"""
Core models - users and shared abstract bases.

Content and reservation models inherit from TimeStampedModel;
single-row site content (hero, about, contact) inherits from SingletonModel.
"""

from typing import Any, Self

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model for back-office staff.

    The role decides whether a user may change content or only view it.
    """

    class Role(models.TextChoices):
        OWNER = "owner", "Owner"
        STAFF = "staff", "Staff"
        READONLY = "readonly", "Read Only"

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STAFF,
    )

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return self.username

    @property
    def can_edit(self) -> bool:
        """Read-only users may browse the dashboard but not change anything."""
        return self.is_superuser or self.role != self.Role.READONLY

    @property
    def actor_label(self) -> str:
        """Identity recorded in audit fields (confirmed_by, rejected_by)."""
        return self.email or self.username


class TimeStampedModel(models.Model):
    """Abstract base providing created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SingletonModel(TimeStampedModel):
    """
    Abstract base for content that exists at most once (hero, about, contact).

    The row always has primary key 1, so saving is an upsert.
    """

    SINGLETON_PK = 1

    class Meta:
        abstract = True

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.pk = self.SINGLETON_PK
        if self.created_at is None:
            # Saving a fresh instance updates the existing row; keep its timestamp.
            self.created_at = (
                type(self)
                .objects.filter(pk=self.pk)  # type: ignore[attr-defined]
                .values_list("created_at", flat=True)
                .first()
            )
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> Self | None:
        """Return the single row, or None if it has not been created yet."""
        return cls.objects.filter(pk=cls.SINGLETON_PK).first()  # type: ignore[attr-defined]
