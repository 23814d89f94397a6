"""User model for authentication and role-based access.

This module defines the custom `User` model which extends Django's
`AbstractUser` with a unique email and a `role` that drives capability
checks (see ``common.capabilities``).
"""

from common.capabilities import can_perform, capabilities_for
from common.choices import Role
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Custom user with unique email and a single role.

    Fields:
    - email: the primary email, unique at the database level (normalized).
    - role: one of admin, manager, stock_worker.
    """

    ROLE_ADMIN = Role.ADMIN
    ROLE_MANAGER = Role.MANAGER
    ROLE_STOCK_WORKER = Role.STOCK_WORKER
    ROLE_CHOICES = Role.choices

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, default=ROLE_STOCK_WORKER, db_index=True)

    def save(self, *args, **kwargs):
        """Normalize the email and persist.

        Stores `email` in lowercase without surrounding whitespace so
        uniqueness checks are reliable.
        """
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def can(self, capability: str) -> bool:
        return can_perform(self, capability)

    @property
    def capabilities(self) -> list[str]:
        return sorted(capabilities_for(self))
