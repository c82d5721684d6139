from __future__ import annotations

from django.contrib.auth.base_user import BaseUserManager
from django.db import models
from django.utils import timezone


class UserProfileQuerySet(models.QuerySet):
    """Custom queryset helpers for UserProfile."""

    def administrators(self) -> "UserProfileQuerySet":
        return self.filter(models.Q(role="ADMIN") | models.Q(is_superuser=True), is_active=True)

    def locked(self) -> "UserProfileQuerySet":
        """Accounts whose lock is still in force right now."""
        now = timezone.now()
        return self.filter(locked_at__isnull=False).filter(
            models.Q(locked_until__isnull=True) | models.Q(locked_until__gte=now)
        )


class UserProfileManager(BaseUserManager):
    """Custom manager for the UserProfile model."""

    use_in_migrations = True

    def get_queryset(self):  # type: ignore[override]
        return UserProfileQuerySet(self.model, using=self._db)

    def administrators(self):
        return self.get_queryset().administrators()

    def locked(self):
        return self.get_queryset().locked()

    def _create_user(self, username: str, password: str | None, **extra_fields):
        if not username:
            raise ValueError("El usuario debe tener un nombre de usuario definido.")
        username = username.strip()
        email = extra_fields.pop("email", None)
        email = self.normalize_email(email) if email else None
        user = self.model(username=username, email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, username: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(username, password, **extra_fields)

    def create_superuser(self, username: str, password: str | None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", "ADMIN")

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Los superusuarios deben tener is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Los superusuarios deben tener is_superuser=True.")
        return self._create_user(username, password, **extra_fields)
