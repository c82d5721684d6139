from __future__ import annotations

from datetime import datetime
from typing import Optional

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .managers import UserProfileManager


class LockState(models.TextChoices):
    ACTIVE = "ACTIVE", _("Activa")
    LOCKED = "LOCKED", _("Bloqueada")
    EXPIRED_LOCK = "EXPIRED_LOCK", _("Bloqueo vencido")


class UserProfile(AbstractBaseUser, PermissionsMixin):
    class Role(models.TextChoices):
        ADMIN = "ADMIN", _("Administrador")
        USER = "USER", _("Usuario")

    username = models.CharField(_("Usuario"), max_length=150, unique=True)
    email = models.EmailField(_("Correo electrónico"), unique=True, null=True, blank=True)
    name = models.CharField(_("Nombre"), max_length=150, blank=True)
    role = models.CharField(
        _("Rol"),
        max_length=16,
        choices=Role.choices,
        default=Role.USER,
    )

    failed_login_attempts = models.PositiveIntegerField(_("Intentos fallidos"), default=0)
    locked_at = models.DateTimeField(_("Bloqueada en"), null=True, blank=True)
    locked_until = models.DateTimeField(
        _("Bloqueada hasta"),
        null=True,
        blank=True,
        help_text=_("Si se define, el bloqueo vence automáticamente después de esta fecha."),
    )
    locked_reason = models.CharField(_("Motivo del bloqueo"), max_length=255, null=True, blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = UserProfileManager()

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = "Usuario"
        verbose_name_plural = "Usuarios"
        ordering = ["username"]

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} ({self.username})"
        return self.username

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser

    def get_full_name(self) -> str:
        return self.name or self.username

    def get_short_name(self) -> str:
        return self.name.split(" ")[0] if self.name else self.username

    def lock_state(self, now: Optional[datetime] = None) -> str:
        """Derive the lock state at read time; expired locks are detected lazily."""
        if self.locked_at is None:
            return LockState.ACTIVE
        current = now or timezone.now()
        if self.locked_until is not None and current > self.locked_until:
            return LockState.EXPIRED_LOCK
        return LockState.LOCKED

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        return self.lock_state(now) == LockState.LOCKED

    def clear_lockout(self) -> list[str]:
        """Reset the lockout fields in memory and return the names to persist."""
        self.failed_login_attempts = 0
        self.locked_at = None
        self.locked_until = None
        self.locked_reason = None
        return ["failed_login_attempts", "locked_at", "locked_until", "locked_reason"]

    def needs_lockout_reset(self) -> bool:
        return self.failed_login_attempts > 0 or self.locked_at is not None
