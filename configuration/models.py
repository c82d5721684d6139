from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


SYSTEM_CONFIG_ID = "system_config"


class SystemConfig(models.Model):
    """Single-row table with the farm-wide operational settings."""

    id = models.CharField(primary_key=True, max_length=32, default=SYSTEM_CONFIG_ID, editable=False)
    activity_log_retention_days = models.PositiveIntegerField(
        _("Días de retención del historial"),
        default=90,
        validators=[MinValueValidator(1), MaxValueValidator(365)],
    )
    max_login_attempts = models.PositiveIntegerField(
        _("Intentos de ingreso permitidos"),
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(20)],
        help_text=_("La cuenta se bloquea al alcanzar este número de intentos fallidos."),
    )
    session_timeout_minutes = models.PositiveIntegerField(_("Duración de la sesión (minutos)"), default=30)
    auto_backup_enabled = models.BooleanField(_("Respaldo automático"), default=True)
    backup_frequency_days = models.PositiveIntegerField(_("Frecuencia de respaldo (días)"), default=7)
    maintenance_mode = models.BooleanField(_("Modo mantenimiento"), default=False)
    created_at = models.DateTimeField(_("Creado en"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Actualizado en"), auto_now=True)

    class Meta:
        verbose_name = _("Configuración del sistema")
        verbose_name_plural = _("Configuración del sistema")

    def __str__(self) -> str:
        return str(self._meta.verbose_name)

    def save(self, *args, **kwargs):
        self.id = SYSTEM_CONFIG_ID
        super().save(*args, **kwargs)
