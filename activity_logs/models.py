from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


UNKNOWN_ACTOR = "unknown"


class ActivityAction(models.TextChoices):
    CREATE = "CREATE", _("Creó")
    UPDATE = "UPDATE", _("Actualizó")
    DELETE = "DELETE", _("Eliminó")
    VIEW = "VIEW", _("Consultó")
    EXPORT = "EXPORT", _("Exportó")
    LOGIN = "LOGIN", _("Inició sesión")
    LOGOUT = "LOGOUT", _("Cerró sesión")
    LOGIN_FAILED = "LOGIN_FAILED", _("Ingreso fallido")
    LOGIN_BLOCKED = "LOGIN_BLOCKED", _("Ingreso bloqueado")
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED", _("Cuenta bloqueada")
    USER_LOCKED = "USER_LOCKED", _("Usuario bloqueado por administrador")
    USER_UNLOCKED = "USER_UNLOCKED", _("Usuario desbloqueado")


class ActivityModule(models.TextChoices):
    AUTH = "AUTH", _("Autenticación")
    USER_MANAGEMENT = "USER_MANAGEMENT", _("Usuarios")
    SETTINGS = "SETTINGS", _("Configuración")
    ACTIVITY_LOGS = "ACTIVITY_LOGS", _("Historial")
    PENS = "PENS", _("Corrales")
    SOWS = "SOWS", _("Cerdas")
    BOARS = "BOARS", _("Verracos")
    PIGLETS = "PIGLETS", _("Lechones")
    BREEDING = "BREEDING", _("Servicios")
    FARROWING = "FARROWING", _("Partos")
    WEANING = "WEANING", _("Destetes")
    PEN_TRANSFER = "PEN_TRANSFER", _("Traslados")
    GROWTH_RECORD = "GROWTH_RECORD", _("Pesajes")
    HEALTH = "HEALTH", _("Sanidad")
    FEED = "FEED", _("Alimento")
    REPORTS = "REPORTS", _("Reportes")


class ActivityLog(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="activity_logs",
        verbose_name=_("Usuario"),
        null=True,
        blank=True,
    )
    user_identifier = models.CharField(
        _("Identificador del actor"),
        max_length=64,
        help_text=_("ID del usuario o 'unknown' cuando el actor no pudo identificarse."),
    )
    user_email = models.CharField(_("Correo del actor"), max_length=254, blank=True)
    user_name = models.CharField(_("Nombre del actor"), max_length=150, null=True, blank=True)
    action = models.CharField(_("Acción"), max_length=32, choices=ActivityAction.choices)
    module = models.CharField(_("Módulo"), max_length=32)
    entity_id = models.CharField(_("ID de la entidad"), max_length=64, null=True, blank=True)
    entity_name = models.CharField(_("Entidad"), max_length=255, null=True, blank=True)
    details = models.JSONField(_("Detalles"), null=True, blank=True)
    ip_address = models.CharField(_("Dirección IP"), max_length=64, null=True, blank=True)
    user_agent = models.TextField(_("Agente de usuario"), null=True, blank=True)
    created_at = models.DateTimeField(_("Registrado en"), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _("Registro de actividad")
        verbose_name_plural = _("Historial de actividad")
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=("action",), name="activity_action_idx"),
            models.Index(fields=("module",), name="activity_module_idx"),
            models.Index(fields=("user_identifier",), name="activity_actor_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_action_display()} · {self.module} ({self.user_identifier})"
