from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class NotificationType(models.TextChoices):
    INFO = "INFO", _("Información")
    SUCCESS = "SUCCESS", _("Éxito")
    WARNING = "WARNING", _("Advertencia")
    ERROR = "ERROR", _("Error")
    TASK = "TASK", _("Tarea")


class NotificationQuerySet(models.QuerySet):
    def visible_to(self, user) -> "NotificationQuerySet":
        """Notifications addressed to the user plus broadcasts (no recipient)."""
        return self.filter(Q(user=user) | Q(user__isnull=True))

    def unread(self) -> "NotificationQuerySet":
        return self.filter(is_read=False)


class Notification(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name=_("Destinatario"),
        null=True,
        blank=True,
        help_text=_("Vacío para enviar la notificación a todos los usuarios."),
    )
    title = models.CharField(_("Título"), max_length=200)
    message = models.TextField(_("Mensaje"))
    type = models.CharField(
        _("Tipo"),
        max_length=16,
        choices=NotificationType.choices,
        default=NotificationType.INFO,
    )
    category = models.CharField(_("Categoría"), max_length=64, null=True, blank=True)
    link = models.CharField(_("Enlace"), max_length=255, null=True, blank=True)
    is_read = models.BooleanField(_("Leída"), default=False)
    read_at = models.DateTimeField(_("Leída en"), null=True, blank=True)
    created_at = models.DateTimeField(_("Creada en"), auto_now_add=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        verbose_name = _("Notificación")
        verbose_name_plural = _("Notificaciones")
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=("user", "is_read"), name="notification_user_read_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def is_broadcast(self) -> bool:
        return self.user_id is None

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=("is_read", "read_at"))
