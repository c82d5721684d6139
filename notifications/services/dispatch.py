from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from ..models import Notification, NotificationType
from .telegram import TelegramAlertSender, TelegramNotificationError

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50

AlertSender = Callable[[Notification], Any]


def create_notification(
    *,
    title: str,
    message: str,
    user: Any = None,
    type: str = NotificationType.INFO,
    category: Optional[str] = None,
    link: Optional[str] = None,
) -> Optional[Notification]:
    """Store a notification; ``user=None`` makes it a broadcast. Failures are logged, not raised."""
    try:
        with transaction.atomic():
            return Notification.objects.create(
                user=user,
                title=title,
                message=message,
                type=type,
                category=category or None,
                link=link or None,
            )
    except Exception:  # pragma: no cover - notifications are best-effort
        logger.exception("No fue posible crear la notificación '%s'", title)
        return None


def broadcast_notification(**kwargs: Any) -> Optional[Notification]:
    kwargs.pop("user", None)
    return create_notification(user=None, **kwargs)


def notify_admins(
    *,
    title: str,
    message: str,
    type: str = NotificationType.INFO,
    category: Optional[str] = None,
    link: Optional[str] = None,
    alert_sender: Optional[AlertSender] = None,
) -> list[Notification]:
    """Create one notification per administrator and mirror it to Telegram when configured."""
    UserProfile = get_user_model()
    notifications: list[Notification] = []
    try:
        admins = list(UserProfile.objects.administrators())
    except Exception:  # pragma: no cover - notifications are best-effort
        logger.exception("No fue posible consultar los administradores para notificar '%s'", title)
        return notifications

    for admin in admins:
        notification = create_notification(
            user=admin,
            title=title,
            message=message,
            type=type,
            category=category,
            link=link,
        )
        if notification is not None:
            notifications.append(notification)

    if notifications:
        _forward_alert(notifications[0], alert_sender)
    return notifications


def _forward_alert(notification: Notification, alert_sender: Optional[AlertSender]) -> None:
    sender = alert_sender
    if sender is None:
        telegram = TelegramAlertSender()
        if not telegram.is_configured:
            return
        sender = telegram
    try:
        sender(notification)
    except TelegramNotificationError:
        logger.warning("No fue posible reenviar la alerta '%s' a Telegram", notification.title, exc_info=True)
    except Exception:  # pragma: no cover - notifications are best-effort
        logger.exception("Falló el reenvío de la alerta '%s'", notification.title)


def notifications_for_user(user: Any, *, limit: int = DEFAULT_LIST_LIMIT, unread_only: bool = False) -> list[Notification]:
    queryset = Notification.objects.visible_to(user)
    if unread_only:
        queryset = queryset.unread()
    return list(queryset.order_by("-created_at", "-id")[:limit])


def count_unread(user: Any) -> int:
    return Notification.objects.visible_to(user).unread().count()


def mark_as_read(notification_id: int, user: Any) -> Optional[Notification]:
    notification = Notification.objects.visible_to(user).filter(pk=notification_id).first()
    if notification is None:
        return None
    notification.mark_read()
    return notification


def mark_all_as_read(user: Any) -> int:
    return Notification.objects.visible_to(user).unread().update(is_read=True, read_at=timezone.now())
