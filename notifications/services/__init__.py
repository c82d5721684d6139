from .dispatch import (
    broadcast_notification,
    count_unread,
    create_notification,
    mark_all_as_read,
    mark_as_read,
    notifications_for_user,
    notify_admins,
)
from .telegram import TelegramAPIClient, TelegramAlertSender, TelegramNotificationError

__all__ = [
    "TelegramAPIClient",
    "TelegramAlertSender",
    "TelegramNotificationError",
    "broadcast_notification",
    "count_unread",
    "create_notification",
    "mark_all_as_read",
    "mark_as_read",
    "notifications_for_user",
    "notify_admins",
]
