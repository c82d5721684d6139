from __future__ import annotations

from unittest import mock

from django.test import TestCase, override_settings

from notifications.models import Notification, NotificationType
from notifications.services import (
    TelegramAlertSender,
    TelegramNotificationError,
    broadcast_notification,
    count_unread,
    create_notification,
    mark_all_as_read,
    mark_as_read,
    notifications_for_user,
    notify_admins,
)
from users.models import UserProfile


class NotificationDispatchTests(TestCase):
    def setUp(self) -> None:
        self.admin = UserProfile.objects.create_user(
            username="admin",
            password="test",  # noqa: S106 - test credential
            email="admin@granja.test",
            name="Ana Admin",
            role=UserProfile.Role.ADMIN,
        )
        self.operator = UserProfile.objects.create_user(
            username="operario",
            password="test",  # noqa: S106 - test credential
            email="operario@granja.test",
            name="Pedro Operario",
        )

    def test_broadcast_is_visible_to_every_user(self) -> None:
        broadcast_notification(title="Mantenimiento", message="Corte de agua a las 14:00")
        create_notification(user=self.admin, title="Privada", message="Solo admin")

        self.assertEqual(count_unread(self.operator), 1)
        self.assertEqual(count_unread(self.admin), 2)
        titles = [item.title for item in notifications_for_user(self.operator)]
        self.assertEqual(titles, ["Mantenimiento"])

    def test_mark_as_read_ignores_foreign_notifications(self) -> None:
        private = create_notification(user=self.admin, title="Privada", message="Solo admin")

        self.assertIsNone(mark_as_read(private.pk, self.operator))
        private.refresh_from_db()
        self.assertFalse(private.is_read)

        updated = mark_as_read(private.pk, self.admin)
        self.assertIsNotNone(updated)
        self.assertTrue(updated.is_read)
        self.assertIsNotNone(updated.read_at)

    def test_mark_all_as_read_only_touches_visible_notifications(self) -> None:
        create_notification(user=self.admin, title="A", message="a")
        create_notification(user=self.operator, title="B", message="b")
        broadcast_notification(title="C", message="c")

        self.assertEqual(mark_all_as_read(self.operator), 2)
        self.assertEqual(count_unread(self.operator), 0)
        self.assertEqual(Notification.objects.filter(is_read=False).count(), 1)

    def test_notify_admins_creates_one_notification_per_admin_and_forwards_alert(self) -> None:
        sender = mock.Mock()
        created = notify_admins(
            title="Cuenta bloqueada",
            message="La cuenta operario fue bloqueada.",
            type=NotificationType.WARNING,
            category="security",
            alert_sender=sender,
        )

        self.assertEqual(len(created), 1)
        self.assertEqual(created[0].user, self.admin)
        self.assertEqual(created[0].category, "security")
        sender.assert_called_once_with(created[0])

    def test_notify_admins_survives_alert_failures(self) -> None:
        sender = mock.Mock(side_effect=TelegramNotificationError("chat not found"))

        created = notify_admins(title="Alerta", message="Mensaje", alert_sender=sender)

        self.assertEqual(len(created), 1)
        self.assertTrue(Notification.objects.filter(title="Alerta").exists())


class TelegramAlertSenderTests(TestCase):
    @override_settings(TELEGRAM_BOT_TOKEN="", TELEGRAM_ALERT_CHAT_ID="")
    def test_unconfigured_sender_refuses_to_send(self) -> None:
        sender = TelegramAlertSender()
        notification = Notification(title="Hola", message="Mundo")

        self.assertFalse(sender.is_configured)
        with self.assertRaises(TelegramNotificationError):
            sender.send(notification)

    def test_payload_escapes_html(self) -> None:
        sender = TelegramAlertSender(token="abc", chat_id="-100")
        notification = Notification(title="<b>Cerdos</b>", message="5 < 6", type=NotificationType.ERROR)

        payload = sender.build_payload(notification)

        self.assertEqual(payload["chat_id"], "-100")
        self.assertEqual(payload["parse_mode"], "HTML")
        self.assertIn("&lt;b&gt;Cerdos&lt;/b&gt;", payload["text"])
        self.assertIn("5 &lt; 6", payload["text"])

    @mock.patch("notifications.services.telegram.httpx.post")
    def test_send_posts_to_send_message(self, post: mock.Mock) -> None:
        post.return_value.json.return_value = {"ok": True, "result": {"message_id": 7}}
        sender = TelegramAlertSender(token="abc", chat_id="-100", timeout=3)

        response = sender.send(Notification(title="Hola", message="Mundo"))

        self.assertEqual(response["result"]["message_id"], 7)
        url = post.call_args.args[0]
        self.assertEqual(url, "https://api.telegram.org/botabc/sendMessage")
        self.assertEqual(post.call_args.kwargs["timeout"], 3)

    @mock.patch("notifications.services.telegram.httpx.post")
    def test_api_error_is_raised(self, post: mock.Mock) -> None:
        post.return_value.json.return_value = {"ok": False, "description": "Bad Request"}
        sender = TelegramAlertSender(token="abc", chat_id="-100")

        with self.assertRaisesMessage(TelegramNotificationError, "Bad Request"):
            sender.send(Notification(title="Hola", message="Mundo"))
