from __future__ import annotations

from datetime import timedelta
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.test import RequestFactory, TestCase
from django.utils import timezone

from activity_logs.models import UNKNOWN_ACTOR, ActivityAction, ActivityLog, ActivityModule
from activity_logs.services import build_activity_stats, cleanup_old_logs, get_client_info, log_activity
from configuration.models import SystemConfig
from users.models import UserProfile


class ClientInfoTests(TestCase):
    def setUp(self) -> None:
        self.factory = RequestFactory()

    def test_first_forwarded_hop_wins(self) -> None:
        request = self.factory.get(
            "/",
            HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1",
            HTTP_X_REAL_IP="10.0.0.2",
            HTTP_USER_AGENT="pytest",
        )

        info = get_client_info(request)

        self.assertEqual(info.ip_address, "203.0.113.5")
        self.assertEqual(info.user_agent, "pytest")

    def test_real_ip_then_remote_addr(self) -> None:
        request = self.factory.get("/", HTTP_X_REAL_IP="10.0.0.2")
        self.assertEqual(get_client_info(request).ip_address, "10.0.0.2")

        request = self.factory.get("/", REMOTE_ADDR="192.0.2.7")
        self.assertEqual(get_client_info(request).ip_address, "192.0.2.7")

    def test_without_request(self) -> None:
        info = get_client_info(None)

        self.assertIsNone(info.ip_address)
        self.assertIsNone(info.user_agent)


class LogActivityTests(TestCase):
    def setUp(self) -> None:
        self.user = UserProfile.objects.create_user(
            username="operario",
            email="operario@granja.test",
            name="Pedro Operario",
        )

    def test_actor_fields_are_copied_from_user(self) -> None:
        entry = log_activity(
            action=ActivityAction.CREATE,
            module=ActivityModule.SOWS,
            user=self.user,
            entity_id=15,
            entity_name="C-015",
            details={"breed": "Landrace"},
        )

        self.assertEqual(entry.user_identifier, str(self.user.pk))
        self.assertEqual(entry.user_email, "operario@granja.test")
        self.assertEqual(entry.user_name, "Pedro Operario")
        self.assertEqual(entry.entity_id, "15")
        self.assertEqual(entry.details, {"breed": "Landrace"})

    def test_anonymous_actor_uses_unknown_identifier(self) -> None:
        entry = log_activity(action=ActivityAction.LOGIN_FAILED, module=ActivityModule.AUTH, user_name="nadie")

        self.assertIsNone(entry.user)
        self.assertEqual(entry.user_identifier, UNKNOWN_ACTOR)

    def test_failures_are_swallowed(self) -> None:
        with mock.patch.object(ActivityLog.objects, "create", side_effect=RuntimeError("boom")):
            entry = log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS, user=self.user)

        self.assertIsNone(entry)


class CleanupTests(TestCase):
    def _entry(self, days_ago: int) -> ActivityLog:
        entry = log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS)
        ActivityLog.objects.filter(pk=entry.pk).update(created_at=timezone.now() - timedelta(days=days_ago))
        return entry

    def test_cleanup_uses_configured_retention(self) -> None:
        SystemConfig.objects.create(activity_log_retention_days=30)
        self._entry(40)
        recent = self._entry(5)

        deleted = cleanup_old_logs()

        self.assertEqual(deleted, 1)
        self.assertEqual(list(ActivityLog.objects.values_list("pk", flat=True)), [recent.pk])

    def test_explicit_retention_overrides_configuration(self) -> None:
        self._entry(40)
        self._entry(5)

        self.assertEqual(cleanup_old_logs(3), 2)

    def test_purge_command(self) -> None:
        self._entry(100)
        out = StringIO()

        call_command("purge_activity_logs", stdout=out)

        self.assertIn("Registros eliminados: 1", out.getvalue())
        self.assertFalse(ActivityLog.objects.exists())


class ActivityStatsTests(TestCase):
    def test_stats_group_recent_activity(self) -> None:
        user = UserProfile.objects.create_user(username="operario", name="Pedro")
        log_activity(action=ActivityAction.CREATE, module=ActivityModule.SOWS, user=user)
        log_activity(action=ActivityAction.CREATE, module=ActivityModule.PIGLETS, user=user)
        old = log_activity(action=ActivityAction.DELETE, module=ActivityModule.SOWS, user=user)
        ActivityLog.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=45))

        stats = build_activity_stats()

        self.assertEqual(stats["summary"]["totalLogs"], 3)
        self.assertEqual(stats["summary"]["last30DaysLogs"], 2)
        self.assertEqual(stats["actionStats"], [{"action": "CREATE", "count": 2}])
        self.assertEqual(stats["userStats"][0]["count"], 2)
        self.assertEqual(len(stats["recentActivity"]), 3)
