from __future__ import annotations

import json
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse

from activity_logs.models import ActivityAction, ActivityLog, ActivityModule
from configuration.models import SystemConfig
from configuration.services import (
    DEFAULT_SYSTEM_SETTINGS,
    get_max_login_attempts,
    get_system_config,
)
from users.models import UserProfile


class SystemConfigServiceTests(TestCase):
    def test_default_row_is_created_on_first_read(self) -> None:
        settings = get_system_config()

        self.assertEqual(settings, DEFAULT_SYSTEM_SETTINGS)
        self.assertEqual(SystemConfig.objects.count(), 1)
        self.assertEqual(get_max_login_attempts(), 5)
        self.assertFalse(settings.maintenance_mode)

    def test_reads_stored_values(self) -> None:
        SystemConfig.objects.create(max_login_attempts=3, maintenance_mode=True)

        self.assertEqual(get_max_login_attempts(), 3)
        self.assertTrue(get_system_config().maintenance_mode)

    def test_singleton_id_is_forced(self) -> None:
        config = SystemConfig(id="otra", activity_log_retention_days=10)
        config.save()

        self.assertEqual(SystemConfig.objects.get().pk, "system_config")

    def test_database_error_falls_back_to_defaults(self) -> None:
        with mock.patch(
            "configuration.services.system_config.SystemConfig.objects.get_or_create",
            side_effect=DatabaseError("down"),
        ):
            self.assertEqual(get_system_config(), DEFAULT_SYSTEM_SETTINGS)


class SystemConfigApiTests(TestCase):
    def setUp(self) -> None:
        self.admin = UserProfile.objects.create_user(
            username="admin",
            password="test",  # noqa: S106 - test credential
            role=UserProfile.Role.ADMIN,
        )
        self.operator = UserProfile.objects.create_user(username="operario", password="test")  # noqa: S106
        self.url = reverse("configuration-api:system-config")

    def _put(self, payload):
        return self.client.put(self.url, json.dumps(payload), content_type="application/json")

    def test_any_authenticated_user_can_read(self) -> None:
        self.client.force_login(self.operator)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["maxLoginAttempts"], 5)
        self.assertEqual(response.json()["activityLogRetentionDays"], 90)

    def test_operator_cannot_update(self) -> None:
        self.client.force_login(self.operator)

        response = self._put({"maxLoginAttempts": 3})

        self.assertEqual(response.status_code, 403)

    def test_admin_partial_update_is_logged(self) -> None:
        self.client.force_login(self.admin)

        response = self._put({"maxLoginAttempts": 3, "maintenanceMode": True})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["maxLoginAttempts"], 3)
        self.assertTrue(data["maintenanceMode"])
        self.assertEqual(data["activityLogRetentionDays"], 90)
        entry = ActivityLog.objects.get(action=ActivityAction.UPDATE, module=ActivityModule.SETTINGS)
        self.assertEqual(entry.details["changes"]["maxLoginAttempts"], {"from": 5, "to": 3})

    def test_out_of_range_values_are_rejected(self) -> None:
        self.client.force_login(self.admin)

        response = self._put({"maxLoginAttempts": 50, "activityLogRetentionDays": 0})

        self.assertEqual(response.status_code, 400)
        errors = response.json()["errors"]
        self.assertIn("max_login_attempts", errors)
        self.assertIn("activity_log_retention_days", errors)
        self.assertEqual(get_max_login_attempts(), 5)
