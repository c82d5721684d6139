from __future__ import annotations

import json
from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from activity_logs.models import ActivityAction, ActivityLog, ActivityModule
from activity_logs.services import log_activity
from users.models import UserProfile


class ActivityLogApiTests(TestCase):
    def setUp(self) -> None:
        self.admin = UserProfile.objects.create_user(
            username="admin",
            password="test",  # noqa: S106 - test credential
            name="Ana Admin",
            role=UserProfile.Role.ADMIN,
        )
        self.operator = UserProfile.objects.create_user(
            username="operario",
            password="test",  # noqa: S106 - test credential
            name="Pedro Operario",
        )
        self.url = reverse("activity-logs-api:collection")

    def test_listing_requires_admin(self) -> None:
        self.client.force_login(self.operator)

        self.assertEqual(self.client.get(self.url).status_code, 403)

    def test_listing_filters_and_paginates(self) -> None:
        log_activity(action=ActivityAction.CREATE, module=ActivityModule.SOWS, user=self.operator, entity_name="C-001")
        log_activity(action=ActivityAction.CREATE, module=ActivityModule.PIGLETS, user=self.operator)
        log_activity(action=ActivityAction.DELETE, module=ActivityModule.SOWS, user=self.admin)
        self.client.force_login(self.admin)

        response = self.client.get(self.url, {"module": "SOWS", "limit": 1})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["pagination"]["total"], 2)
        self.assertEqual(data["pagination"]["totalPages"], 2)
        self.assertEqual(len(data["logs"]), 1)

        response = self.client.get(self.url, {"search": "C-001"})
        self.assertEqual([log["entityName"] for log in response.json()["logs"]], ["C-001"])

        response = self.client.get(self.url, {"userId": str(self.admin.pk), "action": "DELETE"})
        self.assertEqual(response.json()["pagination"]["total"], 1)

    def test_date_range_filter(self) -> None:
        entry = log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS, user=self.operator)
        ActivityLog.objects.filter(pk=entry.pk).update(created_at=timezone.now() - timedelta(days=10))
        log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS, user=self.operator)
        self.client.force_login(self.admin)
        start = (timezone.localdate() - timedelta(days=2)).isoformat()

        response = self.client.get(self.url, {"startDate": start, "module": "REPORTS"})

        self.assertEqual(response.json()["pagination"]["total"], 1)

    def test_any_user_can_post_client_side_activity(self) -> None:
        self.client.force_login(self.operator)

        response = self.client.post(
            self.url,
            json.dumps({"action": "EXPORT", "module": "REPORTS", "details": {"format": "xlsx"}}),
            content_type="application/json",
            HTTP_USER_AGENT="navegador",
        )

        self.assertEqual(response.status_code, 201)
        entry = ActivityLog.objects.get(action=ActivityAction.EXPORT)
        self.assertEqual(entry.user, self.operator)
        self.assertEqual(entry.user_agent, "navegador")

    def test_post_rejects_unknown_action(self) -> None:
        self.client.force_login(self.operator)

        response = self.client.post(self.url, json.dumps({"action": "HACK", "module": ""}), content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()["errors"]), {"action", "module"})

    def test_delete_cleans_up_old_entries(self) -> None:
        entry = log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS)
        ActivityLog.objects.filter(pk=entry.pk).update(created_at=timezone.now() - timedelta(days=200))
        self.client.force_login(self.admin)

        response = self.client.delete(f"{self.url}?retentionDays=30")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["deletedCount"], 1)
        cleanup = ActivityLog.objects.get(action=ActivityAction.DELETE, module=ActivityModule.ACTIVITY_LOGS)
        self.assertEqual(cleanup.details, {"retentionDays": 30})

    def test_delete_without_retention_uses_configured_window(self) -> None:
        recent = log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS)
        old = log_activity(action=ActivityAction.VIEW, module=ActivityModule.REPORTS)
        ActivityLog.objects.filter(pk=recent.pk).update(created_at=timezone.now() - timedelta(days=60))
        ActivityLog.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=120))
        self.client.force_login(self.admin)

        response = self.client.delete(self.url)

        self.assertEqual(response.json()["deletedCount"], 1)
        self.assertTrue(ActivityLog.objects.filter(pk=recent.pk).exists())

    def test_stats_endpoint(self) -> None:
        self.client.force_login(self.admin)

        response = self.client.get(reverse("activity-logs-api:stats"))

        self.assertEqual(response.status_code, 200)
        self.assertIn("summary", response.json())
