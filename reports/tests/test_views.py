from __future__ import annotations

from datetime import date
from io import BytesIO
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from openpyxl import load_workbook

from activity_logs.models import ActivityAction, ActivityLog, ActivityModule
from production.models import PigletStatus
from production.tests.factories import make_boar, make_breeding, make_farrowing, make_piglet, make_sow
from users.models import UserProfile


class ReportsViewTestCase(TestCase):
    def setUp(self) -> None:
        self.user = UserProfile.objects.create_user(
            username="operario",
            password="test",  # noqa: S106 - test credential
            name="Pedro Operario",
        )


class FarmDashboardViewTests(ReportsViewTestCase):
    def test_anonymous_user_is_sent_to_login(self) -> None:
        response = self.client.get(reverse("reports:dashboard"))

        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("portal:login"), response["Location"])

    def test_dashboard_renders_selected_range(self) -> None:
        self.client.force_login(self.user)

        response = self.client.get(reverse("reports:dashboard"), {"startDate": "2025-01-01", "endDate": "2025-01-31"})

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "reports/dashboard.html")
        self.assertEqual(response.context["selected_start_date"], date(2025, 1, 1))
        self.assertEqual([preset["days"] for preset in response.context["quick_ranges"]], [7, 30, 60, 90])
        self.assertContains(response, "Indicadores de la granja")


class FarmAnalyticsViewTests(ReportsViewTestCase):
    def test_requires_authentication(self) -> None:
        response = self.client.get(reverse("reports-api:analytics"))

        self.assertEqual(response.status_code, 401)

    def test_returns_analytics_payload(self) -> None:
        sow = make_sow()
        boar = make_boar()
        for day, success in ((3, True), (4, True), (5, False), (6, True)):
            make_breeding(sow, boar, breeding_date=date(2025, 1, day), success=success)
        self.client.force_login(self.user)

        response = self.client.get(
            reverse("reports-api:analytics"), {"startDate": "2025-01-01", "endDate": "2025-01-31"}
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["period"], {"startDate": "2025-01-01", "endDate": "2025-01-31"})
        self.assertEqual(data["performance"]["breedingSuccessRate"], 75.0)
        self.assertEqual(data["overview"]["totalAnimals"], 2)

    def test_invalid_dates_fall_back_to_default_window(self) -> None:
        self.client.force_login(self.user)

        response = self.client.get(reverse("reports-api:analytics"), {"startDate": "no-es-fecha"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["period"]["endDate"], timezone.localdate().isoformat())

    def test_datastore_failure_answers_generic_500(self) -> None:
        self.client.force_login(self.user)

        with mock.patch("reports.views.build_farm_analytics", side_effect=DatabaseError("disk full")):
            response = self.client.get(reverse("reports-api:analytics"))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "SERVER_ERROR")
        self.assertNotIn("disk full", response.content.decode())


class FarmAnalyticsExportViewTests(ReportsViewTestCase):
    def test_export_returns_workbook_and_logs_activity(self) -> None:
        self.client.force_login(self.user)

        response = self.client.get(
            reverse("reports-api:analytics-export"), {"startDate": "2025-01-01", "endDate": "2025-01-31"}
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("indicadores_20250101_20250131.xlsx", response["Content-Disposition"])
        workbook = load_workbook(BytesIO(response.content))
        self.assertEqual(
            workbook.sheetnames,
            ["Resumen", "Indicadores", "Estados", "Partos próximos", "Sanidad reciente"],
        )
        self.assertEqual(workbook["Indicadores"]["A2"].value, "Tasa de preñez (%)")
        self.assertTrue(
            ActivityLog.objects.filter(action=ActivityAction.EXPORT, module=ActivityModule.REPORTS).exists()
        )


class SupplementaryReportViewTests(ReportsViewTestCase):
    def setUp(self) -> None:
        super().setUp()
        farrowing = make_farrowing(
            make_breeding(make_sow(tag="S-400"), make_boar(), breeding_date=date(2024, 1, 1)),
            farrowing_date=date(2024, 4, 24),
        )
        piglet = make_piglet(farrowing, status=PigletStatus.DEAD)
        piglet.death_date = timezone.localdate()
        piglet.death_cause = "Diarrea"
        piglet.save()
        self.client.force_login(self.user)

    def test_monthly_trends(self) -> None:
        response = self.client.get(reverse("reports-api:monthly-trends"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 12)

    def test_sow_performance(self) -> None:
        response = self.client.get(reverse("reports-api:sow-performance"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["tagNumber"], "S-400")
        self.assertEqual(response.json()[0]["totalDead"], 1)

    def test_litter_survival(self) -> None:
        response = self.client.get(reverse("reports-api:litter-survival"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["deadPostFarrowing"], 1)

    def test_death_causes(self) -> None:
        response = self.client.get(reverse("reports-api:death-causes"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["causeSummary"][0]["cause"], "Diarrea")

    def test_piglet_death_alert(self) -> None:
        response = self.client.get(reverse("reports-api:piglet-death-alert"))

        self.assertEqual(response.json(), {"date": timezone.localdate().isoformat(), "count": 1})

    def test_report_failure_answers_500(self) -> None:
        with mock.patch("reports.views.build_death_causes", side_effect=DatabaseError("boom")):
            response = self.client.get(reverse("reports-api:death-causes"))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "SERVER_ERROR")
