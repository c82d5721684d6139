from __future__ import annotations

import json
from datetime import date

from django.test import TestCase
from django.urls import reverse

from activity_logs.models import ActivityAction, ActivityLog, ActivityModule
from production.models import Breeding, Pen, Piglet, PigletStatus, Sow, SowStatus
from production.tests.factories import (
    make_boar,
    make_breeding,
    make_farrowing,
    make_pen,
    make_piglet,
    make_sow,
)
from users.models import UserProfile


class ProductionApiTestCase(TestCase):
    def setUp(self) -> None:
        self.admin = UserProfile.objects.create_user(
            username="admin",
            password="test",  # noqa: S106 - test credential
            role=UserProfile.Role.ADMIN,
        )
        self.operator = UserProfile.objects.create_user(
            username="operario",
            password="test",  # noqa: S106 - test credential
        )

    def _send(self, method: str, url: str, payload=None):
        return getattr(self.client, method)(url, json.dumps(payload or {}), content_type="application/json")


class RecordCollectionViewTests(ProductionApiTestCase):
    def test_requires_authentication(self) -> None:
        response = self.client.get(reverse("production-api:sows-collection"))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "UNAUTHORIZED")

    def test_lists_sows_filtered_by_status(self) -> None:
        make_sow(tag="S-001")
        make_sow(tag="S-002", status=SowStatus.PREGNANT)
        self.client.force_login(self.operator)

        response = self.client.get(reverse("production-api:sows-collection"), {"status": SowStatus.PREGNANT})

        self.assertEqual(response.status_code, 200)
        results = response.json()["results"]
        self.assertEqual([item["tagNumber"] for item in results], ["S-002"])

    def test_non_numeric_id_filter_answers_400(self) -> None:
        self.client.force_login(self.operator)

        response = self.client.get(reverse("production-api:growth-records-collection"), {"pigletId": "abc"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "INVALID_FILTER")
        self.assertIn("pigletId", response.json()["errors"])

    def test_numeric_id_filter_narrows_results(self) -> None:
        pen = make_pen()
        make_sow(tag="S-010", pen=pen)
        make_sow(tag="S-011")
        self.client.force_login(self.operator)

        response = self.client.get(reverse("production-api:sows-collection"), {"penId": str(pen.pk)})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["tagNumber"] for item in response.json()["results"]], ["S-010"])

    def test_create_pen_logs_activity(self) -> None:
        self.client.force_login(self.operator)

        response = self._send(
            "post",
            reverse("production-api:pens-collection"),
            {"penNumber": "M-01", "penType": "FARROWING", "capacity": 12},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["penNumber"], "M-01")
        self.assertEqual(response.json()["currentCount"], 0)
        pen = Pen.objects.get(pen_number="M-01")
        self.assertTrue(
            ActivityLog.objects.filter(
                action=ActivityAction.CREATE,
                module=ActivityModule.PENS,
                entity_id=str(pen.pk),
            ).exists()
        )

    def test_invalid_payload_answers_400_with_field_errors(self) -> None:
        self.client.force_login(self.operator)

        response = self._send("post", reverse("production-api:pens-collection"), {"penType": "FARROWING"})

        self.assertEqual(response.status_code, 400)
        self.assertIn("pen_number", response.json()["errors"])

    def test_create_breeding_computes_expected_date(self) -> None:
        sow = make_sow()
        boar = make_boar()
        self.client.force_login(self.operator)

        response = self._send(
            "post",
            reverse("production-api:breedings-collection"),
            {"sowId": sow.pk, "boarId": boar.pk, "breedingDate": "2025-01-01", "success": True},
        )

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["expectedFarrowDate"], "2025-04-25")
        self.assertEqual(data["breedingMethod"], "NATURAL")
        sow.refresh_from_db()
        self.assertEqual(sow.status, SowStatus.PREGNANT)

    def test_create_farrowing_generates_piglets(self) -> None:
        sow = make_sow()
        breeding = make_breeding(sow, make_boar(), breeding_date=date(2025, 1, 1))
        self.client.force_login(self.operator)

        response = self._send(
            "post",
            reverse("production-api:farrowings-collection"),
            {
                "sowId": sow.pk,
                "breedingId": breeding.pk,
                "farrowingDate": "2025-04-25",
                "totalBorn": 9,
                "bornAlive": 8,
                "stillborn": 1,
            },
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["mummified"], 0)
        self.assertEqual(Piglet.objects.filter(farrowing__breeding=breeding).count(), 8)

    def test_farrowing_with_more_alive_than_born_is_rejected(self) -> None:
        sow = make_sow()
        breeding = make_breeding(sow, make_boar(), breeding_date=date(2025, 1, 1))
        self.client.force_login(self.operator)

        response = self._send(
            "post",
            reverse("production-api:farrowings-collection"),
            {
                "sowId": sow.pk,
                "breedingId": breeding.pk,
                "farrowingDate": "2025-04-25",
                "totalBorn": 5,
                "bornAlive": 6,
            },
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("born_alive", response.json()["errors"])
        self.assertFalse(Piglet.objects.exists())

    def test_health_record_needs_one_subject(self) -> None:
        self.client.force_login(self.operator)

        response = self._send(
            "post",
            reverse("production-api:health-records-collection"),
            {"recordType": "VACCINATION", "recordDate": "2025-05-01"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("__all__", response.json()["errors"])


class RecordDetailViewTests(ProductionApiTestCase):
    def test_patch_updates_only_sent_fields(self) -> None:
        sow = make_sow(tag="S-010")
        self.client.force_login(self.operator)

        response = self._send(
            "patch",
            reverse("production-api:sows-detail", args=[sow.pk]),
            {"status": SowStatus.CULLED},
        )

        self.assertEqual(response.status_code, 200)
        sow.refresh_from_db()
        self.assertEqual(sow.status, SowStatus.CULLED)
        self.assertEqual(sow.tag_number, "S-010")
        log = ActivityLog.objects.get(action=ActivityAction.UPDATE, module=ActivityModule.SOWS)
        self.assertEqual(log.details["changedFields"], ["status"])

    def test_patch_breeding_date_moves_expected_farrow_date(self) -> None:
        breeding = make_breeding(make_sow(), make_boar(), breeding_date=date(2025, 1, 1))
        self.client.force_login(self.operator)

        response = self._send(
            "patch",
            reverse("production-api:breedings-detail", args=[breeding.pk]),
            {"breedingDate": "2025-01-11"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["expectedFarrowDate"], "2025-05-05")

    def test_delete_requires_admin(self) -> None:
        pen = make_pen()
        self.client.force_login(self.operator)

        response = self.client.delete(reverse("production-api:pens-detail", args=[pen.pk]))

        self.assertEqual(response.status_code, 403)
        self.assertTrue(Pen.objects.filter(pk=pen.pk).exists())

    def test_admin_delete_logs_activity(self) -> None:
        pen = make_pen()
        self.client.force_login(self.admin)

        response = self.client.delete(reverse("production-api:pens-detail", args=[pen.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Pen.objects.filter(pk=pen.pk).exists())
        self.assertTrue(
            ActivityLog.objects.filter(action=ActivityAction.DELETE, entity_id=str(pen.pk)).exists()
        )

    def test_boar_with_breedings_cannot_be_deleted(self) -> None:
        boar = make_boar()
        make_breeding(make_sow(), boar, breeding_date=date(2025, 1, 1))
        self.client.force_login(self.admin)

        response = self.client.delete(reverse("production-api:boars-detail", args=[boar.pk]))

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "PROTECTED")
        self.assertEqual(Breeding.objects.count(), 1)

    def test_unknown_record_answers_404(self) -> None:
        self.client.force_login(self.operator)

        response = self.client.get(reverse("production-api:sows-detail", args=[999]))

        self.assertEqual(response.status_code, 404)


class WeaningAndTransferViewTests(ProductionApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.maternity = make_pen(current_count=2)
        self.nursery = make_pen()
        self.sow = make_sow(status=SowStatus.LACTATING, pen=self.maternity)
        breeding = make_breeding(self.sow, make_boar(), breeding_date=date(2025, 1, 1))
        farrowing = make_farrowing(breeding, farrowing_date=date(2025, 4, 25))
        self.piglets = [make_piglet(farrowing, pen=self.maternity) for _ in range(2)]
        self.client.force_login(self.operator)

    def test_weaning(self) -> None:
        response = self._send(
            "post",
            reverse("production-api:weanings"),
            {
                "pigletIds": [piglet.pk for piglet in self.piglets],
                "weaningDate": "2025-05-16",
                "weaningWeight": 6.5,
                "sowId": self.sow.pk,
            },
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(response.json()["results"]), 2)
        self.assertEqual(Piglet.objects.filter(status=PigletStatus.WEANED).count(), 2)
        self.assertEqual(Sow.objects.get(pk=self.sow.pk).status, SowStatus.WEANED)

    def test_weaning_rejects_already_weaned_piglets(self) -> None:
        Piglet.objects.filter(pk=self.piglets[0].pk).update(status=PigletStatus.WEANED)

        response = self._send(
            "post",
            reverse("production-api:weanings"),
            {"pigletIds": [self.piglets[0].pk], "weaningDate": "2025-05-16"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("piglets", response.json()["errors"])

    def test_pen_transfer(self) -> None:
        response = self._send(
            "post",
            reverse("production-api:pen-transfers"),
            {
                "pigletIds": [piglet.pk for piglet in self.piglets],
                "toPenId": self.nursery.pk,
                "transferDate": "2025-05-17",
                "reason": "Destete",
            },
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(Pen.objects.get(pk=self.nursery.pk).current_count, 2)

        listing = self.client.get(reverse("production-api:pen-transfers"), {"pigletId": self.piglets[0].pk})
        self.assertEqual(len(listing.json()["results"]), 1)
        self.assertEqual(listing.json()["results"][0]["fromPenId"], self.maternity.pk)

    def test_pen_transfer_listing_rejects_non_numeric_piglet(self) -> None:
        response = self.client.get(reverse("production-api:pen-transfers"), {"pigletId": "abc"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"pigletId": ["Debe ser un identificador numérico."]})
