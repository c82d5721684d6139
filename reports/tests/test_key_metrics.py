from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from production.models import (
    Boar,
    BoarStatus,
    FeedConsumption,
    GrowthRecord,
    HealthRecord,
    HealthRecordType,
    PigletStatus,
    SowStatus,
)
from production.tests.factories import (
    make_boar,
    make_breeding,
    make_farrowing,
    make_pen,
    make_piglet,
    make_sow,
)
from reports.services.key_metrics import (
    average,
    build_farm_analytics,
    feed_conversion_ratio,
    pairwise_weight_gain,
    percentage,
)

TODAY = date(2025, 2, 1)
JANUARY = (date(2025, 1, 1), date(2025, 1, 31))


class MetricHelperTests(SimpleTestCase):
    def test_percentage_rounds_half_up_and_guards_zero(self) -> None:
        self.assertEqual(percentage(7, 10), Decimal("70.00"))
        self.assertEqual(percentage(27, 28), Decimal("96.43"))
        self.assertEqual(percentage(1, 8), Decimal("12.50"))
        self.assertEqual(percentage(5, 0), Decimal("0.00"))

    def test_average_guards_empty_count(self) -> None:
        self.assertEqual(average(27, 3), Decimal("9.00"))
        self.assertEqual(average(None, 0), Decimal("0.00"))

    def test_pairwise_gain_sums_every_ordered_pair(self) -> None:
        weighings = {
            1: [
                (date(2025, 1, 5), Decimal("2")),
                (date(2025, 1, 19), Decimal("5")),
                (date(2025, 1, 12), Decimal("3")),
            ]
        }

        self.assertEqual(pairwise_weight_gain(weighings), Decimal("6"))

    def test_pairwise_gain_ignores_same_day_weighings_and_other_piglets(self) -> None:
        weighings = {
            1: [(date(2025, 1, 5), Decimal("2")), (date(2025, 1, 5), Decimal("4"))],
            2: [(date(2025, 1, 5), Decimal("10"))],
        }

        self.assertEqual(pairwise_weight_gain(weighings), Decimal("0"))

    def test_feed_conversion_is_none_without_gain_or_feed(self) -> None:
        self.assertEqual(feed_conversion_ratio(Decimal("30"), Decimal("6")), Decimal("5.00"))
        self.assertIsNone(feed_conversion_ratio(Decimal("30"), Decimal("0")))
        self.assertIsNone(feed_conversion_ratio(Decimal("30"), Decimal("-2")))
        self.assertIsNone(feed_conversion_ratio(None, Decimal("6")))
        self.assertIsNone(feed_conversion_ratio(Decimal("0"), Decimal("6")))


class FarmAnalyticsTests(TestCase):
    def setUp(self) -> None:
        self.boar = make_boar()

    def _analytics(self, start_date=JANUARY[0], end_date=JANUARY[1]):
        return build_farm_analytics(start_date, end_date, today=TODAY)

    def test_empty_farm_reports_zero_rates(self) -> None:
        Boar.objects.all().delete()

        performance = self._analytics().performance

        self.assertEqual(performance["breedingSuccessRate"], Decimal("0.00"))
        self.assertEqual(performance["avgPigletsPerLitter"], Decimal("0.00"))
        self.assertEqual(performance["survivalRate"], Decimal("0.00"))
        self.assertEqual(performance["mortalityRate"], Decimal("0.00"))
        self.assertEqual(performance["avgDailyGain"], Decimal("0.000"))
        self.assertIsNone(performance["fcr"])

    def test_breeding_success_rate_over_window(self) -> None:
        sow = make_sow()
        for day in range(1, 11):
            make_breeding(sow, self.boar, breeding_date=date(2025, 1, day * 3), success=day <= 7)
        make_breeding(sow, self.boar, breeding_date=date(2024, 12, 31), success=False)

        self.assertEqual(self._analytics().performance["breedingSuccessRate"], Decimal("70.00"))

    def test_litter_metrics_over_window(self) -> None:
        for born_alive, total_born in ((8, 9), (10, 10), (9, 9)):
            breeding = make_breeding(make_sow(), self.boar, breeding_date=date(2024, 9, 20))
            make_farrowing(
                breeding,
                farrowing_date=date(2025, 1, 12),
                born_alive=born_alive,
                total_born=total_born,
                stillborn=total_born - born_alive,
            )
        outside = make_breeding(make_sow(), self.boar, breeding_date=date(2024, 8, 1))
        make_farrowing(outside, farrowing_date=date(2024, 11, 23), born_alive=2, total_born=12)

        performance = self._analytics().performance

        self.assertEqual(performance["avgPigletsPerLitter"], Decimal("9.00"))
        self.assertEqual(performance["survivalRate"], Decimal("96.43"))
        self.assertEqual(performance["breedingSuccessRate"], Decimal("0.00"))

    def test_mortality_rate_uses_current_population(self) -> None:
        sows = [make_sow() for _ in range(4)]
        dead_sow = make_sow(status=SowStatus.DEAD)
        Boar.objects.create(tag_number="V-DEAD", breed="Duroc", birth_date=date(2022, 1, 1), status=BoarStatus.DEAD)
        HealthRecord.objects.create(record_type=HealthRecordType.MORTALITY, record_date=date(2025, 1, 20), sow=dead_sow)
        HealthRecord.objects.create(record_type=HealthRecordType.MORTALITY, record_date=date(2024, 12, 20), sow=sows[0])
        HealthRecord.objects.create(record_type=HealthRecordType.VACCINATION, record_date=date(2025, 1, 20), sow=sows[1])

        result = self._analytics()

        self.assertEqual(result.overview["totalAnimals"], 5)
        self.assertEqual(result.performance["mortalityRate"], Decimal("20.00"))

    def test_average_daily_gain_and_feed_conversion(self) -> None:
        pen = make_pen()
        breeding = make_breeding(make_sow(), self.boar, breeding_date=date(2024, 8, 1))
        farrowing = make_farrowing(breeding, farrowing_date=date(2024, 11, 23))
        piglet = make_piglet(farrowing)
        for record_date, weight, adg in (
            (date(2025, 1, 5), "2", None),
            (date(2025, 1, 12), "3", "0.300"),
            (date(2025, 1, 19), "5", "0.450"),
            (date(2025, 2, 5), "9", "1.000"),
        ):
            GrowthRecord.objects.create(
                piglet=piglet,
                record_date=record_date,
                weight=Decimal(weight),
                adg=Decimal(adg) if adg else None,
            )
        FeedConsumption.objects.create(record_date=date(2025, 1, 10), pen=pen, feed_type="Preiniciador", quantity=Decimal("30"))
        FeedConsumption.objects.create(record_date=date(2025, 2, 10), pen=pen, feed_type="Preiniciador", quantity=Decimal("100"))

        performance = self._analytics().performance

        self.assertEqual(performance["avgDailyGain"], Decimal("0.375"))
        self.assertEqual(performance["fcr"], Decimal("5.00"))

    def test_feed_conversion_is_null_without_weight_gain(self) -> None:
        FeedConsumption.objects.create(record_date=date(2025, 1, 10), pen=make_pen(), feed_type="Levante", quantity=Decimal("30"))

        self.assertIsNone(self._analytics().performance["fcr"])

    def test_inverted_window_degenerates_to_empty_results(self) -> None:
        sow = make_sow()
        make_breeding(sow, self.boar, breeding_date=date(2025, 1, 15), success=True)

        result = self._analytics(start_date=JANUARY[1], end_date=JANUARY[0])

        self.assertEqual(result.start_date, JANUARY[1])
        self.assertEqual(result.performance["breedingSuccessRate"], Decimal("0.00"))
        self.assertIsNone(result.performance["fcr"])

    def test_default_window_is_last_thirty_days(self) -> None:
        sow = make_sow()
        make_breeding(sow, self.boar, breeding_date=TODAY - timedelta(days=30), success=True)
        make_breeding(sow, self.boar, breeding_date=TODAY - timedelta(days=31), success=False)

        result = build_farm_analytics(today=TODAY)

        self.assertEqual(result.start_date, date(2025, 1, 2))
        self.assertEqual(result.end_date, TODAY)
        self.assertEqual(result.performance["breedingSuccessRate"], Decimal("100.00"))

    def test_upcoming_farrowings_look_thirty_days_ahead(self) -> None:
        sow = make_sow()
        due_today = make_breeding(sow, self.boar, breeding_date=date(2024, 10, 1), expected_farrow_date=TODAY)
        due_last_day = make_breeding(
            sow, self.boar, breeding_date=date(2024, 10, 1), expected_farrow_date=TODAY + timedelta(days=30)
        )
        make_breeding(sow, self.boar, breeding_date=date(2024, 10, 1), expected_farrow_date=TODAY + timedelta(days=31))
        make_breeding(sow, self.boar, breeding_date=date(2024, 10, 1), expected_farrow_date=TODAY - timedelta(days=1))
        farrowed = make_breeding(
            sow, self.boar, breeding_date=date(2024, 10, 1), expected_farrow_date=TODAY + timedelta(days=2)
        )
        make_farrowing(farrowed, farrowing_date=TODAY)

        upcoming = self._analytics().upcoming_farrowings

        self.assertEqual([breeding.pk for breeding in upcoming], [due_today.pk, due_last_day.pk])

    def test_upcoming_farrowings_are_capped(self) -> None:
        sow = make_sow()
        for offset in range(12):
            make_breeding(
                sow,
                self.boar,
                breeding_date=date(2024, 10, 1),
                expected_farrow_date=TODAY + timedelta(days=offset),
            )

        upcoming = self._analytics().upcoming_farrowings

        self.assertEqual(len(upcoming), 10)
        self.assertEqual(upcoming[0].expected_farrow_date, TODAY)

    def test_status_breakdowns_skip_dead_animals(self) -> None:
        make_sow(status=SowStatus.PREGNANT)
        make_sow(status=SowStatus.PREGNANT)
        make_sow(status=SowStatus.LACTATING)
        make_sow(status=SowStatus.DEAD)
        breeding = make_breeding(make_sow(status=SowStatus.ACTIVE), self.boar, breeding_date=date(2024, 9, 1))
        farrowing = make_farrowing(breeding, farrowing_date=date(2024, 12, 24))
        make_piglet(farrowing)
        make_piglet(farrowing, status=PigletStatus.DEAD)

        result = self._analytics()

        self.assertEqual(result.sows_by_status, {"PREGNANT": 2, "LACTATING": 1, "ACTIVE": 1})
        self.assertEqual(result.piglets_by_status, {"NURSING": 1})
        self.assertEqual(result.overview["totalSows"], 4)
        self.assertEqual(result.overview["totalPiglets"], 1)

    def test_recent_health_records_ignore_window(self) -> None:
        sow = make_sow()
        for day in range(1, 7):
            HealthRecord.objects.create(
                record_type=HealthRecordType.VACCINATION,
                record_date=date(2024, 6, day),
                sow=sow,
            )

        records = self._analytics().recent_health_records

        self.assertEqual([record.record_date.day for record in records], [6, 5, 4, 3, 2])

    def test_payload_uses_camel_case_numbers(self) -> None:
        sow = make_sow()
        make_breeding(sow, self.boar, breeding_date=date(2025, 1, 10), success=True)

        payload = self._analytics().as_payload()

        self.assertEqual(
            set(payload),
            {"period", "overview", "sowsByStatus", "pigletsByStatus", "performance", "upcomingFarrowings", "recentHealthRecords"},
        )
        self.assertEqual(payload["performance"]["breedingSuccessRate"], 100.0)
        self.assertIsNone(payload["performance"]["fcr"])
        self.assertEqual(payload["overview"]["totalBoars"], 1)
