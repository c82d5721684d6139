from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from django.db.models import Avg, Count, Q, Sum
from django.utils import timezone

from porcicola.api import decimal_or_none, iso_or_none
from production.models import (
    Boar,
    Breeding,
    FeedConsumption,
    Farrowing,
    GrowthRecord,
    HealthRecord,
    HealthRecordType,
    Pen,
    Piglet,
    Sow,
)


DEFAULT_RANGE_DAYS = 30
UPCOMING_FARROWING_DAYS = 30
UPCOMING_FARROWING_LIMIT = 10
RECENT_HEALTH_RECORDS_LIMIT = 5

PERCENT_PLACES = Decimal("0.01")
ADG_PLACES = Decimal("0.001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def quantize(value: Decimal, places: Decimal = PERCENT_PLACES) -> Decimal:
    return Decimal(value).quantize(places, rounding=ROUND_HALF_UP)


def percentage(part: Any, whole: Any, *, places: Decimal = PERCENT_PLACES) -> Decimal:
    """``part / whole × 100`` rounded half-up; 0 when ``whole`` is not positive."""
    whole_value = Decimal(whole or 0)
    if whole_value <= ZERO:
        return quantize(ZERO, places)
    return quantize(Decimal(part or 0) / whole_value * HUNDRED, places)


def average(total: Any, count: int, *, places: Decimal = PERCENT_PLACES) -> Decimal:
    if not count:
        return quantize(ZERO, places)
    return quantize(Decimal(total or 0) / Decimal(count), places)


def pairwise_weight_gain(weighings: Mapping[Any, Sequence[tuple[date, Decimal]]]) -> Decimal:
    """Sum ``later - earlier`` over every ordered pair of weighings of the same piglet.

    Pairs are not restricted to consecutive weighings: weights 2, 3 and 5 add up
    to (3 - 2) + (5 - 2) + (5 - 3) = 6. Weighings on the same date never pair.
    """
    total = ZERO
    for records in weighings.values():
        ordered = sorted(records, key=lambda item: item[0])
        for index, (earlier_date, earlier_weight) in enumerate(ordered):
            for later_date, later_weight in ordered[index + 1 :]:
                if later_date > earlier_date:
                    total += Decimal(later_weight) - Decimal(earlier_weight)
    return total


def feed_conversion_ratio(feed_total: Optional[Decimal], weight_gain: Decimal) -> Optional[Decimal]:
    """Feed per kilogram gained; ``None`` when there is no positive gain or no feed."""
    if weight_gain is None or weight_gain <= ZERO or not feed_total:
        return None
    return quantize(Decimal(feed_total) / weight_gain)


def resolve_window(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    *,
    today: Optional[date] = None,
) -> tuple[date, date]:
    today = today or timezone.localdate()
    return (
        start_date or today - timedelta(days=DEFAULT_RANGE_DAYS),
        end_date or today,
    )


@dataclass(frozen=True)
class FarmAnalyticsResult:
    start_date: date
    end_date: date
    overview: dict[str, int]
    sows_by_status: dict[str, int]
    piglets_by_status: dict[str, int]
    performance: dict[str, Optional[Decimal]]
    upcoming_farrowings: list[Breeding]
    recent_health_records: list[HealthRecord]

    def as_payload(self) -> dict[str, Any]:
        return {
            "period": {"startDate": self.start_date.isoformat(), "endDate": self.end_date.isoformat()},
            "overview": dict(self.overview),
            "sowsByStatus": dict(self.sows_by_status),
            "pigletsByStatus": dict(self.piglets_by_status),
            "performance": {key: decimal_or_none(value) for key, value in self.performance.items()},
            "upcomingFarrowings": [_upcoming_farrowing_row(breeding) for breeding in self.upcoming_farrowings],
            "recentHealthRecords": [_health_record_row(record) for record in self.recent_health_records],
        }


def build_farm_analytics(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    *,
    today: Optional[date] = None,
) -> FarmAnalyticsResult:
    """Compose the herd KPIs for ``[start_date, end_date]`` plus the snapshot blocks.

    An inverted window is not swapped: every windowed query comes back empty and
    the rates fall to zero.
    """
    today = today or timezone.localdate()
    start_date, end_date = resolve_window(start_date, end_date, today=today)

    overview = _overview()
    performance = {
        "breedingSuccessRate": _breeding_success_rate(start_date, end_date),
        **_litter_metrics(start_date, end_date),
        "mortalityRate": _mortality_rate(start_date, end_date, overview["totalAnimals"]),
        "avgDailyGain": _average_daily_gain(start_date, end_date),
        "fcr": _feed_conversion(start_date, end_date),
    }
    return FarmAnalyticsResult(
        start_date=start_date,
        end_date=end_date,
        overview=overview,
        sows_by_status=_status_counts(Sow.objects.alive()),
        piglets_by_status=_status_counts(Piglet.objects.alive()),
        performance=performance,
        upcoming_farrowings=_upcoming_farrowings(today),
        recent_health_records=list(
            HealthRecord.objects.select_related("sow", "boar", "piglet").order_by("-record_date", "-id")[
                :RECENT_HEALTH_RECORDS_LIMIT
            ]
        ),
    )


def _overview() -> dict[str, int]:
    total_sows = Sow.objects.alive().count()
    total_boars = Boar.objects.alive().count()
    total_piglets = Piglet.objects.alive().count()
    return {
        "totalSows": total_sows,
        "totalBoars": total_boars,
        "totalPiglets": total_piglets,
        "totalPens": Pen.objects.count(),
        "totalAnimals": total_sows + total_boars + total_piglets,
    }


def _status_counts(queryset) -> dict[str, int]:
    rows = queryset.order_by().values("status").annotate(total=Count("id"))
    return {row["status"]: row["total"] for row in rows}


def _breeding_success_rate(start_date: date, end_date: date) -> Decimal:
    totals = Breeding.objects.filter(breeding_date__range=(start_date, end_date)).aggregate(
        total=Count("id"),
        successful=Count("id", filter=Q(success=True)),
    )
    return percentage(totals["successful"], totals["total"])


def _litter_metrics(start_date: date, end_date: date) -> dict[str, Decimal]:
    totals = Farrowing.objects.filter(farrowing_date__range=(start_date, end_date)).aggregate(
        litters=Count("id"),
        born_alive=Sum("born_alive"),
        total_born=Sum("total_born"),
    )
    return {
        "avgPigletsPerLitter": average(totals["born_alive"], totals["litters"]),
        "survivalRate": percentage(totals["born_alive"], totals["total_born"]),
    }


def _mortality_rate(start_date: date, end_date: date, total_animals: int) -> Decimal:
    # The denominator is the current population, not the population of the window.
    deaths = HealthRecord.objects.filter(
        record_type=HealthRecordType.MORTALITY,
        record_date__range=(start_date, end_date),
    ).count()
    return percentage(deaths, total_animals)


def _average_daily_gain(start_date: date, end_date: date) -> Decimal:
    result = GrowthRecord.objects.filter(
        record_date__range=(start_date, end_date),
        adg__isnull=False,
    ).aggregate(value=Avg("adg"))
    if result["value"] is None:
        return quantize(ZERO, ADG_PLACES)
    return quantize(Decimal(str(result["value"])), ADG_PLACES)


def _feed_conversion(start_date: date, end_date: date) -> Optional[Decimal]:
    feed_total = FeedConsumption.objects.filter(record_date__range=(start_date, end_date)).aggregate(
        total=Sum("quantity")
    )["total"]
    weighings: dict[int, list[tuple[date, Decimal]]] = defaultdict(list)
    records = GrowthRecord.objects.filter(record_date__range=(start_date, end_date)).values_list(
        "piglet_id", "record_date", "weight"
    )
    for piglet_id, record_date, weight in records:
        weighings[piglet_id].append((record_date, weight))
    return feed_conversion_ratio(feed_total, pairwise_weight_gain(weighings))


def _upcoming_farrowings(today: date) -> list[Breeding]:
    horizon = today + timedelta(days=UPCOMING_FARROWING_DAYS)
    return list(
        Breeding.objects.filter(
            expected_farrow_date__range=(today, horizon),
            farrowing__isnull=True,
        )
        .select_related("sow", "boar")
        .order_by("expected_farrow_date", "id")[:UPCOMING_FARROWING_LIMIT]
    )


def _upcoming_farrowing_row(breeding: Breeding) -> dict[str, Any]:
    return {
        "id": breeding.pk,
        "sowId": breeding.sow_id,
        "sowTag": breeding.sow.tag_number,
        "boarId": breeding.boar_id,
        "boarTag": breeding.boar.tag_number,
        "breedingDate": iso_or_none(breeding.breeding_date),
        "expectedFarrowDate": iso_or_none(breeding.expected_farrow_date),
    }


def _health_record_row(record: HealthRecord) -> dict[str, Any]:
    return {
        "id": record.pk,
        "recordType": record.record_type,
        "recordDate": iso_or_none(record.record_date),
        "subject": record.subject_label,
        "subjectType": record.subject_type,
        "disease": record.disease or None,
        "deathCause": record.death_cause or None,
        "cost": decimal_or_none(record.cost),
    }


def iter_performance_rows(result: FarmAnalyticsResult) -> Iterable[tuple[str, Optional[Decimal]]]:
    labels = {
        "breedingSuccessRate": "Tasa de preñez (%)",
        "avgPigletsPerLitter": "Lechones vivos por camada",
        "survivalRate": "Supervivencia al parto (%)",
        "mortalityRate": "Mortalidad (%)",
        "avgDailyGain": "Ganancia diaria promedio (kg)",
        "fcr": "Conversión alimenticia",
    }
    for key, value in result.performance.items():
        yield labels.get(key, key), value
