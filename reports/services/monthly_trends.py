from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from production.models import Breeding, Farrowing

from .key_metrics import average, percentage

TREND_MONTHS = 12
TREND_PLACES = Decimal("0.1")

MONTH_LABELS = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic")


@dataclass(frozen=True)
class MonthlyTrend:
    month: date
    total_breedings: int
    successful_breedings: int
    total_farrowings: int
    total_born: int
    total_born_alive: int

    @property
    def label(self) -> str:
        return f"{MONTH_LABELS[self.month.month - 1]} {self.month:%y}"

    def as_payload(self) -> dict[str, Any]:
        return {
            "month": self.month.strftime("%Y-%m"),
            "label": self.label,
            "breedingSuccessRate": float(
                percentage(self.successful_breedings, self.total_breedings, places=TREND_PLACES)
            ),
            "survivalRate": float(percentage(self.total_born_alive, self.total_born, places=TREND_PLACES)),
            "avgPigletsPerLitter": float(
                average(self.total_born_alive, self.total_farrowings, places=TREND_PLACES)
            ),
            "totalBreedings": self.total_breedings,
            "successfulBreedings": self.successful_breedings,
            "totalFarrowings": self.total_farrowings,
            "totalBorn": self.total_born,
            "totalBornAlive": self.total_born_alive,
        }


def _shift_month(month_start: date, offset: int) -> date:
    index = month_start.year * 12 + month_start.month - 1 + offset
    return date(index // 12, index % 12 + 1, 1)


def build_monthly_trends(*, today: Optional[date] = None, months: int = TREND_MONTHS) -> list[MonthlyTrend]:
    """Breeding and farrowing totals for the last ``months`` calendar months, oldest first."""
    today = today or timezone.localdate()
    current = today.replace(day=1)
    first_month = _shift_month(current, -(months - 1))
    last_day = current.replace(day=calendar.monthrange(current.year, current.month)[1])

    breeding_rows = (
        Breeding.objects.filter(breeding_date__range=(first_month, last_day))
        .annotate(month=TruncMonth("breeding_date"))
        .values("month")
        .annotate(total=Count("id"), successful=Count("id", filter=Q(success=True)))
        .order_by()
    )
    farrowing_rows = (
        Farrowing.objects.filter(farrowing_date__range=(first_month, last_day))
        .annotate(month=TruncMonth("farrowing_date"))
        .values("month")
        .annotate(litters=Count("id"), born=Sum("total_born"), alive=Sum("born_alive"))
        .order_by()
    )
    breedings = {row["month"]: row for row in breeding_rows}
    farrowings = {row["month"]: row for row in farrowing_rows}

    trends: list[MonthlyTrend] = []
    for offset in range(months):
        month = _shift_month(first_month, offset)
        breeding = breedings.get(month, {})
        farrowing = farrowings.get(month, {})
        trends.append(
            MonthlyTrend(
                month=month,
                total_breedings=breeding.get("total") or 0,
                successful_breedings=breeding.get("successful") or 0,
                total_farrowings=farrowing.get("litters") or 0,
                total_born=farrowing.get("born") or 0,
                total_born_alive=farrowing.get("alive") or 0,
            )
        )
    return trends
