"""Per-sow and per-litter productivity reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from django.db.models import Prefetch

from porcicola.api import iso_or_none
from production.models import Farrowing, Piglet, PigletStatus, Sow

from .key_metrics import average, percentage


@dataclass
class SowPerformance:
    sow: Sow
    total_litters: int = 0
    total_born: int = 0
    total_born_alive: int = 0
    total_stillborn: int = 0
    birth_weights: list[Decimal] = field(default_factory=list)
    death_details: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total_dead(self) -> int:
        return len(self.death_details)

    @property
    def survivors(self) -> int:
        return self.total_born_alive - self.total_dead

    def as_payload(self) -> dict[str, Any]:
        return {
            "id": self.sow.pk,
            "tagNumber": self.sow.tag_number,
            "breed": self.sow.breed,
            "status": self.sow.status,
            "totalLitters": self.total_litters,
            "totalBorn": self.total_born,
            "totalBornAlive": self.total_born_alive,
            "totalStillborn": self.total_stillborn,
            "totalDead": self.total_dead,
            "survivors": self.survivors,
            "survivalRate": float(percentage(self.survivors, self.total_born_alive)),
            "mortalityRate": float(percentage(self.total_dead, self.total_born_alive)),
            "avgBornPerLitter": float(average(self.total_born, self.total_litters)),
            "avgBirthWeight": float(average(sum(self.birth_weights, Decimal("0")), len(self.birth_weights))),
            "deathDetails": self.death_details,
        }


def _litters_queryset(start_date: Optional[date] = None, end_date: Optional[date] = None):
    queryset = Farrowing.objects.select_related("sow").prefetch_related(
        Prefetch(
            "piglets",
            queryset=Piglet.objects.filter(status=PigletStatus.DEAD).order_by("death_date", "id"),
            to_attr="dead_piglets",
        )
    )
    if start_date and end_date:
        queryset = queryset.filter(farrowing_date__range=(start_date, end_date))
    return queryset


def build_sow_performance() -> list[SowPerformance]:
    rows: dict[int, SowPerformance] = {sow.pk: SowPerformance(sow=sow) for sow in Sow.objects.all()}
    for farrowing in _litters_queryset().order_by("farrowing_date", "id"):
        row = rows.get(farrowing.sow_id)
        if row is None:
            continue
        row.total_litters += 1
        row.total_born += farrowing.total_born
        row.total_born_alive += farrowing.born_alive
        row.total_stillborn += farrowing.stillborn
        if farrowing.average_birth_weight:
            row.birth_weights.append(farrowing.average_birth_weight)
        for piglet in farrowing.dead_piglets:
            row.death_details.append(
                {
                    "batchDate": iso_or_none(farrowing.farrowing_date),
                    "deathDate": iso_or_none(piglet.death_date),
                    "cause": piglet.death_cause or None,
                }
            )
    return list(rows.values())


def build_litter_survival(start_date: Optional[date] = None, end_date: Optional[date] = None) -> list[dict[str, Any]]:
    """Survival of each litter after farrowing; both dates are needed to filter."""
    rows = []
    for farrowing in _litters_queryset(start_date, end_date).order_by("-farrowing_date", "-id"):
        dead = len(farrowing.dead_piglets)
        survivors = farrowing.born_alive - dead
        rows.append(
            {
                "id": farrowing.pk,
                "sowTag": farrowing.sow.tag_number,
                "batchDate": iso_or_none(farrowing.farrowing_date),
                "bornAlive": farrowing.born_alive,
                "stillborn": farrowing.stillborn,
                "mummified": farrowing.mummified,
                "deadPostFarrowing": dead,
                "survivors": survivors,
                "survivalRate": float(percentage(survivors, farrowing.born_alive)),
            }
        )
    return rows
