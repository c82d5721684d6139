from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Any, Optional

from django.utils import timezone

from porcicola.api import decimal_or_none, iso_or_none
from production.models import HealthRecord, HealthRecordType, Piglet, PigletStatus

from .key_metrics import percentage

UNKNOWN_CAUSE = "Sin causa registrada"


def build_death_causes() -> dict[str, Any]:
    """Dead piglets grouped by cause plus every mortality health record."""
    dead_piglets = list(
        Piglet.objects.filter(status=PigletStatus.DEAD)
        .select_related("farrowing__sow")
        .order_by("-death_date", "-id")
    )
    causes = Counter(piglet.death_cause or UNKNOWN_CAUSE for piglet in dead_piglets)
    total = len(dead_piglets)
    cause_summary = [
        {"cause": cause, "count": count, "percentage": float(percentage(count, total))}
        for cause, count in causes.most_common()
    ]

    mortality_records = (
        HealthRecord.objects.filter(record_type=HealthRecordType.MORTALITY)
        .select_related("sow", "boar", "piglet__farrowing__sow")
        .order_by("-record_date", "-id")
    )
    return {
        "totalDeaths": total,
        "causeSummary": cause_summary,
        "deathRecords": [
            {
                "id": piglet.pk,
                "pigletTag": piglet.tag_number or "-",
                "sowTag": piglet.farrowing.sow.tag_number,
                "sowBreed": piglet.farrowing.sow.breed,
                "batchDate": iso_or_none(piglet.farrowing.farrowing_date),
                "deathDate": iso_or_none(piglet.death_date),
                "cause": piglet.death_cause or UNKNOWN_CAUSE,
                "birthWeight": decimal_or_none(piglet.birth_weight),
                "gender": piglet.gender or None,
            }
            for piglet in dead_piglets
        ],
        "mortalityRecords": [
            {
                "id": record.pk,
                "recordDate": iso_or_none(record.record_date),
                "subject": record.subject_label,
                "subjectType": record.subject_type,
                "sowTag": _mother_tag(record),
                "cause": record.death_cause or record.disease or UNKNOWN_CAUSE,
                "notes": record.notes,
            }
            for record in mortality_records
        ],
    }


def _mother_tag(record: HealthRecord) -> str:
    if record.sow_id:
        return record.sow.tag_number
    if record.piglet_id:
        return record.piglet.farrowing.sow.tag_number
    return "-"


def count_piglet_deaths(day: Optional[date] = None) -> int:
    """Piglets whose recorded death date is ``day`` (today by default)."""
    return Piglet.objects.filter(death_date=day or timezone.localdate()).count()
