"""Write paths for production records that carry side effects on the herd."""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from django.db import transaction
from django.db.models import F
from django.http import HttpRequest

from activity_logs.models import ActivityAction, ActivityModule
from activity_logs.services import log_activity
from notifications.models import NotificationType
from notifications.services import notify_admins
from production.models import (
    Boar,
    BoarStatus,
    Breeding,
    BreedingMethod,
    Farrowing,
    GrowthRecord,
    HealthRecord,
    HealthRecordType,
    Pen,
    PenTransfer,
    Piglet,
    PigletStatus,
    Sow,
    SowStatus,
    expected_farrow_date_for,
)

logger = logging.getLogger(__name__)

ADG_QUANTIZER = Decimal("0.001")


class RecordValidationError(Exception):
    def __init__(self, field_errors: dict[str, list[str]]) -> None:
        super().__init__("Invalid production record data")
        self.field_errors = field_errors


def register_breeding(
    *,
    sow: Sow,
    boar: Boar,
    breeding_date: date,
    breeding_method: str = BreedingMethod.NATURAL,
    expected_farrow_date: Optional[date] = None,
    success: Optional[bool] = None,
    notes: str = "",
    actor: Any = None,
    request: Optional[HttpRequest] = None,
) -> Breeding:
    with transaction.atomic():
        breeding = Breeding.objects.create(
            sow=sow,
            boar=boar,
            breeding_date=breeding_date,
            breeding_method=breeding_method or BreedingMethod.NATURAL,
            expected_farrow_date=expected_farrow_date or expected_farrow_date_for(breeding_date),
            success=success,
            notes=notes or "",
        )
        if success is True:
            Sow.objects.filter(pk=sow.pk).update(status=SowStatus.PREGNANT)

    log_activity(
        action=ActivityAction.CREATE,
        module=ActivityModule.BREEDING,
        user=actor,
        entity_id=breeding.pk,
        entity_name=f"{sow.tag_number} × {boar.tag_number}",
        details={
            "sowId": sow.pk,
            "boarId": boar.pk,
            "breedingDate": breeding_date.isoformat(),
            "expectedFarrowDate": breeding.expected_farrow_date.isoformat(),
        },
        request=request,
    )
    return breeding


def apply_breeding_changes(breeding: Breeding, changed_fields: Iterable[str]) -> Breeding:
    """Keep derived data in sync after a breeding is edited."""
    changed = set(changed_fields)
    if "breeding_date" in changed and "expected_farrow_date" not in changed:
        breeding.expected_farrow_date = expected_farrow_date_for(breeding.breeding_date)
        breeding.save(update_fields=["expected_farrow_date", "updated_at"])
    if "success" in changed:
        if breeding.success is True:
            Sow.objects.filter(pk=breeding.sow_id).update(status=SowStatus.PREGNANT)
        elif breeding.success is False:
            Sow.objects.filter(pk=breeding.sow_id).update(status=SowStatus.ACTIVE)
    return breeding


def register_farrowing(
    *,
    sow: Sow,
    breeding: Breeding,
    farrowing_date: date,
    total_born: int,
    born_alive: int,
    stillborn: int = 0,
    mummified: int = 0,
    average_birth_weight: Optional[Decimal] = None,
    notes: str = "",
    actor: Any = None,
    request: Optional[HttpRequest] = None,
) -> Farrowing:
    """Store a farrowing, close its breeding and create the live-born piglets."""
    errors: dict[str, list[str]] = {}
    if born_alive > total_born:
        errors["born_alive"] = ["Los nacidos vivos no pueden superar los nacidos totales."]
    if breeding.sow_id != sow.pk:
        errors["breeding"] = ["El servicio pertenece a otra cerda."]
    elif Farrowing.objects.filter(breeding=breeding).exists():
        errors["breeding"] = ["Este servicio ya tiene un parto registrado."]
    if errors:
        raise RecordValidationError(errors)

    with transaction.atomic():
        farrowing = Farrowing.objects.create(
            sow=sow,
            breeding=breeding,
            farrowing_date=farrowing_date,
            total_born=total_born,
            born_alive=born_alive,
            stillborn=stillborn or 0,
            mummified=mummified or 0,
            average_birth_weight=average_birth_weight,
            notes=notes or "",
        )
        Sow.objects.filter(pk=sow.pk).update(status=SowStatus.LACTATING)
        Breeding.objects.filter(pk=breeding.pk).update(success=True)
        Piglet.objects.bulk_create(
            [
                Piglet(
                    farrowing=farrowing,
                    status=PigletStatus.NURSING,
                    birth_weight=average_birth_weight,
                    current_pen_id=sow.current_pen_id,
                )
                for _ in range(born_alive)
            ]
        )
        if sow.current_pen_id and born_alive:
            Pen.objects.filter(pk=sow.current_pen_id).update(current_count=F("current_count") + born_alive)

    log_activity(
        action=ActivityAction.CREATE,
        module=ActivityModule.FARROWING,
        user=actor,
        entity_id=farrowing.pk,
        entity_name=sow.tag_number,
        details={
            "sowId": sow.pk,
            "totalBorn": total_born,
            "bornAlive": born_alive,
            "farrowingDate": farrowing_date.isoformat(),
        },
        request=request,
    )
    return farrowing


def compute_adg(
    *,
    weight: Decimal,
    record_date: date,
    previous: Optional[GrowthRecord],
    birth_weight: Optional[Decimal],
    age_in_days: Optional[int],
) -> Optional[Decimal]:
    """Daily gain against the previous weighing, or against birth weight for the first one."""
    if previous is not None:
        days = (record_date - previous.record_date).days
        if days <= 0:
            return None
        gain = (Decimal(weight) - previous.weight) / Decimal(days)
    elif birth_weight is not None and age_in_days:
        if age_in_days <= 0:
            return None
        gain = (Decimal(weight) - birth_weight) / Decimal(age_in_days)
    else:
        return None
    return gain.quantize(ADG_QUANTIZER, rounding=ROUND_HALF_UP)


def register_growth_record(
    *,
    piglet: Piglet,
    record_date: date,
    weight: Decimal,
    notes: str = "",
    actor: Any = None,
    request: Optional[HttpRequest] = None,
) -> GrowthRecord:
    age_in_days = (record_date - piglet.farrowing.farrowing_date).days
    previous = (
        GrowthRecord.objects.filter(piglet=piglet, record_date__lt=record_date)
        .order_by("-record_date", "-id")
        .first()
    )
    adg = compute_adg(
        weight=weight,
        record_date=record_date,
        previous=previous,
        birth_weight=piglet.birth_weight,
        age_in_days=age_in_days,
    )
    record = GrowthRecord.objects.create(
        piglet=piglet,
        record_date=record_date,
        weight=weight,
        age_in_days=age_in_days,
        adg=adg,
        notes=notes or "",
    )

    log_activity(
        action=ActivityAction.CREATE,
        module=ActivityModule.GROWTH_RECORD,
        user=actor,
        entity_id=record.pk,
        entity_name=f"{piglet} - {weight}kg",
        details={"pigletId": piglet.pk, "weight": str(weight), "ageInDays": age_in_days},
        request=request,
    )
    return record


def register_health_record(
    *,
    record_type: str,
    record_date: date,
    sow: Optional[Sow] = None,
    boar: Optional[Boar] = None,
    piglet: Optional[Piglet] = None,
    actor: Any = None,
    request: Optional[HttpRequest] = None,
    **details: Any,
) -> HealthRecord:
    """Store a health event; a MORTALITY record also marks its subject as dead."""
    subjects = [subject for subject in (sow, boar, piglet) if subject is not None]
    if len(subjects) != 1:
        raise RecordValidationError(
            {"__all__": ["El registro debe referirse exactamente a una cerda, un verraco o un lechón."]}
        )

    with transaction.atomic():
        record = HealthRecord.objects.create(
            record_type=record_type,
            record_date=record_date,
            sow=sow,
            boar=boar,
            piglet=piglet,
            **{key: value for key, value in details.items() if value is not None},
        )
        if record_type == HealthRecordType.MORTALITY:
            _mark_subject_dead(record)

    log_activity(
        action=ActivityAction.CREATE,
        module=ActivityModule.HEALTH,
        user=actor,
        entity_id=record.pk,
        entity_name=record.subject_label,
        details={"recordType": record_type, "subjectType": record.subject_type},
        request=request,
    )
    if record_type == HealthRecordType.MORTALITY:
        cause = record.death_cause or record.disease or "Sin causa registrada"
        notify_admins(
            title="Mortalidad registrada",
            message=f"{record.subject_label} registrado como muerto el {record_date:%Y-%m-%d}. Causa: {cause}.",
            type=NotificationType.WARNING,
            category="mortality",
        )
    return record


def _mark_subject_dead(record: HealthRecord) -> None:
    if record.sow_id:
        Sow.objects.filter(pk=record.sow_id).update(status=SowStatus.DEAD)
    elif record.boar_id:
        Boar.objects.filter(pk=record.boar_id).update(status=BoarStatus.DEAD)
    elif record.piglet_id:
        Piglet.objects.filter(pk=record.piglet_id).update(
            status=PigletStatus.DEAD,
            death_date=record.record_date,
            death_cause=record.death_cause or record.disease or "",
        )
    logger.info("Animal %s marcado como muerto", record.subject_label)


def register_weaning(
    *,
    piglets: Iterable[Piglet],
    weaning_date: date,
    weaning_weight: Optional[Decimal] = None,
    sow: Optional[Sow] = None,
    notes: str = "",
    actor: Any = None,
    request: Optional[HttpRequest] = None,
) -> list[Piglet]:
    weaned: list[Piglet] = []
    with transaction.atomic():
        for piglet in piglets:
            piglet.status = PigletStatus.WEANED
            piglet.weaning_date = weaning_date
            piglet.weaning_weight = weaning_weight
            if notes:
                piglet.notes = f"{piglet.notes}\n{notes}".strip()
            piglet.save(update_fields=["status", "weaning_date", "weaning_weight", "notes", "updated_at"])
            weaned.append(piglet)
        if sow is not None:
            Sow.objects.filter(pk=sow.pk).update(status=SowStatus.WEANED)

    log_activity(
        action=ActivityAction.CREATE,
        module=ActivityModule.WEANING,
        user=actor,
        entity_id=weaned[0].pk if weaned else None,
        entity_name=f"{len(weaned)} lechones destetados",
        details={
            "pigletCount": len(weaned),
            "sowId": sow.pk if sow else None,
            "weaningDate": weaning_date.isoformat(),
        },
        request=request,
    )
    return weaned


def transfer_piglets(
    *,
    piglets: Iterable[Piglet],
    to_pen: Pen,
    transfer_date: date,
    reason: str = "",
    notes: str = "",
    actor: Any = None,
    request: Optional[HttpRequest] = None,
) -> list[PenTransfer]:
    """Move piglets to ``to_pen`` keeping the pen occupancy counters in step."""
    transfers: list[PenTransfer] = []
    with transaction.atomic():
        for piglet in piglets:
            from_pen_id = piglet.current_pen_id
            if from_pen_id == to_pen.pk:
                continue
            transfers.append(
                PenTransfer.objects.create(
                    piglet=piglet,
                    from_pen_id=from_pen_id,
                    to_pen=to_pen,
                    transfer_date=transfer_date,
                    reason=reason or "",
                    notes=notes or "",
                )
            )
            piglet.current_pen = to_pen
            piglet.save(update_fields=["current_pen", "updated_at"])
            if from_pen_id:
                Pen.objects.filter(pk=from_pen_id, current_count__gt=0).update(current_count=F("current_count") - 1)
            Pen.objects.filter(pk=to_pen.pk).update(current_count=F("current_count") + 1)

    log_activity(
        action=ActivityAction.CREATE,
        module=ActivityModule.PEN_TRANSFER,
        user=actor,
        entity_id=transfers[0].pk if transfers else None,
        entity_name=f"{len(transfers)} lechones trasladados",
        details={"pigletCount": len(transfers), "toPenId": to_pen.pk, "reason": reason},
        request=request,
    )
    return transfers
