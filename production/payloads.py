"""JSON representations of the herd records."""

from __future__ import annotations

from typing import Any

from porcicola.api import decimal_or_none, iso_or_none
from production.models import (
    Boar,
    Breeding,
    FeedConsumption,
    Farrowing,
    GrowthRecord,
    HealthRecord,
    Pen,
    PenTransfer,
    Piglet,
    Sow,
)


def pen_payload(pen: Pen) -> dict[str, Any]:
    return {
        "id": pen.pk,
        "penNumber": pen.pen_number,
        "penType": pen.pen_type,
        "capacity": pen.capacity,
        "currentCount": pen.current_count,
        "notes": pen.notes,
    }


def _breeding_animal_payload(animal: Sow | Boar) -> dict[str, Any]:
    return {
        "id": animal.pk,
        "tagNumber": animal.tag_number,
        "breed": animal.breed,
        "birthDate": iso_or_none(animal.birth_date),
        "status": animal.status,
        "purchaseDate": iso_or_none(animal.purchase_date),
        "currentPenId": animal.current_pen_id,
        "notes": animal.notes,
    }


def sow_payload(sow: Sow) -> dict[str, Any]:
    return _breeding_animal_payload(sow)


def boar_payload(boar: Boar) -> dict[str, Any]:
    return _breeding_animal_payload(boar)


def piglet_payload(piglet: Piglet) -> dict[str, Any]:
    return {
        "id": piglet.pk,
        "tagNumber": piglet.tag_number or None,
        "farrowingId": piglet.farrowing_id,
        "birthWeight": decimal_or_none(piglet.birth_weight),
        "gender": piglet.gender or None,
        "status": piglet.status,
        "currentPenId": piglet.current_pen_id,
        "weaningDate": iso_or_none(piglet.weaning_date),
        "weaningWeight": decimal_or_none(piglet.weaning_weight),
        "deathDate": iso_or_none(piglet.death_date),
        "deathCause": piglet.death_cause or None,
        "notes": piglet.notes,
    }


def breeding_payload(breeding: Breeding) -> dict[str, Any]:
    return {
        "id": breeding.pk,
        "sowId": breeding.sow_id,
        "sowTag": breeding.sow.tag_number,
        "boarId": breeding.boar_id,
        "boarTag": breeding.boar.tag_number,
        "breedingDate": iso_or_none(breeding.breeding_date),
        "breedingMethod": breeding.breeding_method,
        "expectedFarrowDate": iso_or_none(breeding.expected_farrow_date),
        "success": breeding.success,
        "notes": breeding.notes,
    }


def farrowing_payload(farrowing: Farrowing) -> dict[str, Any]:
    return {
        "id": farrowing.pk,
        "sowId": farrowing.sow_id,
        "sowTag": farrowing.sow.tag_number,
        "breedingId": farrowing.breeding_id,
        "farrowingDate": iso_or_none(farrowing.farrowing_date),
        "totalBorn": farrowing.total_born,
        "bornAlive": farrowing.born_alive,
        "stillborn": farrowing.stillborn,
        "mummified": farrowing.mummified,
        "averageBirthWeight": decimal_or_none(farrowing.average_birth_weight),
        "notes": farrowing.notes,
    }


def growth_record_payload(record: GrowthRecord) -> dict[str, Any]:
    return {
        "id": record.pk,
        "pigletId": record.piglet_id,
        "recordDate": iso_or_none(record.record_date),
        "weight": decimal_or_none(record.weight),
        "ageInDays": record.age_in_days,
        "adg": decimal_or_none(record.adg),
        "notes": record.notes,
    }


def health_record_payload(record: HealthRecord) -> dict[str, Any]:
    return {
        "id": record.pk,
        "recordType": record.record_type,
        "recordDate": iso_or_none(record.record_date),
        "sowId": record.sow_id,
        "boarId": record.boar_id,
        "pigletId": record.piglet_id,
        "subject": record.subject_label,
        "subjectType": record.subject_type,
        "vaccineName": record.vaccine_name or None,
        "medicineName": record.medicine_name or None,
        "dosage": record.dosage or None,
        "administeredBy": record.administered_by or None,
        "disease": record.disease or None,
        "symptoms": record.symptoms or None,
        "treatment": record.treatment or None,
        "outcome": record.outcome or None,
        "deathCause": record.death_cause or None,
        "cost": decimal_or_none(record.cost),
        "notes": record.notes,
    }


def feed_consumption_payload(record: FeedConsumption) -> dict[str, Any]:
    return {
        "id": record.pk,
        "recordDate": iso_or_none(record.record_date),
        "penId": record.pen_id,
        "feedType": record.feed_type,
        "quantity": decimal_or_none(record.quantity),
        "cost": decimal_or_none(record.cost),
        "notes": record.notes,
    }


def pen_transfer_payload(transfer: PenTransfer) -> dict[str, Any]:
    return {
        "id": transfer.pk,
        "pigletId": transfer.piglet_id,
        "fromPenId": transfer.from_pen_id,
        "toPenId": transfer.to_pen_id,
        "transferDate": iso_or_none(transfer.transfer_date),
        "reason": transfer.reason,
        "notes": transfer.notes,
    }
