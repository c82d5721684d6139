from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from typing import Any, Iterable

from openpyxl import Workbook
from openpyxl.styles import Font

from production.models import PigletStatus, SowStatus

from .key_metrics import FarmAnalyticsResult, iter_performance_rows

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

OVERVIEW_LABELS = {
    "totalSows": "Cerdas",
    "totalBoars": "Verracos",
    "totalPiglets": "Lechones",
    "totalPens": "Corrales",
    "totalAnimals": "Total de animales",
}


def normalize_export_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (int, float, bool)):
        return value
    return str(value)


def _append_rows(sheet, header: Iterable[str], rows: Iterable[Iterable[Any]]) -> None:
    sheet.append(list(header))
    for cell in sheet[sheet.max_row]:
        cell.font = Font(bold=True)
    for row in rows:
        sheet.append([normalize_export_value(value) for value in row])


def build_analytics_workbook(result: FarmAnalyticsResult) -> bytes:
    """Render the analytics payload as an xlsx file with one sheet per block."""
    workbook = Workbook()
    summary = workbook.active
    summary.title = "Resumen"
    summary.append(["Periodo", f"{result.start_date:%Y-%m-%d} a {result.end_date:%Y-%m-%d}"])
    summary.append([])
    _append_rows(
        summary,
        ("Indicador", "Valor"),
        [(OVERVIEW_LABELS.get(key, key), value) for key, value in result.overview.items()],
    )

    performance = workbook.create_sheet("Indicadores")
    _append_rows(performance, ("Indicador", "Valor"), iter_performance_rows(result))

    sow_labels = dict(SowStatus.choices)
    piglet_labels = dict(PigletStatus.choices)
    statuses = workbook.create_sheet("Estados")
    _append_rows(
        statuses,
        ("Grupo", "Estado", "Cantidad"),
        [("Cerdas", sow_labels.get(status, status), count) for status, count in result.sows_by_status.items()]
        + [
            ("Lechones", piglet_labels.get(status, status), count)
            for status, count in result.piglets_by_status.items()
        ],
    )

    upcoming = workbook.create_sheet("Partos próximos")
    _append_rows(
        upcoming,
        ("Cerda", "Verraco", "Fecha de servicio", "Fecha probable de parto"),
        [
            (breeding.sow.tag_number, breeding.boar.tag_number, breeding.breeding_date, breeding.expected_farrow_date)
            for breeding in result.upcoming_farrowings
        ],
    )

    health = workbook.create_sheet("Sanidad reciente")
    _append_rows(
        health,
        ("Fecha", "Tipo", "Animal", "Enfermedad", "Causa de muerte", "Costo"),
        [
            (
                record.record_date,
                record.get_record_type_display(),
                record.subject_label,
                record.disease,
                record.death_cause,
                record.cost,
            )
            for record in result.recent_health_records
        ],
    )

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
