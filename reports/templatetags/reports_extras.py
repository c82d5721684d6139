from __future__ import annotations

from decimal import Decimal, InvalidOperation

from django import template

from production.models import HealthRecordType, PigletStatus, SowStatus

register = template.Library()

_STATUS_LABELS = {
    "sow": dict(SowStatus.choices),
    "piglet": dict(PigletStatus.choices),
    "health": dict(HealthRecordType.choices),
}


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")


def _format_with_thousands(value: Decimal, decimals: int) -> str:
    decimals = max(decimals, 0)
    formatted = format(value, f",.{decimals}f")
    if decimals == 0:
        return formatted.replace(",", ".")
    integer_part, fraction_part = formatted.split(".")
    integer_part = integer_part.replace(",", ".")
    return f"{integer_part},{fraction_part}"


@register.filter(name="number_format")
def number_format(value: object, decimals: int = 0) -> str:
    """Format numbers using dots as thousand separators and comma decimals."""
    if value is None or value == "":
        return "—"
    try:
        decimals_int = int(decimals)
    except (TypeError, ValueError):
        decimals_int = 0
    return _format_with_thousands(_to_decimal(value), decimals_int)


@register.filter(name="percent")
def percent(value: object, decimals: int = 2) -> str:
    formatted = number_format(value, decimals)
    return formatted if formatted == "—" else f"{formatted} %"


@register.filter(name="status_label")
def status_label(value: str, group: str) -> str:
    """Spanish label of a sow, piglet or health record status code."""
    return _STATUS_LABELS.get(group, {}).get(value, value)
