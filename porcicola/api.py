"""Helpers shared by the JSON endpoints of every app."""

from __future__ import annotations

import json
import re
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from django import forms
from django.http import HttpRequest, JsonResponse
from django.utils.dateparse import parse_date


def json_error(
    message: str,
    *,
    status: int = 400,
    code: Optional[str] = None,
    errors: Optional[dict[str, Any]] = None,
) -> JsonResponse:
    payload: dict[str, Any] = {"error": code or message, "message": message}
    if errors:
        payload["errors"] = errors
    return JsonResponse(payload, status=status)


def form_errors(form: forms.Form) -> dict[str, list[str]]:
    error_dict: dict[str, list[str]] = {}
    for field, messages_list in form.errors.items():
        error_dict[field] = [str(message) for message in messages_list]
    return error_dict


def load_json_body(request: HttpRequest) -> tuple[Optional[dict[str, Any]], Optional[JsonResponse]]:
    try:
        payload = json.loads(request.body or "{}")
    except json.JSONDecodeError:
        return None, json_error("JSON inválido", code="INVALID_JSON")
    if not isinstance(payload, dict):
        return None, json_error("El cuerpo debe ser un objeto JSON", code="INVALID_JSON")
    return payload, None


def parse_positive_int(value: Any, default: int, *, maximum: Optional[int] = None) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed < 1:
        return default
    if maximum is not None:
        return min(parsed, maximum)
    return parsed


def parse_optional_date(value: Any) -> Optional[date]:
    raw = (value or "").strip() if isinstance(value, str) else ""
    if not raw:
        return None
    try:
        return parse_date(raw[:10])
    except ValueError:
        return None


def decimal_or_none(value: Optional[Decimal]) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def iso_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def form_data_from_payload(payload: dict[str, Any], field_names: Iterable[str]) -> dict[str, Any]:
    """Translate a camelCase JSON body into form data keyed by ``field_names``.

    ``sowId`` maps to ``sow`` and ``pigletIds`` to ``piglets`` when those are form fields.
    Unknown keys are dropped.
    """
    fields = set(field_names)
    data: dict[str, Any] = {}
    for key, value in payload.items():
        name = camel_to_snake(key)
        if name not in fields and name.endswith("_id") and name[:-3] in fields:
            name = name[:-3]
        elif name not in fields and name.endswith("_ids") and f"{name[:-4]}s" in fields:
            name = f"{name[:-4]}s"
        if name in fields:
            data[name] = value
    return data
