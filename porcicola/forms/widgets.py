from __future__ import annotations

from datetime import date

from django import forms
from django.utils import timezone
from django.utils.dateparse import parse_date


class FarmDateInput(forms.DateInput):
    """Native date picker in ISO format.

    Event dates (births, services, weighings) cannot lie in the future, so by
    default the picker is capped at the farm's current date. Planned dates such
    as the expected farrowing pass ``past_only=False``.
    """

    input_type = "date"
    iso_format = "%Y-%m-%d"

    def __init__(self, attrs: dict[str, str] | None = None, *, past_only: bool = True) -> None:
        super().__init__(attrs=dict(attrs or {}), format=self.iso_format)
        self.past_only = past_only

    def get_context(self, name, value, attrs):
        context = super().get_context(name, value, attrs)
        if self.past_only:
            context["widget"]["attrs"].setdefault("max", timezone.localdate().isoformat())
        return context

    def format_value(self, value):
        if isinstance(value, str):
            value = parse_date(value) or value
        if isinstance(value, date):
            return value.isoformat()
        return super().format_value(value)
