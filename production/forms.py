from __future__ import annotations

from typing import Any

from django import forms

from porcicola.forms.widgets import FarmDateInput
from production.models import (
    Boar,
    Breeding,
    FeedConsumption,
    Farrowing,
    GrowthRecord,
    HealthRecord,
    Pen,
    Piglet,
    PigletStatus,
    Sow,
)


class BaseRecordForm(forms.ModelForm):
    """Shared styling and behaviour for the herd record forms."""

    input_classes = (
        "block w-full rounded-lg border border-slate-200 bg-white px-3 py-2 text-sm "
        "font-medium text-slate-700 shadow-inner transition focus:border-pink-400 "
        "focus:outline-none focus:ring-2 focus:ring-pink-100"
    )

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            widget = field.widget
            existing_classes = widget.attrs.get("class", "")
            widget.attrs["class"] = f"{existing_classes} {self.input_classes}".strip()
            if isinstance(field, forms.CharField) and field.max_length:
                widget.attrs.setdefault("maxlength", str(field.max_length))
            if isinstance(field, forms.DecimalField):
                widget.attrs.setdefault("step", "0.01")
                widget.attrs.setdefault("min", "0")
        for name in self._defaulted_fields():
            self.fields[name].required = False

    def _defaulted_fields(self) -> list[str]:
        opts = self._meta.model._meta
        return [name for name in self.fields if opts.get_field(name).has_default()]

    def clean(self) -> dict[str, Any]:
        cleaned_data = super().clean()
        opts = self._meta.model._meta
        for name in self._defaulted_fields():
            if cleaned_data.get(name) in (None, ""):
                cleaned_data[name] = opts.get_field(name).get_default()
        return cleaned_data


class PenForm(BaseRecordForm):
    class Meta:
        model = Pen
        fields = ["pen_number", "pen_type", "capacity", "current_count", "notes"]


class SowForm(BaseRecordForm):
    class Meta:
        model = Sow
        fields = ["tag_number", "breed", "birth_date", "status", "purchase_date", "current_pen", "notes"]
        widgets = {
            "birth_date": FarmDateInput(),
            "purchase_date": FarmDateInput(),
        }


class BoarForm(BaseRecordForm):
    class Meta:
        model = Boar
        fields = ["tag_number", "breed", "birth_date", "status", "purchase_date", "current_pen", "notes"]
        widgets = {
            "birth_date": FarmDateInput(),
            "purchase_date": FarmDateInput(),
        }


class PigletForm(BaseRecordForm):
    class Meta:
        model = Piglet
        fields = [
            "tag_number",
            "farrowing",
            "birth_weight",
            "gender",
            "status",
            "current_pen",
            "weaning_date",
            "weaning_weight",
            "death_date",
            "death_cause",
            "notes",
        ]
        widgets = {
            "weaning_date": FarmDateInput(),
            "death_date": FarmDateInput(),
        }


class BreedingForm(BaseRecordForm):
    class Meta:
        model = Breeding
        fields = ["sow", "boar", "breeding_date", "breeding_method", "expected_farrow_date", "success", "notes"]
        widgets = {
            "breeding_date": FarmDateInput(),
            "expected_farrow_date": FarmDateInput(past_only=False),
        }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.fields["expected_farrow_date"].required = False


class FarrowingForm(BaseRecordForm):
    class Meta:
        model = Farrowing
        fields = [
            "sow",
            "breeding",
            "farrowing_date",
            "total_born",
            "born_alive",
            "stillborn",
            "mummified",
            "average_birth_weight",
            "notes",
        ]
        widgets = {
            "farrowing_date": FarmDateInput(),
        }


class GrowthRecordForm(BaseRecordForm):
    class Meta:
        model = GrowthRecord
        fields = ["piglet", "record_date", "weight", "notes"]
        widgets = {
            "record_date": FarmDateInput(),
        }


class HealthRecordForm(BaseRecordForm):
    class Meta:
        model = HealthRecord
        fields = [
            "record_type",
            "record_date",
            "sow",
            "boar",
            "piglet",
            "vaccine_name",
            "medicine_name",
            "dosage",
            "administered_by",
            "disease",
            "symptoms",
            "treatment",
            "outcome",
            "death_cause",
            "cost",
            "notes",
        ]
        widgets = {
            "record_date": FarmDateInput(),
        }


class FeedConsumptionForm(BaseRecordForm):
    class Meta:
        model = FeedConsumption
        fields = ["record_date", "pen", "feed_type", "quantity", "cost", "notes"]
        widgets = {
            "record_date": FarmDateInput(),
        }


class WeaningForm(forms.Form):
    piglets = forms.ModelMultipleChoiceField(queryset=Piglet.objects.alive())
    weaning_date = forms.DateField(widget=FarmDateInput())
    weaning_weight = forms.DecimalField(max_digits=6, decimal_places=2, min_value=0, required=False)
    sow = forms.ModelChoiceField(queryset=Sow.objects.all(), required=False)
    notes = forms.CharField(required=False, widget=forms.Textarea)

    def clean_piglets(self):
        piglets = self.cleaned_data["piglets"]
        not_nursing = [str(piglet) for piglet in piglets if piglet.status != PigletStatus.NURSING]
        if not_nursing:
            raise forms.ValidationError(
                "Solo se pueden destetar lechones lactantes: %(piglets)s",
                params={"piglets": ", ".join(not_nursing)},
            )
        return piglets


class PenTransferForm(forms.Form):
    piglets = forms.ModelMultipleChoiceField(queryset=Piglet.objects.alive())
    to_pen = forms.ModelChoiceField(queryset=Pen.objects.all())
    transfer_date = forms.DateField(widget=FarmDateInput())
    reason = forms.CharField(max_length=150, required=False)
    notes = forms.CharField(required=False, widget=forms.Textarea)
