from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from django import forms
from django.db import models, transaction
from django.db.models import ProtectedError
from django.forms.models import model_to_dict
from django.http import HttpRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.views import View

from activity_logs.models import ActivityAction, ActivityModule
from activity_logs.services import log_activity
from porcicola.api import (
    form_data_from_payload,
    form_errors,
    json_error,
    load_json_body,
    parse_optional_date,
    parse_positive_int,
)
from porcicola.mixins import AdminMethodsMixin, ApiLoginRequiredMixin

from . import forms as record_forms
from . import payloads
from .models import (
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
from .services import (
    RecordValidationError,
    apply_breeding_changes,
    register_breeding,
    register_farrowing,
    register_growth_record,
    register_health_record,
    register_weaning,
    transfer_piglets,
)


MAX_PAGE_SIZE = 500

Creator = Callable[..., models.Model]


@dataclass(frozen=True)
class RecordResource:
    """Describe how one herd model is exposed through the JSON API."""

    model: type[models.Model]
    form_class: type[forms.ModelForm]
    serializer: Callable[[Any], dict[str, Any]]
    module: str
    not_found: str
    filters: dict[str, str] = field(default_factory=dict)
    date_field: Optional[str] = None
    select_related: tuple[str, ...] = ()
    creator: Optional[Creator] = None
    after_update: Optional[Callable[[Any, list[str]], Any]] = None

    def queryset(self) -> models.QuerySet:
        return self.model.objects.select_related(*self.select_related)


RESOURCES: dict[str, RecordResource] = {
    "pens": RecordResource(
        model=Pen,
        form_class=record_forms.PenForm,
        serializer=payloads.pen_payload,
        module=ActivityModule.PENS,
        not_found="Corral no encontrado.",
        filters={"penType": "pen_type"},
    ),
    "sows": RecordResource(
        model=Sow,
        form_class=record_forms.SowForm,
        serializer=payloads.sow_payload,
        module=ActivityModule.SOWS,
        not_found="Cerda no encontrada.",
        filters={"status": "status", "penId": "current_pen_id"},
    ),
    "boars": RecordResource(
        model=Boar,
        form_class=record_forms.BoarForm,
        serializer=payloads.boar_payload,
        module=ActivityModule.BOARS,
        not_found="Verraco no encontrado.",
        filters={"status": "status", "penId": "current_pen_id"},
    ),
    "piglets": RecordResource(
        model=Piglet,
        form_class=record_forms.PigletForm,
        serializer=payloads.piglet_payload,
        module=ActivityModule.PIGLETS,
        not_found="Lechón no encontrado.",
        filters={"status": "status", "farrowingId": "farrowing_id", "penId": "current_pen_id"},
    ),
    "breedings": RecordResource(
        model=Breeding,
        form_class=record_forms.BreedingForm,
        serializer=payloads.breeding_payload,
        module=ActivityModule.BREEDING,
        not_found="Servicio no encontrado.",
        filters={"sowId": "sow_id", "boarId": "boar_id"},
        date_field="breeding_date",
        select_related=("sow", "boar"),
        creator=register_breeding,
        after_update=apply_breeding_changes,
    ),
    "farrowings": RecordResource(
        model=Farrowing,
        form_class=record_forms.FarrowingForm,
        serializer=payloads.farrowing_payload,
        module=ActivityModule.FARROWING,
        not_found="Parto no encontrado.",
        filters={"sowId": "sow_id"},
        date_field="farrowing_date",
        select_related=("sow",),
        creator=register_farrowing,
    ),
    "growth-records": RecordResource(
        model=GrowthRecord,
        form_class=record_forms.GrowthRecordForm,
        serializer=payloads.growth_record_payload,
        module=ActivityModule.GROWTH_RECORD,
        not_found="Pesaje no encontrado.",
        filters={"pigletId": "piglet_id"},
        date_field="record_date",
        creator=register_growth_record,
    ),
    "health-records": RecordResource(
        model=HealthRecord,
        form_class=record_forms.HealthRecordForm,
        serializer=payloads.health_record_payload,
        module=ActivityModule.HEALTH,
        not_found="Registro sanitario no encontrado.",
        filters={"recordType": "record_type", "sowId": "sow_id", "boarId": "boar_id", "pigletId": "piglet_id"},
        date_field="record_date",
        select_related=("sow", "boar", "piglet"),
        creator=register_health_record,
    ),
    "feed-consumption": RecordResource(
        model=FeedConsumption,
        form_class=record_forms.FeedConsumptionForm,
        serializer=payloads.feed_consumption_payload,
        module=ActivityModule.FEED,
        not_found="Consumo de alimento no encontrado.",
        filters={"penId": "pen_id", "feedType": "feed_type"},
        date_field="record_date",
    ),
}


def apply_query_filters(queryset, params, filters: dict[str, str]):
    """Narrow ``queryset`` by the query parameters mapped in ``filters``.

    Returns ``(queryset, errors)``; foreign key filters only accept numeric ids.
    """
    errors: dict[str, list[str]] = {}
    for param, lookup in filters.items():
        value = (params.get(param) or "").strip()
        if not value:
            continue
        if lookup.endswith("_id") and not value.isdigit():
            errors[param] = ["Debe ser un identificador numérico."]
            continue
        queryset = queryset.filter(**{lookup: value})
    return queryset, errors


class RecordResourceMixin:
    resource_name: str = ""

    @property
    def resource(self) -> RecordResource:
        return RESOURCES[self.resource_name]

    def log_change(self, request: HttpRequest, action: str, instance: models.Model, details=None) -> None:
        log_activity(
            action=action,
            module=self.resource.module,
            user=request.user,
            entity_id=instance.pk,
            entity_name=str(instance),
            details=details,
            request=request,
        )


class RecordCollectionView(RecordResourceMixin, ApiLoginRequiredMixin, View):
    http_method_names = ["get", "post"]

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        resource = self.resource
        queryset, errors = apply_query_filters(resource.queryset(), request.GET, resource.filters)
        if errors:
            return json_error("Parámetros de consulta inválidos.", code="INVALID_FILTER", errors=errors)
        if resource.date_field:
            start_date = parse_optional_date(request.GET.get("startDate"))
            end_date = parse_optional_date(request.GET.get("endDate"))
            if start_date:
                queryset = queryset.filter(**{f"{resource.date_field}__gte": start_date})
            if end_date:
                queryset = queryset.filter(**{f"{resource.date_field}__lte": end_date})
        limit = parse_positive_int(request.GET.get("limit"), MAX_PAGE_SIZE, maximum=MAX_PAGE_SIZE)
        return JsonResponse({"results": [resource.serializer(item) for item in queryset[:limit]]})

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        resource = self.resource
        payload, error = load_json_body(request)
        if error:
            return error

        form = resource.form_class(form_data_from_payload(payload, resource.form_class.base_fields))
        if not form.is_valid():
            return json_error("Datos inválidos.", errors=form_errors(form))

        if resource.creator is not None:
            try:
                instance = resource.creator(**form.cleaned_data, actor=request.user, request=request)
            except RecordValidationError as exc:
                return json_error("Datos inválidos.", errors=exc.field_errors)
        else:
            instance = form.save()
            self.log_change(request, ActivityAction.CREATE, instance)

        instance = resource.queryset().get(pk=instance.pk)
        return JsonResponse(resource.serializer(instance), status=201)


class RecordDetailView(RecordResourceMixin, AdminMethodsMixin, View):
    http_method_names = ["get", "patch", "put", "delete"]
    admin_methods = ("delete",)

    def get_object(self, pk: int) -> models.Model:
        return get_object_or_404(self.resource.queryset(), pk=pk)

    def get(self, request: HttpRequest, pk: int, *args: Any, **kwargs: Any) -> JsonResponse:
        return JsonResponse(self.resource.serializer(self.get_object(pk)))

    def patch(self, request: HttpRequest, pk: int, *args: Any, **kwargs: Any) -> JsonResponse:
        resource = self.resource
        instance = self.get_object(pk)
        payload, error = load_json_body(request)
        if error:
            return error

        field_names = list(resource.form_class.base_fields)
        data = model_to_dict(instance, fields=field_names)
        data.update(form_data_from_payload(payload, field_names))
        form = resource.form_class(data, instance=instance)
        if not form.is_valid():
            return json_error("Datos inválidos.", errors=form_errors(form))

        with transaction.atomic():
            instance = form.save()
            if resource.after_update is not None:
                resource.after_update(instance, form.changed_data)
        self.log_change(request, ActivityAction.UPDATE, instance, details={"changedFields": form.changed_data})
        return JsonResponse(resource.serializer(resource.queryset().get(pk=instance.pk)))

    put = patch

    def delete(self, request: HttpRequest, pk: int, *args: Any, **kwargs: Any) -> JsonResponse:
        instance = self.get_object(pk)
        label = str(instance)
        try:
            instance.delete()
        except ProtectedError:
            return json_error(
                "No es posible eliminar el registro porque tiene información relacionada.",
                status=409,
                code="PROTECTED",
            )
        log_activity(
            action=ActivityAction.DELETE,
            module=self.resource.module,
            user=request.user,
            entity_id=pk,
            entity_name=label,
            request=request,
        )
        return JsonResponse({"success": True})


class WeaningView(ApiLoginRequiredMixin, View):
    http_method_names = ["post"]

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        payload, error = load_json_body(request)
        if error:
            return error
        form = record_forms.WeaningForm(form_data_from_payload(payload, record_forms.WeaningForm.base_fields))
        if not form.is_valid():
            return json_error("Datos inválidos para el destete.", errors=form_errors(form))
        piglets = register_weaning(**form.cleaned_data, actor=request.user, request=request)
        return JsonResponse({"results": [payloads.piglet_payload(piglet) for piglet in piglets]}, status=201)


class PenTransferView(ApiLoginRequiredMixin, View):
    http_method_names = ["get", "post"]

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        queryset, errors = apply_query_filters(
            PenTransfer.objects.all(), request.GET, {"pigletId": "piglet_id", "penId": "to_pen_id"}
        )
        if errors:
            return json_error("Parámetros de consulta inválidos.", code="INVALID_FILTER", errors=errors)
        limit = parse_positive_int(request.GET.get("limit"), MAX_PAGE_SIZE, maximum=MAX_PAGE_SIZE)
        return JsonResponse({"results": [payloads.pen_transfer_payload(item) for item in queryset[:limit]]})

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        payload, error = load_json_body(request)
        if error:
            return error
        form = record_forms.PenTransferForm(form_data_from_payload(payload, record_forms.PenTransferForm.base_fields))
        if not form.is_valid():
            return json_error("Datos inválidos para el traslado.", errors=form_errors(form))
        transfers = transfer_piglets(**form.cleaned_data, actor=request.user, request=request)
        return JsonResponse({"results": [payloads.pen_transfer_payload(item) for item in transfers]}, status=201)
