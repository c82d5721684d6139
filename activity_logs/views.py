from __future__ import annotations

from datetime import datetime, time
from typing import Any

from django.core.paginator import Paginator
from django.db.models import Q
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views import View

from porcicola.api import json_error, load_json_body, parse_optional_date, parse_positive_int
from porcicola.mixins import AdminMethodsMixin, ApiAdminRequiredMixin

from .models import ActivityAction, ActivityLog, ActivityModule
from .services import activity_log_payload, build_activity_stats, cleanup_old_logs, log_activity


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200


class ActivityLogCollectionView(AdminMethodsMixin, View):
    http_method_names = ["get", "post", "delete"]
    admin_methods = ("get", "delete")

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        params = request.GET
        page_number = parse_positive_int(params.get("page"), 1)
        page_size = parse_positive_int(params.get("limit"), DEFAULT_PAGE_SIZE, maximum=MAX_PAGE_SIZE)

        queryset = self._filtered_queryset(params)
        paginator = Paginator(queryset, page_size)
        page = paginator.get_page(page_number)
        return JsonResponse(
            {
                "logs": [activity_log_payload(entry) for entry in page.object_list],
                "pagination": {
                    "page": page.number,
                    "limit": page_size,
                    "total": paginator.count,
                    "totalPages": paginator.num_pages if paginator.count else 0,
                },
            }
        )

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        payload, error = load_json_body(request)
        if error:
            return error

        action = (payload.get("action") or "").strip()
        module = (payload.get("module") or "").strip()
        errors: dict[str, list[str]] = {}
        if action not in ActivityAction.values:
            errors["action"] = ["Acción no válida."]
        if not module:
            errors["module"] = ["El módulo es obligatorio."]
        if errors:
            return json_error("Datos inválidos para el registro de actividad.", errors=errors)

        details = payload.get("details")
        entry = log_activity(
            action=action,
            module=module,
            user=request.user,
            entity_id=payload.get("entityId"),
            entity_name=payload.get("entityName"),
            details=details if isinstance(details, dict) else None,
            request=request,
        )
        return JsonResponse({"success": entry is not None}, status=201)

    def delete(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        retention_raw = request.GET.get("retentionDays")
        retention_days = parse_positive_int(retention_raw, 0) or None

        log_activity(
            action=ActivityAction.DELETE,
            module=ActivityModule.ACTIVITY_LOGS,
            user=request.user,
            details={"retentionDays": retention_days},
            request=request,
        )
        deleted = cleanup_old_logs(retention_days)
        return JsonResponse(
            {
                "success": True,
                "deletedCount": deleted,
                "message": f"Se eliminaron {deleted} registros de actividad.",
            }
        )

    @staticmethod
    def _filtered_queryset(params) -> Any:
        queryset = ActivityLog.objects.all()
        user_id = (params.get("userId") or "").strip()
        action = (params.get("action") or "").strip()
        module = (params.get("module") or "").strip()
        search = (params.get("search") or "").strip()
        start_date = parse_optional_date(params.get("startDate"))
        end_date = parse_optional_date(params.get("endDate"))

        if user_id:
            queryset = queryset.filter(user_identifier=user_id)
        if action:
            queryset = queryset.filter(action=action)
        if module:
            queryset = queryset.filter(module=module)
        if search:
            queryset = queryset.filter(
                Q(user_email__icontains=search)
                | Q(user_name__icontains=search)
                | Q(entity_name__icontains=search)
            )
        tz = timezone.get_current_timezone()
        if start_date:
            queryset = queryset.filter(created_at__gte=timezone.make_aware(datetime.combine(start_date, time.min), tz))
        if end_date:
            queryset = queryset.filter(created_at__lte=timezone.make_aware(datetime.combine(end_date, time.max), tz))
        return queryset.order_by("-created_at", "-id")


class ActivityLogStatsView(ApiAdminRequiredMixin, View):
    http_method_names = ["get"]

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        return JsonResponse(build_activity_stats())
