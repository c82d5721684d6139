from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Optional

from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone
from django.views import View, generic

from activity_logs.models import ActivityAction, ActivityModule
from activity_logs.services import log_activity
from porcicola.api import json_error, parse_optional_date
from porcicola.mixins import ApiLoginRequiredMixin, PortalLoginRequiredMixin

from .services.death_causes import build_death_causes, count_piglet_deaths
from .services.exports import XLSX_CONTENT_TYPE, build_analytics_workbook
from .services.key_metrics import DEFAULT_RANGE_DAYS, build_farm_analytics
from .services.monthly_trends import build_monthly_trends
from .services.sow_performance import build_litter_survival, build_sow_performance

logger = logging.getLogger(__name__)

QUICK_RANGE_DAYS = (7, 30, 60, 90)
GENERIC_ERROR_MESSAGE = "No fue posible calcular los indicadores."


def _requested_window(request: HttpRequest) -> tuple[Optional[date], Optional[date]]:
    params = request.GET
    start_date = parse_optional_date(params.get("startDate") or params.get("start_date"))
    end_date = parse_optional_date(params.get("endDate") or params.get("end_date"))
    return start_date, end_date


class FarmDashboardView(PortalLoginRequiredMixin, generic.TemplateView):
    template_name = "reports/dashboard.html"

    def get_context_data(self, **kwargs: Any) -> dict[str, Any]:
        context = super().get_context_data(**kwargs)
        start_date, end_date = _requested_window(self.request)
        result = build_farm_analytics(start_date, end_date)
        context.update(
            {
                "selected_start_date": result.start_date,
                "selected_end_date": result.end_date,
                "analytics": result.as_payload(),
                "upcoming_farrowings": result.upcoming_farrowings,
                "recent_health_records": result.recent_health_records,
                "quick_ranges": self._build_quick_ranges(result.end_date),
                "default_range_days": DEFAULT_RANGE_DAYS,
                "piglet_deaths_today": count_piglet_deaths(),
            }
        )
        return context

    def _build_quick_ranges(self, end_date: date) -> list[dict[str, Any]]:
        return [
            {
                "label": f"Últimos {days} días",
                "start": end_date - timedelta(days=days),
                "end": end_date,
                "days": days,
            }
            for days in QUICK_RANGE_DAYS
        ]


class FarmAnalyticsView(ApiLoginRequiredMixin, View):
    http_method_names = ["get"]

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        start_date, end_date = _requested_window(request)
        try:
            result = build_farm_analytics(start_date, end_date)
        except DatabaseError:
            logger.exception("Error calculando indicadores de la granja")
            return json_error(GENERIC_ERROR_MESSAGE, status=500, code="SERVER_ERROR")
        return JsonResponse(result.as_payload())


class FarmAnalyticsExportView(ApiLoginRequiredMixin, View):
    http_method_names = ["get"]

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        start_date, end_date = _requested_window(request)
        try:
            result = build_farm_analytics(start_date, end_date)
        except DatabaseError:
            logger.exception("Error exportando indicadores de la granja")
            return json_error(GENERIC_ERROR_MESSAGE, status=500, code="SERVER_ERROR")

        filename = f"indicadores_{result.start_date:%Y%m%d}_{result.end_date:%Y%m%d}.xlsx"
        response = HttpResponse(build_analytics_workbook(result), content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        log_activity(
            action=ActivityAction.EXPORT,
            module=ActivityModule.REPORTS,
            user=request.user,
            entity_name=filename,
            details={"startDate": result.start_date.isoformat(), "endDate": result.end_date.isoformat()},
            request=request,
        )
        return response


class ReportView(ApiLoginRequiredMixin, View):
    """Read-only JSON report whose builder may fail on the datastore."""

    http_method_names = ["get"]
    error_message = "No fue posible generar el reporte."

    def build(self, request: HttpRequest) -> Any:
        raise NotImplementedError

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        try:
            data = self.build(request)
        except DatabaseError:
            logger.exception("Error generando el reporte %s", self.__class__.__name__)
            return json_error(self.error_message, status=500, code="SERVER_ERROR")
        return JsonResponse(data, safe=False)


class MonthlyTrendsView(ReportView):
    def build(self, request: HttpRequest) -> Any:
        return [trend.as_payload() for trend in build_monthly_trends()]


class SowPerformanceView(ReportView):
    def build(self, request: HttpRequest) -> Any:
        return [row.as_payload() for row in build_sow_performance()]


class LitterSurvivalView(ReportView):
    def build(self, request: HttpRequest) -> Any:
        start_date, end_date = _requested_window(request)
        return build_litter_survival(start_date, end_date)


class DeathCausesView(ReportView):
    def build(self, request: HttpRequest) -> Any:
        return build_death_causes()


class PigletDeathAlertView(ReportView):
    def build(self, request: HttpRequest) -> Any:
        today = timezone.localdate()
        return {"date": today.isoformat(), "count": count_piglet_deaths(today)}
