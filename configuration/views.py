from __future__ import annotations

from typing import Any

from django.db import transaction
from django.http import HttpRequest, JsonResponse
from django.views import View

from activity_logs.models import ActivityAction, ActivityModule
from activity_logs.services import log_activity
from porcicola.api import form_errors, json_error, load_json_body
from porcicola.mixins import AdminMethodsMixin

from .forms import SystemConfigForm
from .models import SYSTEM_CONFIG_ID, SystemConfig
from .services import SystemSettings


PAYLOAD_FIELDS = {
    "activityLogRetentionDays": "activity_log_retention_days",
    "maxLoginAttempts": "max_login_attempts",
    "sessionTimeoutMinutes": "session_timeout_minutes",
    "autoBackupEnabled": "auto_backup_enabled",
    "backupFrequencyDays": "backup_frequency_days",
    "maintenanceMode": "maintenance_mode",
}


class SystemConfigView(AdminMethodsMixin, View):
    http_method_names = ["get", "put"]
    admin_methods = ("put",)

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        config, _ = SystemConfig.objects.get_or_create(pk=SYSTEM_CONFIG_ID)
        return JsonResponse(SystemSettings.from_model(config).as_payload())

    def put(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        payload, error = load_json_body(request)
        if error:
            return error

        with transaction.atomic():
            config, _ = SystemConfig.objects.select_for_update().get_or_create(pk=SYSTEM_CONFIG_ID)
            previous = SystemSettings.from_model(config).as_payload()
            data = {field: getattr(config, field) for field in PAYLOAD_FIELDS.values()}
            for key, field in PAYLOAD_FIELDS.items():
                if key in payload:
                    data[field] = payload[key]

            form = SystemConfigForm(data, instance=config)
            if not form.is_valid():
                return json_error("Configuración inválida.", errors=form_errors(form))
            config = form.save()

        current = SystemSettings.from_model(config).as_payload()
        log_activity(
            action=ActivityAction.UPDATE,
            module=ActivityModule.SETTINGS,
            user=request.user,
            entity_id=SYSTEM_CONFIG_ID,
            entity_name="Configuración del sistema",
            details={
                "changes": {
                    key: {"from": previous[key], "to": value}
                    for key, value in current.items()
                    if previous[key] != value
                }
            },
            request=request,
        )
        return JsonResponse(current)
