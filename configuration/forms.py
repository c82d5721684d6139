from __future__ import annotations

from django import forms

from .models import SystemConfig


class SystemConfigForm(forms.ModelForm):
    class Meta:
        model = SystemConfig
        fields = [
            "activity_log_retention_days",
            "max_login_attempts",
            "session_timeout_minutes",
            "auto_backup_enabled",
            "backup_frequency_days",
            "maintenance_mode",
        ]
