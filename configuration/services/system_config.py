from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from django.db import DatabaseError, transaction

from ..models import SYSTEM_CONFIG_ID, SystemConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SystemSettings:
    activity_log_retention_days: int = 90
    max_login_attempts: int = 5
    session_timeout_minutes: int = 30
    auto_backup_enabled: bool = True
    backup_frequency_days: int = 7
    maintenance_mode: bool = False

    @classmethod
    def from_model(cls, config: SystemConfig) -> "SystemSettings":
        return cls(
            activity_log_retention_days=config.activity_log_retention_days,
            max_login_attempts=config.max_login_attempts,
            session_timeout_minutes=config.session_timeout_minutes,
            auto_backup_enabled=config.auto_backup_enabled,
            backup_frequency_days=config.backup_frequency_days,
            maintenance_mode=config.maintenance_mode,
        )

    def as_payload(self) -> dict[str, Any]:
        return {
            "activityLogRetentionDays": self.activity_log_retention_days,
            "maxLoginAttempts": self.max_login_attempts,
            "sessionTimeoutMinutes": self.session_timeout_minutes,
            "autoBackupEnabled": self.auto_backup_enabled,
            "backupFrequencyDays": self.backup_frequency_days,
            "maintenanceMode": self.maintenance_mode,
        }


DEFAULT_SYSTEM_SETTINGS = SystemSettings()


def get_system_config() -> SystemSettings:
    """Return the current settings, creating the default row on first use.

    A datastore failure falls back to the defaults so the login flow keeps a
    usable attempt limit.
    """
    try:
        with transaction.atomic():
            config, _ = SystemConfig.objects.get_or_create(pk=SYSTEM_CONFIG_ID)
    except DatabaseError:
        logger.exception("No fue posible leer la configuración del sistema; se usan valores por defecto.")
        return DEFAULT_SYSTEM_SETTINGS
    return SystemSettings.from_model(config)


def get_max_login_attempts() -> int:
    return get_system_config().max_login_attempts or DEFAULT_SYSTEM_SETTINGS.max_login_attempts
