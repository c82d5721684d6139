from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from django.db import transaction
from django.http import HttpRequest
from django.utils import timezone

from configuration.services import get_system_config

from ..models import UNKNOWN_ACTOR, ActivityLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientInfo:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def get_client_info(request: Optional[HttpRequest]) -> ClientInfo:
    """Resolve the caller IP (first proxy hop wins) and user agent."""
    if request is None:
        return ClientInfo()
    meta = request.META
    forwarded = (meta.get("HTTP_X_FORWARDED_FOR") or "").strip()
    if forwarded:
        ip_address = forwarded.split(",")[0].strip() or None
    else:
        ip_address = meta.get("HTTP_X_REAL_IP") or meta.get("REMOTE_ADDR") or None
    user_agent = meta.get("HTTP_USER_AGENT") or None
    return ClientInfo(ip_address=ip_address, user_agent=user_agent)


def log_activity(
    *,
    action: str,
    module: str,
    user: Any = None,
    user_identifier: Optional[str] = None,
    user_email: str = "",
    user_name: Optional[str] = None,
    entity_id: Any = None,
    entity_name: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
    request: Optional[HttpRequest] = None,
) -> Optional[ActivityLog]:
    """Persist an activity entry without ever breaking the calling operation.

    Failures are logged and swallowed; the insert runs in its own savepoint so
    an error does not poison an outer transaction.
    """
    actor = user if getattr(user, "pk", None) else None
    if actor is not None:
        user_identifier = user_identifier or str(actor.pk)
        user_email = user_email or (getattr(actor, "email", "") or "")
        user_name = user_name or actor.get_full_name()
    client = get_client_info(request)
    try:
        with transaction.atomic():
            return ActivityLog.objects.create(
                user=actor,
                user_identifier=user_identifier or UNKNOWN_ACTOR,
                user_email=user_email or "",
                user_name=user_name or None,
                action=action,
                module=module,
                entity_id=str(entity_id) if entity_id not in (None, "") else None,
                entity_name=entity_name or None,
                details=details or None,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
            )
    except Exception:  # pragma: no cover - activity logging is best-effort
        logger.exception("No fue posible registrar la actividad %s del módulo %s", action, module)
        return None


def cleanup_old_logs(retention_days: Optional[int] = None) -> int:
    """Delete entries older than the retention window and return how many were removed."""
    days = retention_days if retention_days is not None else get_system_config().activity_log_retention_days
    cutoff = timezone.now() - timedelta(days=days)
    deleted, _ = ActivityLog.objects.filter(created_at__lt=cutoff).delete()
    if deleted:
        logger.info("Se eliminaron %s registros de actividad anteriores a %s", deleted, cutoff.date())
    return deleted
