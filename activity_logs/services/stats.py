from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Any, Optional

from django.db.models import Count
from django.utils import timezone

from ..models import ActivityLog


def activity_log_payload(entry: ActivityLog) -> dict[str, Any]:
    return {
        "id": entry.pk,
        "userId": entry.user_identifier,
        "userEmail": entry.user_email,
        "userName": entry.user_name,
        "action": entry.action,
        "actionLabel": entry.get_action_display(),
        "module": entry.module,
        "entityId": entry.entity_id,
        "entityName": entry.entity_name,
        "details": entry.details,
        "ipAddress": entry.ip_address,
        "userAgent": entry.user_agent,
        "createdAt": entry.created_at.isoformat() if entry.created_at else None,
    }


def build_activity_stats(*, now: Optional[datetime] = None) -> dict[str, Any]:
    """Summaries for the activity dashboard; breakdowns cover the last 30 days."""
    current = now or timezone.now()
    today_start = timezone.make_aware(
        datetime.combine(timezone.localtime(current).date(), time.min),
        timezone.get_current_timezone(),
    )
    last_7_days = today_start - timedelta(days=7)
    last_30_days = today_start - timedelta(days=30)

    logs = ActivityLog.objects.all()
    recent_window = logs.filter(created_at__gte=last_30_days)

    action_stats = [
        {"action": row["action"], "count": row["total"]}
        for row in recent_window.values("action").annotate(total=Count("id")).order_by("-total", "action")
    ]
    module_stats = [
        {"module": row["module"], "count": row["total"]}
        for row in recent_window.values("module").annotate(total=Count("id")).order_by("-total", "module")
    ]
    user_stats = [
        {
            "userId": row["user_identifier"],
            "userEmail": row["user_email"],
            "userName": row["user_name"],
            "count": row["total"],
        }
        for row in recent_window.values("user_identifier", "user_email", "user_name")
        .annotate(total=Count("id"))
        .order_by("-total", "user_identifier")[:10]
    ]

    return {
        "summary": {
            "totalLogs": logs.count(),
            "todayLogs": logs.filter(created_at__gte=today_start).count(),
            "last7DaysLogs": logs.filter(created_at__gte=last_7_days).count(),
            "last30DaysLogs": recent_window.count(),
        },
        "actionStats": action_stats,
        "moduleStats": module_stats,
        "userStats": user_stats,
        "recentActivity": [activity_log_payload(entry) for entry in logs.order_by("-created_at", "-id")[:10]],
    }
