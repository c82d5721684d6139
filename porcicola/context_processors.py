"""Template context shared by every page of the farm portal."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.utils import timezone


def _farm_zone() -> tuple[str, ZoneInfo]:
    name = getattr(settings, "TIME_ZONE", None) or "UTC"
    try:
        return name, ZoneInfo(name)
    except ZoneInfoNotFoundError:
        return "UTC", ZoneInfo("UTC")


def timezone_settings(request):
    """Expose the farm timezone and today's local date to templates."""

    zone_name, zone = _farm_zone()
    farm_now = timezone.now().astimezone(zone) if settings.USE_TZ else timezone.now().replace(tzinfo=zone)
    offset = farm_now.utcoffset()

    return {
        "FARM_TIME_ZONE": zone_name,
        "FARM_TIME_ZONE_OFFSET_MINUTES": int(offset.total_seconds() // 60) if offset else 0,
        "FARM_TODAY": farm_now.date(),
    }
