"""Domain services for the activity_logs app."""

from .logger import ClientInfo, cleanup_old_logs, get_client_info, log_activity
from .stats import activity_log_payload, build_activity_stats

__all__ = [
    "ClientInfo",
    "activity_log_payload",
    "build_activity_stats",
    "cleanup_old_logs",
    "get_client_info",
    "log_activity",
]
