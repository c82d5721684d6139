"""Expose the unread notification badge to every template."""

from __future__ import annotations

from .services import count_unread


def unread_notifications(request):
    user = getattr(request, "user", None)
    if not user or not user.is_authenticated:
        return {"unread_notifications_count": 0}
    return {"unread_notifications_count": count_unread(user)}
