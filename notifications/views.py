from __future__ import annotations

from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views import View

from porcicola.api import form_errors, json_error, load_json_body, parse_positive_int
from porcicola.mixins import AdminMethodsMixin, ApiLoginRequiredMixin

from .forms import NotificationForm
from .models import Notification
from .services import (
    broadcast_notification,
    count_unread,
    create_notification,
    mark_all_as_read,
    mark_as_read,
    notifications_for_user,
)


def notification_payload(notification: Notification) -> dict[str, Any]:
    return {
        "id": notification.pk,
        "userId": notification.user_id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "category": notification.category,
        "link": notification.link,
        "isRead": notification.is_read,
        "readAt": notification.read_at.isoformat() if notification.read_at else None,
        "createdAt": notification.created_at.isoformat() if notification.created_at else None,
    }


class NotificationCollectionView(AdminMethodsMixin, View):
    http_method_names = ["get", "post"]
    admin_methods = ("post",)

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        limit = parse_positive_int(request.GET.get("limit"), 50, maximum=200)
        unread_only = request.GET.get("unreadOnly") == "true"
        notifications = notifications_for_user(request.user, limit=limit, unread_only=unread_only)
        return JsonResponse(
            {
                "notifications": [notification_payload(item) for item in notifications],
                "unreadCount": count_unread(request.user),
            }
        )

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        payload, error = load_json_body(request)
        if error:
            return error
        form = NotificationForm(payload)
        if not form.is_valid():
            return json_error("Datos inválidos para la notificación.", errors=form_errors(form))

        data = form.cleaned_data
        fields = {
            "title": data["title"],
            "message": data["message"],
            "type": data["type"] or Notification._meta.get_field("type").default,
            "category": data.get("category"),
            "link": data.get("link"),
        }
        if data.get("user"):
            notification = create_notification(user=data["user"], **fields)
        else:
            notification = broadcast_notification(**fields)
        if notification is None:
            return json_error("No fue posible crear la notificación.", status=500, code="SERVER_ERROR")
        return JsonResponse({"notification": notification_payload(notification)}, status=201)


class NotificationReadView(ApiLoginRequiredMixin, View):
    http_method_names = ["post"]

    def post(self, request: HttpRequest, notification_id: int, *args: Any, **kwargs: Any) -> JsonResponse:
        notification = mark_as_read(notification_id, request.user)
        if notification is None:
            return json_error("Notificación no encontrada.", status=404, code="NOT_FOUND")
        return JsonResponse({"notification": notification_payload(notification)})


class NotificationReadAllView(ApiLoginRequiredMixin, View):
    http_method_names = ["post"]

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        updated = mark_all_as_read(request.user)
        return JsonResponse({"success": True, "updated": updated})
