from __future__ import annotations

from typing import Any

import httpx
from django.conf import settings
from django.utils.html import escape

from ..models import Notification, NotificationType


TYPE_ICONS = {
    NotificationType.INFO: "ℹ️",
    NotificationType.SUCCESS: "✅",
    NotificationType.WARNING: "⚠️",
    NotificationType.ERROR: "⛔",
    NotificationType.TASK: "📋",
}


class TelegramNotificationError(Exception):
    """Excepción cuando la API de Telegram retorna un error."""

    def __init__(self, message: str, *, response: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.response = response or {}


class TelegramAPIClient:
    """Cliente ligero para consumir la API de Telegram."""

    def __init__(self, token: str, *, timeout: float = 10.0) -> None:
        self.token = token
        self.timeout = timeout

    @property
    def api_base_url(self) -> str:
        return f"https://api.telegram.org/bot{self.token}"

    def _request(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.api_base_url}/{method}"
        response = httpx.post(url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if not data.get("ok", False):
            raise TelegramNotificationError(
                data.get("description") or "Telegram API error.",
                response=data,
            )
        return data

    def send_message(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Envía un mensaje usando sendMessage."""
        return self._request("sendMessage", payload)


class TelegramAlertSender:
    """Reenvía alertas para administradores al chat configurado en Telegram."""

    def __init__(self, *, token: str | None = None, chat_id: str | None = None, timeout: float | None = None) -> None:
        self.token = token if token is not None else getattr(settings, "TELEGRAM_BOT_TOKEN", "")
        self.chat_id = chat_id if chat_id is not None else getattr(settings, "TELEGRAM_ALERT_CHAT_ID", "")
        self.timeout = timeout if timeout is not None else getattr(settings, "TELEGRAM_TIMEOUT_SECONDS", 10.0)

    @property
    def is_configured(self) -> bool:
        return bool(self.token and self.chat_id)

    def build_payload(self, notification: Notification) -> dict[str, Any]:
        icon = TYPE_ICONS.get(notification.type, "")
        text = f"{icon} <b>{escape(notification.title)}</b>\n{escape(notification.message)}".strip()
        return {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }

    def send(self, notification: Notification) -> dict[str, Any]:
        if not self.is_configured:
            raise TelegramNotificationError("Telegram no está configurado para alertas.")
        client = TelegramAPIClient(self.token, timeout=self.timeout)
        try:
            return client.send_message(self.build_payload(notification))
        except httpx.HTTPError as exc:
            raise TelegramNotificationError("Error de transporte al enviar la notificación.") from exc

    def __call__(self, notification: Notification) -> dict[str, Any]:
        return self.send(notification)
