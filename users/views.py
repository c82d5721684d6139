from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth.mixins import LoginRequiredMixin
from django.contrib.auth.views import LoginView, LogoutView
from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.urls import reverse_lazy
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from porcicola.api import form_errors, iso_or_none, json_error, load_json_body
from porcicola.mixins import ApiAdminRequiredMixin

from .forms import PortalAuthenticationForm, UserLockForm
from .models import UserProfile
from .services import AccountNotLockedError, LoginOutcome, check_credentials, lock_user, unlock_user

logger = logging.getLogger(__name__)


def user_lock_payload(user: UserProfile) -> dict[str, Any]:
    return {
        "id": user.pk,
        "username": user.username,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "lockState": user.lock_state(),
        "failedLoginAttempts": user.failed_login_attempts,
        "lockedAt": iso_or_none(user.locked_at),
        "lockedUntil": iso_or_none(user.locked_until),
        "lockedReason": user.locked_reason,
    }


class PortalLoginView(LoginView):
    template_name = "users/login.html"
    form_class = PortalAuthenticationForm
    redirect_authenticated_user = True

    def get_success_url(self):
        return self.get_redirect_url() or reverse_lazy("reports:dashboard")


class PortalLogoutView(LoginRequiredMixin, LogoutView):
    # Explicitly allow GET requests; Django 5 restricts logout to POST by default.
    http_method_names = ["get", "head", "options", "post"]
    next_page = reverse_lazy("portal:login")

    def get(self, request, *args, **kwargs):
        """Allow GET requests to trigger the logout flow."""
        return self.post(request, *args, **kwargs)


@method_decorator(csrf_exempt, name="dispatch")
class CredentialCheckView(View):
    """Pre-check credentials and answer with a structured lockout outcome."""

    http_method_names = ["post"]

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        payload, error = load_json_body(request)
        if error:
            return error

        username = payload.get("username")
        password = payload.get("password")
        if not username or not password or not isinstance(username, str) or not isinstance(password, str):
            return json_error(
                "El usuario y la clave son obligatorios.",
                code=LoginOutcome.INVALID_CREDENTIALS,
            )

        try:
            result = check_credentials(username, password, request=request)
        except DatabaseError:
            logger.exception("Error verificando credenciales de %s", username)
            return json_error("Error interno del servidor.", status=500, code=LoginOutcome.SERVER_ERROR)
        return JsonResponse(result.as_payload(), status=result.status)


class UserUnlockView(ApiAdminRequiredMixin, View):
    http_method_names = ["post"]

    def post(self, request: HttpRequest, user_id: int, *args: Any, **kwargs: Any) -> JsonResponse:
        user = get_object_or_404(UserProfile, pk=user_id)
        try:
            user = unlock_user(user, actor=request.user, request=request)
        except AccountNotLockedError as exc:
            return json_error(str(exc), status=409, code="USER_NOT_LOCKED")
        return JsonResponse(
            {
                "success": True,
                "message": "La cuenta fue desbloqueada.",
                "user": user_lock_payload(user),
            }
        )


class UserLockView(ApiAdminRequiredMixin, View):
    http_method_names = ["get", "post"]

    def get(self, request: HttpRequest, user_id: int, *args: Any, **kwargs: Any) -> JsonResponse:
        user = get_object_or_404(UserProfile, pk=user_id)
        return JsonResponse({"user": user_lock_payload(user)})

    def post(self, request: HttpRequest, user_id: int, *args: Any, **kwargs: Any) -> JsonResponse:
        user = get_object_or_404(UserProfile, pk=user_id)
        payload, error = load_json_body(request)
        if error:
            return error
        form = UserLockForm({"reason": payload.get("reason"), "locked_until": payload.get("lockedUntil")})
        if not form.is_valid():
            return json_error("Datos inválidos para el bloqueo.", errors=form_errors(form))

        user = lock_user(
            user,
            actor=request.user,
            reason=form.cleaned_data["reason"],
            until=form.cleaned_data["locked_until"],
            request=request,
        )
        return JsonResponse(
            {
                "success": True,
                "message": "La cuenta fue bloqueada.",
                "user": user_lock_payload(user),
            }
        )
