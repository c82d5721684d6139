"""Login attempt accounting and account lockout.

The credential pre-check walks a small state machine over the lockout fields
of ``UserProfile`` (ACTIVE, LOCKED, EXPIRED_LOCK) and answers with one of the
outcome codes below. Session issuance happens later in
``users.auth_backends.LockoutAwareModelBackend``, which is also the place that
resets the counters after a successful sign in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.http import HttpRequest
from django.utils import timezone

from activity_logs.models import UNKNOWN_ACTOR, ActivityAction, ActivityModule
from activity_logs.services import log_activity
from configuration.services import get_max_login_attempts
from notifications.models import NotificationType
from notifications.services import notify_admins

from ..models import LockState, UserProfile

logger = logging.getLogger(__name__)

ADMIN_LOCK_REASON = "Bloqueada por administrador"


def normalize_username(username: str) -> str:
    """Canonical form of a typed username, shared by every sign-in path."""
    return (username or "").strip()


class LoginOutcome:
    SUCCESS = "SUCCESS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    ACCOUNT_LOCKED_NOW = "ACCOUNT_LOCKED_NOW"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    SERVER_ERROR = "SERVER_ERROR"


OUTCOME_STATUS = {
    LoginOutcome.SUCCESS: 200,
    LoginOutcome.INVALID_CREDENTIALS: 401,
    LoginOutcome.ACCOUNT_LOCKED: 403,
    LoginOutcome.ACCOUNT_LOCKED_NOW: 403,
    LoginOutcome.INVALID_PASSWORD: 401,
    LoginOutcome.SERVER_ERROR: 500,
}

OUTCOME_MESSAGES = {
    LoginOutcome.SUCCESS: "Credenciales válidas.",
    LoginOutcome.INVALID_CREDENTIALS: "Usuario o clave inválidos.",
    LoginOutcome.ACCOUNT_LOCKED: "Tu cuenta está bloqueada. Contacta al administrador.",
    LoginOutcome.ACCOUNT_LOCKED_NOW: (
        "Tu cuenta fue bloqueada por superar el número de intentos fallidos permitidos."
    ),
    LoginOutcome.INVALID_PASSWORD: "Clave inválida.",
    LoginOutcome.SERVER_ERROR: "Error interno del servidor.",
}


class AccountNotLockedError(Exception):
    def __init__(self, user: UserProfile) -> None:
        super().__init__(f"La cuenta {user.username} no está bloqueada.")
        self.user = user


@dataclass(frozen=True)
class CredentialCheckResult:
    code: str
    failed_attempts: Optional[int] = None
    remaining_attempts: Optional[int] = None
    user: Optional[UserProfile] = None

    @property
    def success(self) -> bool:
        return self.code == LoginOutcome.SUCCESS

    @property
    def status(self) -> int:
        return OUTCOME_STATUS[self.code]

    @property
    def message(self) -> str:
        return OUTCOME_MESSAGES[self.code]

    def as_payload(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "message": self.message}
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.failed_attempts is not None:
            payload["failedAttempts"] = self.failed_attempts
        if self.remaining_attempts is not None:
            payload["remainingAttempts"] = self.remaining_attempts
        return payload


def lock_reason_for(failed_attempts: int) -> str:
    return f"Too many failed login attempts ({failed_attempts})"


def check_credentials(
    username: str,
    password: str,
    *,
    max_login_attempts: Optional[int] = None,
    now: Optional[datetime] = None,
    request: Optional[HttpRequest] = None,
) -> CredentialCheckResult:
    """Validate ``username``/``password`` and update the lockout counters.

    The user row is locked with ``select_for_update`` for the whole
    read-check-write sequence so concurrent failures cannot under-count.
    Database errors propagate to the caller.
    """
    username = normalize_username(username)
    current = now or timezone.now()
    UserModel = get_user_model()

    with transaction.atomic():
        user = UserModel.objects.select_for_update().filter(username=username).first()
        if user is None or not user.has_usable_password():
            log_activity(
                action=ActivityAction.LOGIN_FAILED,
                module=ActivityModule.AUTH,
                user_identifier=UNKNOWN_ACTOR,
                user_name=username,
                details={"reason": "User not found or no password"},
                request=request,
            )
            return CredentialCheckResult(LoginOutcome.INVALID_CREDENTIALS)

        state = user.lock_state(current)
        if state == LockState.LOCKED:
            log_activity(
                action=ActivityAction.LOGIN_BLOCKED,
                module=ActivityModule.AUTH,
                user=user,
                details={"reason": "Account is locked"},
                request=request,
            )
            return CredentialCheckResult(LoginOutcome.ACCOUNT_LOCKED, user=user)

        if state == LockState.EXPIRED_LOCK:
            user.save(update_fields=user.clear_lockout())
            logger.info("Bloqueo vencido de %s restablecido", user.username)

        if user.check_password(password):
            return CredentialCheckResult(LoginOutcome.SUCCESS, user=user)

        limit = max_login_attempts or get_max_login_attempts()
        failed_attempts = user.failed_login_attempts + 1
        user.failed_login_attempts = failed_attempts

        if failed_attempts < limit:
            user.save(update_fields=["failed_login_attempts"])
            remaining = limit - failed_attempts
            log_activity(
                action=ActivityAction.LOGIN_FAILED,
                module=ActivityModule.AUTH,
                user=user,
                details={
                    "reason": "Invalid password",
                    "failedAttempts": failed_attempts,
                    "remainingAttempts": remaining,
                },
                request=request,
            )
            return CredentialCheckResult(
                LoginOutcome.INVALID_PASSWORD,
                failed_attempts=failed_attempts,
                remaining_attempts=remaining,
                user=user,
            )

        user.locked_at = current
        user.locked_until = None
        user.locked_reason = lock_reason_for(failed_attempts)
        user.save(update_fields=["failed_login_attempts", "locked_at", "locked_until", "locked_reason"])
        log_activity(
            action=ActivityAction.ACCOUNT_LOCKED,
            module=ActivityModule.AUTH,
            user=user,
            details={"reason": "Too many failed login attempts", "failedAttempts": failed_attempts},
            request=request,
        )

    logger.warning("Cuenta %s bloqueada tras %s intentos fallidos", user.username, failed_attempts)
    notify_admins(
        title="Cuenta bloqueada",
        message=f"La cuenta {user.get_full_name()} ({user.username}) fue bloqueada tras {failed_attempts} intentos fallidos.",
        type=NotificationType.WARNING,
        category="security",
    )
    return CredentialCheckResult(
        LoginOutcome.ACCOUNT_LOCKED_NOW,
        failed_attempts=failed_attempts,
        remaining_attempts=0,
        user=user,
    )


def reset_login_attempts(user: UserProfile) -> bool:
    """Clear counters after a successful sign in; returns whether anything changed."""
    if not user.needs_lockout_reset():
        return False
    user.save(update_fields=user.clear_lockout())
    return True


def unlock_user(user: UserProfile, *, actor: Any, request: Optional[HttpRequest] = None) -> UserProfile:
    with transaction.atomic():
        locked = type(user).objects.select_for_update().get(pk=user.pk)
        if locked.locked_at is None:
            raise AccountNotLockedError(locked)
        previous_attempts = locked.failed_login_attempts
        locked.save(update_fields=locked.clear_lockout())

    log_activity(
        action=ActivityAction.USER_UNLOCKED,
        module=ActivityModule.USER_MANAGEMENT,
        user=actor,
        entity_id=locked.pk,
        entity_name=locked.username,
        details={
            "unlockedUserId": locked.pk,
            "unlockedUserEmail": locked.email,
            "unlockedUserName": locked.name,
            "previousFailedAttempts": previous_attempts,
        },
        request=request,
    )
    return locked


def lock_user(
    user: UserProfile,
    *,
    actor: Any,
    reason: str = ADMIN_LOCK_REASON,
    until: Optional[datetime] = None,
    max_login_attempts: Optional[int] = None,
    request: Optional[HttpRequest] = None,
) -> UserProfile:
    with transaction.atomic():
        target = type(user).objects.select_for_update().get(pk=user.pk)
        target.locked_at = timezone.now()
        target.locked_until = until
        target.locked_reason = reason or ADMIN_LOCK_REASON
        target.failed_login_attempts = max_login_attempts or get_max_login_attempts()
        target.save(update_fields=["failed_login_attempts", "locked_at", "locked_until", "locked_reason"])

    log_activity(
        action=ActivityAction.USER_LOCKED,
        module=ActivityModule.USER_MANAGEMENT,
        user=actor,
        entity_id=target.pk,
        entity_name=target.username,
        details={
            "lockedUserId": target.pk,
            "reason": target.locked_reason,
            "lockedUntil": until.isoformat() if until else None,
        },
        request=request,
    )
    return target
