from .lockout import (
    ADMIN_LOCK_REASON,
    AccountNotLockedError,
    CredentialCheckResult,
    LoginOutcome,
    check_credentials,
    lock_reason_for,
    lock_user,
    normalize_username,
    reset_login_attempts,
    unlock_user,
)

__all__ = [
    "ADMIN_LOCK_REASON",
    "AccountNotLockedError",
    "CredentialCheckResult",
    "LoginOutcome",
    "check_credentials",
    "lock_reason_for",
    "lock_user",
    "normalize_username",
    "reset_login_attempts",
    "unlock_user",
]
