from __future__ import annotations

from django.contrib.auth.backends import ModelBackend

from .services import normalize_username, reset_login_attempts


class LockoutAwareModelBackend(ModelBackend):
    """Model backend that refuses locked accounts and clears counters on success."""

    def user_can_authenticate(self, user) -> bool:
        if not super().user_can_authenticate(user):
            return False
        return not user.is_locked()

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is not None:
            username = normalize_username(username)
        user = super().authenticate(request, username=username, password=password, **kwargs)
        if user is not None:
            reset_login_attempts(user)
        return user
