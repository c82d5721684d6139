from __future__ import annotations

from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.dispatch import receiver

from activity_logs.models import ActivityAction, ActivityModule
from activity_logs.services import log_activity


@receiver(user_logged_in)
def record_login(sender, request, user, **kwargs) -> None:
    log_activity(
        action=ActivityAction.LOGIN,
        module=ActivityModule.AUTH,
        user=user,
        request=request,
    )


@receiver(user_logged_out)
def record_logout(sender, request, user, **kwargs) -> None:
    if user is None:
        return
    log_activity(
        action=ActivityAction.LOGOUT,
        module=ActivityModule.AUTH,
        user=user,
        request=request,
    )
