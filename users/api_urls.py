from django.urls import path

from .views import CredentialCheckView, UserLockView, UserUnlockView

app_name = "users-api"

urlpatterns = [
    path("auth/check-credentials/", CredentialCheckView.as_view(), name="check-credentials"),
    path("users/<int:user_id>/lock/", UserLockView.as_view(), name="lock"),
    path("users/<int:user_id>/unlock/", UserUnlockView.as_view(), name="unlock"),
]
