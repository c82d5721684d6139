from django.urls import path

from .views import SystemConfigView

app_name = "configuration-api"

urlpatterns = [
    path("system-config/", SystemConfigView.as_view(), name="system-config"),
]
