from django.urls import path

from .views import FarmDashboardView

app_name = "reports"

urlpatterns = [
    path("", FarmDashboardView.as_view(), name="dashboard"),
]
