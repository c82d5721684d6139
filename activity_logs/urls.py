from django.urls import path

from .views import ActivityLogCollectionView, ActivityLogStatsView

app_name = "activity-logs-api"

urlpatterns = [
    path("", ActivityLogCollectionView.as_view(), name="collection"),
    path("stats/", ActivityLogStatsView.as_view(), name="stats"),
]
