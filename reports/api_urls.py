from django.urls import path

from .views import (
    DeathCausesView,
    FarmAnalyticsExportView,
    FarmAnalyticsView,
    LitterSurvivalView,
    MonthlyTrendsView,
    PigletDeathAlertView,
    SowPerformanceView,
)

app_name = "reports-api"

urlpatterns = [
    path("analytics/", FarmAnalyticsView.as_view(), name="analytics"),
    path("analytics/export/", FarmAnalyticsExportView.as_view(), name="analytics-export"),
    path("analytics/monthly/", MonthlyTrendsView.as_view(), name="monthly-trends"),
    path("sow-performance/", SowPerformanceView.as_view(), name="sow-performance"),
    path("litter-survival/", LitterSurvivalView.as_view(), name="litter-survival"),
    path("death-causes/", DeathCausesView.as_view(), name="death-causes"),
    path("alerts/piglet-deaths/", PigletDeathAlertView.as_view(), name="piglet-death-alert"),
]
