from django.urls import path

from .views import NotificationCollectionView, NotificationReadAllView, NotificationReadView

app_name = "notifications-api"

urlpatterns = [
    path("", NotificationCollectionView.as_view(), name="collection"),
    path("read-all/", NotificationReadAllView.as_view(), name="read-all"),
    path("<int:notification_id>/read/", NotificationReadView.as_view(), name="read"),
]
