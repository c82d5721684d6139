from django.urls import path

from .views import RESOURCES, PenTransferView, RecordCollectionView, RecordDetailView, WeaningView

app_name = "production-api"

urlpatterns = [
    path("weanings/", WeaningView.as_view(), name="weanings"),
    path("pen-transfers/", PenTransferView.as_view(), name="pen-transfers"),
]

for resource_name in RESOURCES:
    urlpatterns += [
        path(
            f"{resource_name}/",
            RecordCollectionView.as_view(resource_name=resource_name),
            name=f"{resource_name}-collection",
        ),
        path(
            f"{resource_name}/<int:pk>/",
            RecordDetailView.as_view(resource_name=resource_name),
            name=f"{resource_name}-detail",
        ),
    ]
