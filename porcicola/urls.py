"""URL configuration for the porcicola project."""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

admin.site.site_header = "Administración de la granja porcícola"
admin.site.site_title = "Administración de la granja porcícola"
admin.site.index_title = "Panel de administración"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', RedirectView.as_view(pattern_name='reports:dashboard', permanent=False)),
    path('portal/', include('users.portal_urls', namespace='portal')),
    path('reportes/', include('reports.urls', namespace='reports')),
    path('api/', include('users.api_urls', namespace='users-api')),
    path('api/', include('configuration.urls', namespace='configuration-api')),
    path('api/notifications/', include('notifications.urls', namespace='notifications-api')),
    path('api/activity-logs/', include('activity_logs.urls', namespace='activity-logs-api')),
    path('api/production/', include('production.urls', namespace='production-api')),
    path('api/reports/', include('reports.api_urls', namespace='reports-api')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
