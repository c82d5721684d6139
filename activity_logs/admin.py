from __future__ import annotations

from django.contrib import admin

from .models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "action", "module", "user_identifier", "user_name", "entity_name", "ip_address")
    list_filter = ("action", "module")
    search_fields = ("user_email", "user_name", "entity_name", "user_identifier")
    date_hierarchy = "created_at"
    readonly_fields = (
        "user",
        "user_identifier",
        "user_email",
        "user_name",
        "action",
        "module",
        "entity_id",
        "entity_name",
        "details",
        "ip_address",
        "user_agent",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
