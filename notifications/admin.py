from __future__ import annotations

from django.contrib import admin, messages

from .models import Notification


@admin.action(description="Marcar como leídas")
def marcar_leidas(modeladmin, request, queryset):
    actualizadas = 0
    for notification in queryset.filter(is_read=False):
        notification.mark_read()
        actualizadas += 1
    messages.success(request, f"{actualizadas} notificaciones marcadas como leídas.")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "type", "category", "destinatario", "is_read", "created_at")
    list_filter = ("type", "is_read", "category")
    search_fields = ("title", "message", "user__username", "user__name")
    autocomplete_fields = ("user",)
    readonly_fields = ("read_at", "created_at")
    actions = (marcar_leidas,)

    @admin.display(description="Destinatario")
    def destinatario(self, obj: Notification) -> str:
        return str(obj.user) if obj.user_id else "Todos"
