from __future__ import annotations

from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _

from .forms import UserChangeForm, UserCreationForm
from .models import LockState, UserProfile
from .services import AccountNotLockedError, lock_user, unlock_user


@admin.action(description="Desbloquear cuentas seleccionadas")
def desbloquear_usuarios(modeladmin, request, queryset):
    desbloqueados = 0
    for usuario in queryset:
        try:
            unlock_user(usuario, actor=request.user, request=request)
        except AccountNotLockedError:
            continue
        desbloqueados += 1
    messages.success(request, f"{desbloqueados} cuentas desbloqueadas.")


@admin.action(description="Bloquear cuentas seleccionadas")
def bloquear_usuarios(modeladmin, request, queryset):
    bloqueados = 0
    for usuario in queryset.exclude(pk=request.user.pk):
        lock_user(usuario, actor=request.user, request=request)
        bloqueados += 1
    messages.success(request, f"{bloqueados} cuentas bloqueadas.")


@admin.action(description="Activar usuarios seleccionados")
def activar_usuarios(modeladmin, request, queryset):
    actualizados = queryset.update(is_active=True)
    messages.success(request, f"{actualizados} usuarios activados.")


@admin.action(description="Desactivar usuarios seleccionados")
def desactivar_usuarios(modeladmin, request, queryset):
    actualizados = queryset.update(is_active=False)
    messages.success(request, f"{actualizados} usuarios desactivados.")


class LockStateFilter(admin.SimpleListFilter):
    title = "Estado de bloqueo"
    parameter_name = "lock_state"

    def lookups(self, request, model_admin):
        return (
            ("locked", "Bloqueadas"),
            ("active", "Sin bloqueo"),
        )

    def queryset(self, request, queryset):
        if self.value() == "locked":
            return queryset.filter(pk__in=UserProfile.objects.locked().values("pk"))
        if self.value() == "active":
            return queryset.exclude(pk__in=UserProfile.objects.locked().values("pk"))
        return queryset


@admin.register(UserProfile)
class UserProfileAdmin(UserAdmin):
    add_form = UserCreationForm
    form = UserChangeForm
    model = UserProfile

    list_display = (
        "username",
        "name",
        "email",
        "role",
        "failed_login_attempts",
        "estado_bloqueo",
        "is_active",
    )
    list_filter = (LockStateFilter, "role", "is_active", "is_staff")
    search_fields = ("username", "name", "email")
    ordering = ("username",)

    fieldsets = (
        (_("Credenciales"), {"fields": ("username", "password")}),
        (_("Informacion personal"), {"fields": ("name", "email")}),
        (
            _("Bloqueo de cuenta"),
            {"fields": ("failed_login_attempts", "locked_at", "locked_until", "locked_reason")},
        ),
        (
            _("Roles y permisos"),
            {"fields": ("role", "groups", "is_active", "is_staff", "is_superuser")},
        ),
        (_("Fechas"), {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "username",
                    "name",
                    "email",
                    "role",
                    "is_active",
                    "is_staff",
                    "password1",
                    "password2",
                ),
            },
        ),
    )

    filter_horizontal = ("groups", "user_permissions")
    readonly_fields = ("last_login", "date_joined", "failed_login_attempts", "locked_at", "locked_until", "locked_reason")

    actions = (desbloquear_usuarios, bloquear_usuarios, activar_usuarios, desactivar_usuarios)

    @admin.display(description="Bloqueo")
    def estado_bloqueo(self, obj: UserProfile) -> str:
        return LockState(obj.lock_state()).label

    def get_fieldsets(self, request, obj=None):
        fieldsets = super().get_fieldsets(request, obj)
        if not request.user.is_superuser:
            # Remove fields that non superusers cannot change.
            sanitized = []
            restricted_fields = {"is_superuser", "groups", "user_permissions"}
            for title, opts in fieldsets:
                fields = opts.get("fields")
                if isinstance(fields, (list, tuple)):
                    filtered = tuple(f for f in fields if f not in restricted_fields)
                else:
                    filtered = fields
                sanitized.append((title, {**opts, "fields": filtered}))
            return tuple(sanitized)
        return fieldsets
