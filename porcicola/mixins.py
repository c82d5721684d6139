from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.http import JsonResponse
from django.urls import reverse_lazy


class PortalLoginRequiredMixin(LoginRequiredMixin):
    """Mixin that sends anonymous visitors of HTML pages to the portal login."""

    login_url = reverse_lazy("portal:login")


class ApiLoginRequiredMixin(LoginRequiredMixin):
    """Restrict JSON endpoints to authenticated users, answering 401 instead of redirecting."""

    def handle_no_permission(self):
        user = getattr(self.request, "user", None)
        if not user or not user.is_authenticated:
            return JsonResponse(
                {"error": "UNAUTHORIZED", "message": "Debes iniciar sesión."},
                status=401,
            )
        return JsonResponse(
            {"error": "FORBIDDEN", "message": "No tienes permisos para esta acción."},
            status=403,
        )


class ApiAdminRequiredMixin(ApiLoginRequiredMixin, UserPassesTestMixin):
    """Restrict JSON endpoints to farm administrators."""

    def test_func(self):
        user = self.request.user
        return bool(user and user.is_authenticated and getattr(user, "is_admin", False))


class AdminMethodsMixin(ApiLoginRequiredMixin, UserPassesTestMixin):
    """Allow reads to any authenticated user while writes listed in ``admin_methods`` need an admin."""

    admin_methods: tuple[str, ...] = ("post", "put", "patch", "delete")

    def test_func(self):
        user = self.request.user
        if self.request.method.lower() not in self.admin_methods:
            return bool(user and user.is_authenticated)
        return bool(user and user.is_authenticated and getattr(user, "is_admin", False))
