from __future__ import annotations

from django import forms
from django.contrib.auth.forms import AuthenticationForm, ReadOnlyPasswordHashField

from .models import UserProfile
from .services import LoginOutcome, check_credentials, normalize_username


INPUT_CLASSES = (
    "block w-full rounded border border-slate-300 px-3 py-2 text-slate-900 "
    "focus:border-brand focus:outline-none focus:ring-1 focus:ring-brand"
)


class PortalAuthenticationForm(AuthenticationForm):
    username = forms.CharField(
        label="Usuario",
        widget=forms.TextInput(
            attrs={
                "autofocus": True,
                "autocomplete": "username",
                "class": INPUT_CLASSES,
                "placeholder": "Ingresa tu usuario",
            }
        ),
    )
    password = forms.CharField(
        label="Clave",
        strip=False,
        widget=forms.PasswordInput(
            attrs={
                "autocomplete": "current-password",
                "class": INPUT_CLASSES,
                "placeholder": "Ingresa la clave",
            }
        ),
    )

    error_messages = {
        "invalid_login": "Los datos ingresados no son válidos. Verifica el usuario y la clave.",
        "inactive": "Tu cuenta está inactiva. Contacta al administrador.",
    }

    def clean(self):
        username = self.cleaned_data.get("username")
        if username is not None:
            username = self.cleaned_data["username"] = normalize_username(username)
        password = self.cleaned_data.get("password")
        if username is not None and password:
            result = check_credentials(username, password, request=self.request)
            if not result.success:
                raise forms.ValidationError(self._outcome_message(result), code=result.code.lower())
        return super().clean()

    def _outcome_message(self, result) -> str:
        if result.code == LoginOutcome.INVALID_CREDENTIALS:
            return self.error_messages["invalid_login"]
        if result.code == LoginOutcome.INVALID_PASSWORD:
            return f"Clave inválida. Te quedan {result.remaining_attempts} intentos antes del bloqueo."
        return result.message


class UserCreationForm(forms.ModelForm):
    password1 = forms.CharField(
        label="Clave",
        widget=forms.PasswordInput,
        strip=False,
    )
    password2 = forms.CharField(
        label="Confirmar clave",
        widget=forms.PasswordInput,
        strip=False,
    )

    class Meta:
        model = UserProfile
        fields = ["username", "email", "name", "role", "is_active", "is_staff"]

    def clean_username(self):
        username = self.cleaned_data["username"].strip()
        if UserProfile.objects.filter(username=username).exists():
            raise forms.ValidationError("Este usuario ya se encuentra registrado.")
        return username

    def clean_email(self):
        return self.cleaned_data.get("email") or None

    def clean_password2(self):
        password1 = self.cleaned_data.get("password1")
        password2 = self.cleaned_data.get("password2")
        if password1 and password2 and password1 != password2:
            raise forms.ValidationError("Las claves no coinciden.")
        return password2

    def save(self, commit: bool = True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data["password1"])
        if commit:
            user.save()
            self.save_m2m()
        return user


class UserChangeForm(forms.ModelForm):
    password = ReadOnlyPasswordHashField(
        label="Clave",
        help_text=(
            "Las claves no se almacenan en texto plano. "
            "Puedes restablecer la clave usando el formulario correspondiente."
        ),
    )

    class Meta:
        model = UserProfile
        fields = [
            "username",
            "email",
            "name",
            "role",
            "groups",
            "is_active",
            "is_staff",
            "password",
        ]
        widgets = {
            "groups": forms.CheckboxSelectMultiple,
        }

    def clean_password(self):
        return self.initial.get("password")

    def clean_email(self):
        return self.cleaned_data.get("email") or None

    def clean_username(self):
        username = self.cleaned_data["username"].strip()
        qs = UserProfile.objects.filter(username=username)
        if self.instance.pk:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise forms.ValidationError("Este usuario ya se encuentra registrado.")
        return username


class UserLockForm(forms.Form):
    reason = forms.CharField(max_length=255, required=False)
    locked_until = forms.DateTimeField(required=False)
