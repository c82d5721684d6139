from __future__ import annotations

import django.utils.timezone
from django.db import migrations, models

import users.managers


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                ("username", models.CharField(max_length=150, unique=True, verbose_name="Usuario")),
                (
                    "email",
                    models.EmailField(blank=True, max_length=254, null=True, unique=True, verbose_name="Correo electrónico"),
                ),
                ("name", models.CharField(blank=True, max_length=150, verbose_name="Nombre")),
                (
                    "role",
                    models.CharField(
                        choices=[("ADMIN", "Administrador"), ("USER", "Usuario")],
                        default="USER",
                        max_length=16,
                        verbose_name="Rol",
                    ),
                ),
                ("failed_login_attempts", models.PositiveIntegerField(default=0, verbose_name="Intentos fallidos")),
                ("locked_at", models.DateTimeField(blank=True, null=True, verbose_name="Bloqueada en")),
                (
                    "locked_until",
                    models.DateTimeField(
                        blank=True,
                        help_text="Si se define, el bloqueo vence automáticamente después de esta fecha.",
                        null=True,
                        verbose_name="Bloqueada hasta",
                    ),
                ),
                (
                    "locked_reason",
                    models.CharField(blank=True, max_length=255, null=True, verbose_name="Motivo del bloqueo"),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("is_staff", models.BooleanField(default=False)),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text=(
                            "The groups this user belongs to. A user will get all permissions granted to each of "
                            "their groups."
                        ),
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "Usuario",
                "verbose_name_plural": "Usuarios",
                "ordering": ["username"],
            },
            managers=[
                ("objects", users.managers.UserProfileManager()),
            ],
        ),
    ]
