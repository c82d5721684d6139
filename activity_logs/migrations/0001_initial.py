from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ActivityLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "user_identifier",
                    models.CharField(
                        help_text="ID del usuario o 'unknown' cuando el actor no pudo identificarse.",
                        max_length=64,
                        verbose_name="Identificador del actor",
                    ),
                ),
                ("user_email", models.CharField(blank=True, max_length=254, verbose_name="Correo del actor")),
                ("user_name", models.CharField(blank=True, max_length=150, null=True, verbose_name="Nombre del actor")),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("CREATE", "Creó"),
                            ("UPDATE", "Actualizó"),
                            ("DELETE", "Eliminó"),
                            ("VIEW", "Consultó"),
                            ("EXPORT", "Exportó"),
                            ("LOGIN", "Inició sesión"),
                            ("LOGOUT", "Cerró sesión"),
                            ("LOGIN_FAILED", "Ingreso fallido"),
                            ("LOGIN_BLOCKED", "Ingreso bloqueado"),
                            ("ACCOUNT_LOCKED", "Cuenta bloqueada"),
                            ("USER_LOCKED", "Usuario bloqueado por administrador"),
                            ("USER_UNLOCKED", "Usuario desbloqueado"),
                        ],
                        max_length=32,
                        verbose_name="Acción",
                    ),
                ),
                ("module", models.CharField(max_length=32, verbose_name="Módulo")),
                ("entity_id", models.CharField(blank=True, max_length=64, null=True, verbose_name="ID de la entidad")),
                ("entity_name", models.CharField(blank=True, max_length=255, null=True, verbose_name="Entidad")),
                ("details", models.JSONField(blank=True, null=True, verbose_name="Detalles")),
                ("ip_address", models.CharField(blank=True, max_length=64, null=True, verbose_name="Dirección IP")),
                ("user_agent", models.TextField(blank=True, null=True, verbose_name="Agente de usuario")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Registrado en")),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activity_logs",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Usuario",
                    ),
                ),
            ],
            options={
                "verbose_name": "Registro de actividad",
                "verbose_name_plural": "Historial de actividad",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["action"], name="activity_action_idx"),
                    models.Index(fields=["module"], name="activity_module_idx"),
                    models.Index(fields=["user_identifier"], name="activity_actor_idx"),
                ],
            },
        ),
    ]
