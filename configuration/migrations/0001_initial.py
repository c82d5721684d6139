from __future__ import annotations

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SystemConfig",
            fields=[
                (
                    "id",
                    models.CharField(
                        default="system_config",
                        editable=False,
                        max_length=32,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "activity_log_retention_days",
                    models.PositiveIntegerField(
                        default=90,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(365),
                        ],
                        verbose_name="Días de retención del historial",
                    ),
                ),
                (
                    "max_login_attempts",
                    models.PositiveIntegerField(
                        default=5,
                        help_text="La cuenta se bloquea al alcanzar este número de intentos fallidos.",
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(20),
                        ],
                        verbose_name="Intentos de ingreso permitidos",
                    ),
                ),
                (
                    "session_timeout_minutes",
                    models.PositiveIntegerField(default=30, verbose_name="Duración de la sesión (minutos)"),
                ),
                ("auto_backup_enabled", models.BooleanField(default=True, verbose_name="Respaldo automático")),
                (
                    "backup_frequency_days",
                    models.PositiveIntegerField(default=7, verbose_name="Frecuencia de respaldo (días)"),
                ),
                ("maintenance_mode", models.BooleanField(default=False, verbose_name="Modo mantenimiento")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
            ],
            options={
                "verbose_name": "Configuración del sistema",
                "verbose_name_plural": "Configuración del sistema",
            },
        ),
    ]
