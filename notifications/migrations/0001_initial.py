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
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200, verbose_name="Título")),
                ("message", models.TextField(verbose_name="Mensaje")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("INFO", "Información"),
                            ("SUCCESS", "Éxito"),
                            ("WARNING", "Advertencia"),
                            ("ERROR", "Error"),
                            ("TASK", "Tarea"),
                        ],
                        default="INFO",
                        max_length=16,
                        verbose_name="Tipo",
                    ),
                ),
                ("category", models.CharField(blank=True, max_length=64, null=True, verbose_name="Categoría")),
                ("link", models.CharField(blank=True, max_length=255, null=True, verbose_name="Enlace")),
                ("is_read", models.BooleanField(default=False, verbose_name="Leída")),
                ("read_at", models.DateTimeField(blank=True, null=True, verbose_name="Leída en")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creada en")),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="Vacío para enviar la notificación a todos los usuarios.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Destinatario",
                    ),
                ),
            ],
            options={
                "verbose_name": "Notificación",
                "verbose_name_plural": "Notificaciones",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),
                ],
            },
        ),
    ]
