from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError, CommandParser

from activity_logs.services import cleanup_old_logs


class Command(BaseCommand):
    help = (
        "Elimina los registros de actividad más antiguos que la retención configurada "
        "o que el número de días indicado."
    )

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--days",
            type=int,
            help="Días de retención. Si se omite se usa el valor de la configuración del sistema.",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        days: int | None = options.get("days")
        if days is not None and days < 1:
            raise CommandError("El número de días debe ser mayor o igual a 1.")
        deleted = cleanup_old_logs(days)
        self.stdout.write(self.style.SUCCESS(f"Registros eliminados: {deleted}"))
