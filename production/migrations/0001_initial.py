from __future__ import annotations

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Pen",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pen_number", models.CharField(max_length=32, unique=True, verbose_name="Número de corral")),
                (
                    "pen_type",
                    models.CharField(
                        choices=[
                            ("FARROWING", "Maternidad"),
                            ("NURSERY", "Precebo"),
                            ("GROWING", "Levante"),
                            ("FINISHING", "Ceba"),
                            ("GESTATION", "Gestación"),
                            ("BOAR", "Verracos"),
                        ],
                        max_length=16,
                        verbose_name="Tipo",
                    ),
                ),
                ("capacity", models.PositiveIntegerField(verbose_name="Capacidad")),
                ("current_count", models.PositiveIntegerField(default=0, verbose_name="Ocupación actual")),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
            ],
            options={
                "verbose_name": "Corral",
                "verbose_name_plural": "Corrales",
                "ordering": ("pen_number",),
            },
        ),
        migrations.CreateModel(
            name="Sow",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tag_number", models.CharField(max_length=32, unique=True, verbose_name="Chapeta")),
                ("breed", models.CharField(max_length=64, verbose_name="Raza")),
                ("birth_date", models.DateField(verbose_name="Fecha de nacimiento")),
                ("purchase_date", models.DateField(blank=True, null=True, verbose_name="Fecha de compra")),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("ACTIVE", "Activa"),
                            ("PREGNANT", "Gestante"),
                            ("LACTATING", "Lactante"),
                            ("WEANED", "Destetada"),
                            ("CULLED", "Descartada"),
                            ("DEAD", "Muerta"),
                        ],
                        default="ACTIVE",
                        max_length=16,
                        verbose_name="Estado",
                    ),
                ),
                (
                    "current_pen",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="production.pen",
                        verbose_name="Corral actual",
                    ),
                ),
            ],
            options={
                "verbose_name": "Cerda",
                "verbose_name_plural": "Cerdas",
                "ordering": ("tag_number",),
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Boar",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tag_number", models.CharField(max_length=32, unique=True, verbose_name="Chapeta")),
                ("breed", models.CharField(max_length=64, verbose_name="Raza")),
                ("birth_date", models.DateField(verbose_name="Fecha de nacimiento")),
                ("purchase_date", models.DateField(blank=True, null=True, verbose_name="Fecha de compra")),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("ACTIVE", "Activo"),
                            ("INACTIVE", "Inactivo"),
                            ("CULLED", "Descartado"),
                            ("DEAD", "Muerto"),
                        ],
                        default="ACTIVE",
                        max_length=16,
                        verbose_name="Estado",
                    ),
                ),
                (
                    "current_pen",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="production.pen",
                        verbose_name="Corral actual",
                    ),
                ),
            ],
            options={
                "verbose_name": "Verraco",
                "verbose_name_plural": "Verracos",
                "ordering": ("tag_number",),
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Breeding",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("breeding_date", models.DateField(verbose_name="Fecha de servicio")),
                (
                    "breeding_method",
                    models.CharField(
                        choices=[("NATURAL", "Monta natural"), ("AI", "Inseminación artificial")],
                        default="NATURAL",
                        max_length=16,
                        verbose_name="Método",
                    ),
                ),
                (
                    "expected_farrow_date",
                    models.DateField(
                        blank=True,
                        help_text="Si se deja vacía se calcula como la fecha de servicio más 114 días.",
                        verbose_name="Fecha probable de parto",
                    ),
                ),
                ("success", models.BooleanField(blank=True, null=True, verbose_name="Preñez confirmada")),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
                (
                    "boar",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="breedings",
                        to="production.boar",
                        verbose_name="Verraco",
                    ),
                ),
                (
                    "sow",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="breedings",
                        to="production.sow",
                        verbose_name="Cerda",
                    ),
                ),
            ],
            options={
                "verbose_name": "Servicio",
                "verbose_name_plural": "Servicios",
                "ordering": ("-breeding_date", "-id"),
                "indexes": [
                    models.Index(fields=["breeding_date"], name="breeding_date_idx"),
                    models.Index(fields=["expected_farrow_date"], name="breeding_expected_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Farrowing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("farrowing_date", models.DateField(verbose_name="Fecha de parto")),
                ("total_born", models.PositiveIntegerField(verbose_name="Nacidos totales")),
                ("born_alive", models.PositiveIntegerField(verbose_name="Nacidos vivos")),
                ("stillborn", models.PositiveIntegerField(default=0, verbose_name="Nacidos muertos")),
                ("mummified", models.PositiveIntegerField(default=0, verbose_name="Momias")),
                (
                    "average_birth_weight",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=6,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Peso promedio al nacer (kg)",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
                (
                    "breeding",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="farrowing",
                        to="production.breeding",
                        verbose_name="Servicio",
                    ),
                ),
                (
                    "sow",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="farrowings",
                        to="production.sow",
                        verbose_name="Cerda",
                    ),
                ),
            ],
            options={
                "verbose_name": "Parto",
                "verbose_name_plural": "Partos",
                "ordering": ("-farrowing_date", "-id"),
                "indexes": [models.Index(fields=["farrowing_date"], name="farrowing_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="Piglet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tag_number", models.CharField(blank=True, max_length=32, verbose_name="Chapeta")),
                (
                    "birth_weight",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=6,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Peso al nacer (kg)",
                    ),
                ),
                (
                    "gender",
                    models.CharField(
                        blank=True,
                        choices=[("MALE", "Macho"), ("FEMALE", "Hembra")],
                        max_length=8,
                        verbose_name="Sexo",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("NURSING", "Lactante"),
                            ("WEANED", "Destetado"),
                            ("GROWING", "En levante"),
                            ("SOLD", "Vendido"),
                            ("DEAD", "Muerto"),
                        ],
                        default="NURSING",
                        max_length=16,
                        verbose_name="Estado",
                    ),
                ),
                ("weaning_date", models.DateField(blank=True, null=True, verbose_name="Fecha de destete")),
                (
                    "weaning_weight",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=6, null=True, verbose_name="Peso al destete (kg)"
                    ),
                ),
                ("death_date", models.DateField(blank=True, null=True, verbose_name="Fecha de muerte")),
                ("death_cause", models.CharField(blank=True, max_length=150, verbose_name="Causa de muerte")),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Actualizado en")),
                (
                    "current_pen",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="piglets",
                        to="production.pen",
                        verbose_name="Corral actual",
                    ),
                ),
                (
                    "farrowing",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="piglets",
                        to="production.farrowing",
                        verbose_name="Parto",
                    ),
                ),
            ],
            options={
                "verbose_name": "Lechón",
                "verbose_name_plural": "Lechones",
                "ordering": ("farrowing__farrowing_date", "id"),
            },
        ),
        migrations.CreateModel(
            name="GrowthRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("record_date", models.DateField(verbose_name="Fecha de pesaje")),
                (
                    "weight",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=8,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Peso (kg)",
                    ),
                ),
                ("age_in_days", models.IntegerField(blank=True, null=True, verbose_name="Edad (días)")),
                (
                    "adg",
                    models.DecimalField(
                        blank=True, decimal_places=3, max_digits=8, null=True, verbose_name="Ganancia diaria (kg/día)"
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                (
                    "piglet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="growth_records",
                        to="production.piglet",
                        verbose_name="Lechón",
                    ),
                ),
            ],
            options={
                "verbose_name": "Pesaje",
                "verbose_name_plural": "Pesajes",
                "ordering": ("-record_date", "-id"),
                "indexes": [models.Index(fields=["piglet", "record_date"], name="growth_piglet_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="HealthRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "record_type",
                    models.CharField(
                        choices=[
                            ("VACCINATION", "Vacunación"),
                            ("TREATMENT", "Tratamiento"),
                            ("DISEASE", "Enfermedad"),
                            ("MORTALITY", "Mortalidad"),
                        ],
                        max_length=16,
                        verbose_name="Tipo",
                    ),
                ),
                ("record_date", models.DateField(verbose_name="Fecha")),
                ("vaccine_name", models.CharField(blank=True, max_length=150, verbose_name="Vacuna")),
                ("medicine_name", models.CharField(blank=True, max_length=150, verbose_name="Medicamento")),
                ("dosage", models.CharField(blank=True, max_length=64, verbose_name="Dosis")),
                ("administered_by", models.CharField(blank=True, max_length=150, verbose_name="Aplicado por")),
                ("disease", models.CharField(blank=True, max_length=150, verbose_name="Enfermedad")),
                ("symptoms", models.TextField(blank=True, verbose_name="Síntomas")),
                ("treatment", models.TextField(blank=True, verbose_name="Tratamiento")),
                ("outcome", models.CharField(blank=True, max_length=150, verbose_name="Resultado")),
                ("death_cause", models.CharField(blank=True, max_length=150, verbose_name="Causa de muerte")),
                (
                    "cost",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Costo"),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                (
                    "boar",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="health_records",
                        to="production.boar",
                        verbose_name="Verraco",
                    ),
                ),
                (
                    "piglet",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="health_records",
                        to="production.piglet",
                        verbose_name="Lechón",
                    ),
                ),
                (
                    "sow",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="health_records",
                        to="production.sow",
                        verbose_name="Cerda",
                    ),
                ),
            ],
            options={
                "verbose_name": "Registro sanitario",
                "verbose_name_plural": "Registros sanitarios",
                "ordering": ("-record_date", "-id"),
                "indexes": [models.Index(fields=["record_type", "record_date"], name="health_type_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="FeedConsumption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("record_date", models.DateField(verbose_name="Fecha")),
                ("feed_type", models.CharField(max_length=64, verbose_name="Tipo de alimento")),
                (
                    "quantity",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Cantidad (kg)",
                    ),
                ),
                (
                    "cost",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Costo"),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                (
                    "pen",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feed_consumptions",
                        to="production.pen",
                        verbose_name="Corral",
                    ),
                ),
            ],
            options={
                "verbose_name": "Consumo de alimento",
                "verbose_name_plural": "Consumos de alimento",
                "ordering": ("-record_date", "-id"),
                "indexes": [models.Index(fields=["record_date"], name="feed_record_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="PenTransfer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("transfer_date", models.DateField(verbose_name="Fecha de traslado")),
                ("reason", models.CharField(blank=True, max_length=150, verbose_name="Motivo")),
                ("notes", models.TextField(blank=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Creado en")),
                (
                    "from_pen",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transfers_out",
                        to="production.pen",
                        verbose_name="Corral de origen",
                    ),
                ),
                (
                    "piglet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transfers",
                        to="production.piglet",
                        verbose_name="Lechón",
                    ),
                ),
                (
                    "to_pen",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transfers_in",
                        to="production.pen",
                        verbose_name="Corral destino",
                    ),
                ),
            ],
            options={
                "verbose_name": "Traslado",
                "verbose_name_plural": "Traslados",
                "ordering": ("-transfer_date", "-id"),
            },
        ),
    ]
