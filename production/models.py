from datetime import date, timedelta
from typing import Optional

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

GESTATION_DAYS = 114


def expected_farrow_date_for(breeding_date: date) -> date:
    return breeding_date + timedelta(days=GESTATION_DAYS)


class PenType(models.TextChoices):
    FARROWING = "FARROWING", _("Maternidad")
    NURSERY = "NURSERY", _("Precebo")
    GROWING = "GROWING", _("Levante")
    FINISHING = "FINISHING", _("Ceba")
    GESTATION = "GESTATION", _("Gestación")
    BOAR = "BOAR", _("Verracos")


class Pen(models.Model):
    pen_number = models.CharField("Número de corral", max_length=32, unique=True)
    pen_type = models.CharField("Tipo", max_length=16, choices=PenType.choices)
    capacity = models.PositiveIntegerField("Capacidad")
    current_count = models.PositiveIntegerField("Ocupación actual", default=0)
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)
    updated_at = models.DateTimeField("Actualizado en", auto_now=True)

    class Meta:
        verbose_name = "Corral"
        verbose_name_plural = "Corrales"
        ordering = ("pen_number",)

    def __str__(self) -> str:
        return f"Corral {self.pen_number}"


class SowStatus(models.TextChoices):
    ACTIVE = "ACTIVE", _("Activa")
    PREGNANT = "PREGNANT", _("Gestante")
    LACTATING = "LACTATING", _("Lactante")
    WEANED = "WEANED", _("Destetada")
    CULLED = "CULLED", _("Descartada")
    DEAD = "DEAD", _("Muerta")


class BoarStatus(models.TextChoices):
    ACTIVE = "ACTIVE", _("Activo")
    INACTIVE = "INACTIVE", _("Inactivo")
    CULLED = "CULLED", _("Descartado")
    DEAD = "DEAD", _("Muerto")


class PigletStatus(models.TextChoices):
    NURSING = "NURSING", _("Lactante")
    WEANED = "WEANED", _("Destetado")
    GROWING = "GROWING", _("En levante")
    SOLD = "SOLD", _("Vendido")
    DEAD = "DEAD", _("Muerto")


class Gender(models.TextChoices):
    MALE = "MALE", _("Macho")
    FEMALE = "FEMALE", _("Hembra")


DEAD_STATUS = "DEAD"


class AliveQuerySet(models.QuerySet):
    """Population helpers shared by every animal model."""

    def alive(self):
        return self.exclude(status=DEAD_STATUS)


class BreedingAnimal(models.Model):
    tag_number = models.CharField("Chapeta", max_length=32, unique=True)
    breed = models.CharField("Raza", max_length=64)
    birth_date = models.DateField("Fecha de nacimiento")
    purchase_date = models.DateField("Fecha de compra", null=True, blank=True)
    current_pen = models.ForeignKey(
        Pen,
        on_delete=models.SET_NULL,
        related_name="+",
        verbose_name="Corral actual",
        null=True,
        blank=True,
    )
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)
    updated_at = models.DateTimeField("Actualizado en", auto_now=True)

    objects = AliveQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ("tag_number",)

    def __str__(self) -> str:
        return self.tag_number


class Sow(BreedingAnimal):
    status = models.CharField("Estado", max_length=16, choices=SowStatus.choices, default=SowStatus.ACTIVE)

    class Meta(BreedingAnimal.Meta):
        verbose_name = "Cerda"
        verbose_name_plural = "Cerdas"


class Boar(BreedingAnimal):
    status = models.CharField("Estado", max_length=16, choices=BoarStatus.choices, default=BoarStatus.ACTIVE)

    class Meta(BreedingAnimal.Meta):
        verbose_name = "Verraco"
        verbose_name_plural = "Verracos"


class BreedingMethod(models.TextChoices):
    NATURAL = "NATURAL", _("Monta natural")
    AI = "AI", _("Inseminación artificial")


class Breeding(models.Model):
    sow = models.ForeignKey(Sow, on_delete=models.CASCADE, related_name="breedings", verbose_name="Cerda")
    boar = models.ForeignKey(Boar, on_delete=models.PROTECT, related_name="breedings", verbose_name="Verraco")
    breeding_date = models.DateField("Fecha de servicio")
    breeding_method = models.CharField(
        "Método",
        max_length=16,
        choices=BreedingMethod.choices,
        default=BreedingMethod.NATURAL,
    )
    expected_farrow_date = models.DateField(
        "Fecha probable de parto",
        blank=True,
        help_text=f"Si se deja vacía se calcula como la fecha de servicio más {GESTATION_DAYS} días.",
    )
    success = models.BooleanField("Preñez confirmada", null=True, blank=True)
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)
    updated_at = models.DateTimeField("Actualizado en", auto_now=True)

    class Meta:
        verbose_name = "Servicio"
        verbose_name_plural = "Servicios"
        ordering = ("-breeding_date", "-id")
        indexes = [
            models.Index(fields=("breeding_date",), name="breeding_date_idx"),
            models.Index(fields=("expected_farrow_date",), name="breeding_expected_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.sow} × {self.boar} · {self.breeding_date:%Y-%m-%d}"

    def save(self, *args, **kwargs) -> None:
        if self.expected_farrow_date is None and self.breeding_date:
            self.expected_farrow_date = expected_farrow_date_for(self.breeding_date)
        super().save(*args, **kwargs)


class Farrowing(models.Model):
    sow = models.ForeignKey(Sow, on_delete=models.CASCADE, related_name="farrowings", verbose_name="Cerda")
    breeding = models.OneToOneField(
        Breeding,
        on_delete=models.CASCADE,
        related_name="farrowing",
        verbose_name="Servicio",
    )
    farrowing_date = models.DateField("Fecha de parto")
    total_born = models.PositiveIntegerField("Nacidos totales")
    born_alive = models.PositiveIntegerField("Nacidos vivos")
    stillborn = models.PositiveIntegerField("Nacidos muertos", default=0)
    mummified = models.PositiveIntegerField("Momias", default=0)
    average_birth_weight = models.DecimalField(
        "Peso promedio al nacer (kg)",
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)
    updated_at = models.DateTimeField("Actualizado en", auto_now=True)

    class Meta:
        verbose_name = "Parto"
        verbose_name_plural = "Partos"
        ordering = ("-farrowing_date", "-id")
        indexes = [
            models.Index(fields=("farrowing_date",), name="farrowing_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.sow} · {self.farrowing_date:%Y-%m-%d}"

    def clean(self) -> None:
        super().clean()
        if self.total_born is not None and self.born_alive is not None and self.born_alive > self.total_born:
            raise ValidationError({"born_alive": "Los nacidos vivos no pueden superar los nacidos totales."})
        if self.breeding_id and self.sow_id and self.breeding.sow_id != self.sow_id:
            raise ValidationError({"breeding": "El servicio pertenece a otra cerda."})


class Piglet(models.Model):
    tag_number = models.CharField("Chapeta", max_length=32, blank=True)
    farrowing = models.ForeignKey(Farrowing, on_delete=models.CASCADE, related_name="piglets", verbose_name="Parto")
    birth_weight = models.DecimalField(
        "Peso al nacer (kg)",
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    gender = models.CharField("Sexo", max_length=8, choices=Gender.choices, blank=True)
    status = models.CharField("Estado", max_length=16, choices=PigletStatus.choices, default=PigletStatus.NURSING)
    current_pen = models.ForeignKey(
        Pen,
        on_delete=models.SET_NULL,
        related_name="piglets",
        verbose_name="Corral actual",
        null=True,
        blank=True,
    )
    weaning_date = models.DateField("Fecha de destete", null=True, blank=True)
    weaning_weight = models.DecimalField("Peso al destete (kg)", max_digits=6, decimal_places=2, null=True, blank=True)
    death_date = models.DateField("Fecha de muerte", null=True, blank=True)
    death_cause = models.CharField("Causa de muerte", max_length=150, blank=True)
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)
    updated_at = models.DateTimeField("Actualizado en", auto_now=True)

    objects = AliveQuerySet.as_manager()

    class Meta:
        verbose_name = "Lechón"
        verbose_name_plural = "Lechones"
        ordering = ("farrowing__farrowing_date", "id")

    def __str__(self) -> str:
        return self.tag_number or f"Lechón #{self.pk}"


class GrowthRecord(models.Model):
    piglet = models.ForeignKey(Piglet, on_delete=models.CASCADE, related_name="growth_records", verbose_name="Lechón")
    record_date = models.DateField("Fecha de pesaje")
    weight = models.DecimalField("Peso (kg)", max_digits=8, decimal_places=2, validators=[MinValueValidator(0)])
    age_in_days = models.IntegerField("Edad (días)", null=True, blank=True)
    adg = models.DecimalField(
        "Ganancia diaria (kg/día)",
        max_digits=8,
        decimal_places=3,
        null=True,
        blank=True,
    )
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)

    class Meta:
        verbose_name = "Pesaje"
        verbose_name_plural = "Pesajes"
        ordering = ("-record_date", "-id")
        indexes = [
            models.Index(fields=("piglet", "record_date"), name="growth_piglet_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.piglet} · {self.weight} kg · {self.record_date:%Y-%m-%d}"


class HealthRecordType(models.TextChoices):
    VACCINATION = "VACCINATION", _("Vacunación")
    TREATMENT = "TREATMENT", _("Tratamiento")
    DISEASE = "DISEASE", _("Enfermedad")
    MORTALITY = "MORTALITY", _("Mortalidad")


class HealthRecord(models.Model):
    record_type = models.CharField("Tipo", max_length=16, choices=HealthRecordType.choices)
    record_date = models.DateField("Fecha")
    sow = models.ForeignKey(
        Sow, on_delete=models.CASCADE, related_name="health_records", verbose_name="Cerda", null=True, blank=True
    )
    boar = models.ForeignKey(
        Boar, on_delete=models.CASCADE, related_name="health_records", verbose_name="Verraco", null=True, blank=True
    )
    piglet = models.ForeignKey(
        Piglet, on_delete=models.CASCADE, related_name="health_records", verbose_name="Lechón", null=True, blank=True
    )
    vaccine_name = models.CharField("Vacuna", max_length=150, blank=True)
    medicine_name = models.CharField("Medicamento", max_length=150, blank=True)
    dosage = models.CharField("Dosis", max_length=64, blank=True)
    administered_by = models.CharField("Aplicado por", max_length=150, blank=True)
    disease = models.CharField("Enfermedad", max_length=150, blank=True)
    symptoms = models.TextField("Síntomas", blank=True)
    treatment = models.TextField("Tratamiento", blank=True)
    outcome = models.CharField("Resultado", max_length=150, blank=True)
    death_cause = models.CharField("Causa de muerte", max_length=150, blank=True)
    cost = models.DecimalField("Costo", max_digits=12, decimal_places=2, null=True, blank=True)
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)

    class Meta:
        verbose_name = "Registro sanitario"
        verbose_name_plural = "Registros sanitarios"
        ordering = ("-record_date", "-id")
        indexes = [
            models.Index(fields=("record_type", "record_date"), name="health_type_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_record_type_display()} · {self.subject_label} · {self.record_date:%Y-%m-%d}"

    def clean(self) -> None:
        super().clean()
        subjects = [value for value in (self.sow_id, self.boar_id, self.piglet_id) if value]
        if len(subjects) != 1:
            raise ValidationError("El registro debe referirse exactamente a una cerda, un verraco o un lechón.")

    @property
    def subject(self) -> Optional[models.Model]:
        return self.sow or self.boar or self.piglet

    @property
    def subject_type(self) -> str:
        if self.sow_id:
            return "sow"
        if self.boar_id:
            return "boar"
        return "piglet"

    @property
    def subject_label(self) -> str:
        subject = self.subject
        return str(subject) if subject is not None else "-"


class FeedConsumption(models.Model):
    record_date = models.DateField("Fecha")
    pen = models.ForeignKey(Pen, on_delete=models.CASCADE, related_name="feed_consumptions", verbose_name="Corral")
    feed_type = models.CharField("Tipo de alimento", max_length=64)
    quantity = models.DecimalField("Cantidad (kg)", max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    cost = models.DecimalField("Costo", max_digits=12, decimal_places=2, null=True, blank=True)
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)

    class Meta:
        verbose_name = "Consumo de alimento"
        verbose_name_plural = "Consumos de alimento"
        ordering = ("-record_date", "-id")
        indexes = [
            models.Index(fields=("record_date",), name="feed_record_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.pen} · {self.feed_type} · {self.quantity} kg"


class PenTransfer(models.Model):
    piglet = models.ForeignKey(Piglet, on_delete=models.CASCADE, related_name="transfers", verbose_name="Lechón")
    from_pen = models.ForeignKey(
        Pen,
        on_delete=models.SET_NULL,
        related_name="transfers_out",
        verbose_name="Corral de origen",
        null=True,
        blank=True,
    )
    to_pen = models.ForeignKey(Pen, on_delete=models.CASCADE, related_name="transfers_in", verbose_name="Corral destino")
    transfer_date = models.DateField("Fecha de traslado")
    reason = models.CharField("Motivo", max_length=150, blank=True)
    notes = models.TextField("Notas", blank=True)
    created_at = models.DateTimeField("Creado en", auto_now_add=True)

    class Meta:
        verbose_name = "Traslado"
        verbose_name_plural = "Traslados"
        ordering = ("-transfer_date", "-id")

    def __str__(self) -> str:
        return f"{self.piglet} → {self.to_pen} · {self.transfer_date:%Y-%m-%d}"
