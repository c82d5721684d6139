from django.contrib import admin
from django.db.models import Count, Q

from .models import (
    Boar,
    Breeding,
    FeedConsumption,
    Farrowing,
    GrowthRecord,
    HealthRecord,
    Pen,
    PenTransfer,
    Piglet,
    Sow,
)


class PigletInline(admin.TabularInline):
    model = Piglet
    extra = 0
    fields = ("tag_number", "gender", "birth_weight", "status", "current_pen")


class GrowthRecordInline(admin.TabularInline):
    model = GrowthRecord
    extra = 0
    fields = ("record_date", "weight", "age_in_days", "adg")
    readonly_fields = ("age_in_days", "adg")
    ordering = ("-record_date",)


@admin.register(Pen)
class PenAdmin(admin.ModelAdmin):
    list_display = ("pen_number", "pen_type", "capacity", "current_count", "occupancy")
    list_filter = ("pen_type",)
    search_fields = ("pen_number",)

    @admin.display(description="Ocupación (%)")
    def occupancy(self, obj):
        if not obj.capacity:
            return "-"
        return f"{obj.current_count * 100 / obj.capacity:.0f}%"


class BreedingAnimalAdmin(admin.ModelAdmin):
    list_display = ("tag_number", "breed", "status", "birth_date", "current_pen")
    list_filter = ("status", "breed")
    search_fields = ("tag_number", "breed")
    autocomplete_fields = ("current_pen",)


@admin.register(Sow)
class SowAdmin(BreedingAnimalAdmin):
    list_display = BreedingAnimalAdmin.list_display + ("farrowings_total",)

    def get_queryset(self, request):
        queryset = super().get_queryset(request)
        return queryset.annotate(farrowings_count=Count("farrowings", distinct=True))

    @admin.display(ordering="farrowings_count", description="Partos")
    def farrowings_total(self, obj):
        return obj.farrowings_count


@admin.register(Boar)
class BoarAdmin(BreedingAnimalAdmin):
    list_display = BreedingAnimalAdmin.list_display + ("confirmed_breedings",)

    def get_queryset(self, request):
        queryset = super().get_queryset(request)
        return queryset.annotate(
            confirmed_count=Count("breedings", filter=Q(breedings__success=True), distinct=True)
        )

    @admin.display(ordering="confirmed_count", description="Servicios exitosos")
    def confirmed_breedings(self, obj):
        return obj.confirmed_count


@admin.register(Breeding)
class BreedingAdmin(admin.ModelAdmin):
    list_display = ("breeding_date", "sow", "boar", "breeding_method", "expected_farrow_date", "success")
    list_filter = ("breeding_method", "success", "breeding_date")
    search_fields = ("sow__tag_number", "boar__tag_number")
    autocomplete_fields = ("sow", "boar")
    ordering = ("-breeding_date",)


@admin.register(Farrowing)
class FarrowingAdmin(admin.ModelAdmin):
    inlines = (PigletInline,)
    list_display = ("farrowing_date", "sow", "total_born", "born_alive", "stillborn", "mummified")
    list_filter = ("farrowing_date",)
    search_fields = ("sow__tag_number",)
    autocomplete_fields = ("sow", "breeding")
    ordering = ("-farrowing_date",)


@admin.register(Piglet)
class PigletAdmin(admin.ModelAdmin):
    inlines = (GrowthRecordInline,)
    list_display = ("__str__", "farrowing", "gender", "status", "current_pen", "weaning_date", "death_date")
    list_filter = ("status", "gender", "current_pen")
    search_fields = ("tag_number", "farrowing__sow__tag_number")
    autocomplete_fields = ("current_pen",)


@admin.register(GrowthRecord)
class GrowthRecordAdmin(admin.ModelAdmin):
    list_display = ("record_date", "piglet", "weight", "age_in_days", "adg")
    list_filter = ("record_date",)
    search_fields = ("piglet__tag_number",)
    readonly_fields = ("created_at",)
    ordering = ("-record_date",)


@admin.register(HealthRecord)
class HealthRecordAdmin(admin.ModelAdmin):
    list_display = ("record_date", "record_type", "subject_display", "disease", "death_cause", "cost")
    list_filter = ("record_type", "record_date")
    search_fields = ("sow__tag_number", "boar__tag_number", "piglet__tag_number", "disease", "death_cause")
    readonly_fields = ("created_at",)
    ordering = ("-record_date",)

    @admin.display(description="Animal")
    def subject_display(self, obj):
        return obj.subject_label


@admin.register(FeedConsumption)
class FeedConsumptionAdmin(admin.ModelAdmin):
    list_display = ("record_date", "pen", "feed_type", "quantity", "cost")
    list_filter = ("feed_type", "pen", "record_date")
    search_fields = ("feed_type", "pen__pen_number")
    ordering = ("-record_date",)


@admin.register(PenTransfer)
class PenTransferAdmin(admin.ModelAdmin):
    list_display = ("transfer_date", "piglet", "from_pen", "to_pen", "reason")
    list_filter = ("transfer_date", "to_pen")
    search_fields = ("piglet__tag_number", "reason")
    ordering = ("-transfer_date",)
