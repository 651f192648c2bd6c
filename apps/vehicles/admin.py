from django.contrib import admin

from .models import Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("license_plate", "make", "model", "year", "branch", "daily_rate", "status")
    list_filter = ("status", "fuel_type", "transmission", "branch")
    search_fields = ("license_plate", "vin", "make", "model")
    list_select_related = ("branch",)
    readonly_fields = ("created_at", "updated_at")
