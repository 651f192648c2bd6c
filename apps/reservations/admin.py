from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "vehicle", "start_date", "end_date", "total_cost", "status")
    list_filter = ("status", "vehicle__branch")
    search_fields = ("customer__email", "customer__name", "vehicle__license_plate")
    date_hierarchy = "start_date"
    list_select_related = ("customer", "vehicle")
    readonly_fields = ("created_at", "updated_at")
