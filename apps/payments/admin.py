from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("txn_ref", "reservation", "amount", "payment_method", "status", "payment_date")
    list_filter = ("status", "payment_method")
    search_fields = ("txn_ref", "reservation__customer__email")
    list_select_related = ("reservation",)
    readonly_fields = ("created_at", "updated_at")
