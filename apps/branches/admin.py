from django.contrib import admin

from .models import Branch


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "phone", "manager_name", "created_at")
    search_fields = ("name", "location", "manager_name")
    readonly_fields = ("created_at", "updated_at")
