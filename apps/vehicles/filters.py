"""FilterSet for the fleet listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Vehicle


class VehicleFilterSet(django_filters.FilterSet):
    branch_id = django_filters.NumberFilter(field_name="branch_id", lookup_expr="exact")
    make = django_filters.CharFilter(field_name="make", lookup_expr="iexact")
    # "all" disables the status filter
    status = django_filters.CharFilter(method="filter_status")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Vehicle
        fields = ["branch_id", "make", "status"]

    def filter_status(self, queryset, name, value):  # type: ignore
        if not value or value == "all":
            return queryset
        return queryset.filter(status=value)

    def filter_search(self, queryset, name, value):  # type: ignore
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(make__icontains=value) | Q(model__icontains=value) | Q(branch__name__icontains=value)
        )
