"""Serializers for fleet vehicles."""

from __future__ import annotations

from decimal import Decimal

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.branches.models import Branch

from .models import Vehicle


class VehicleBranchSerializer(serializers.ModelSerializer):
    class Meta:
        model = Branch
        fields = ["id", "name", "location", "phone", "address", "opening_hours"]


class VehicleSerializer(serializers.ModelSerializer):
    branch = VehicleBranchSerializer(read_only=True)
    branch_id = serializers.PrimaryKeyRelatedField(
        source="branch",
        queryset=Branch.objects.all(),
        write_only=True,
    )
    daily_rate = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    is_available = serializers.BooleanField(read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            "id",
            "make",
            "model",
            "year",
            "color",
            "license_plate",
            "vin",
            "fuel_type",
            "transmission",
            "seats",
            "daily_rate",
            "status",
            "is_available",
            "branch",
            "branch_id",
            "mileage",
            "last_service_date",
            "insurance_expiry",
            "registration_expiry",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_year(self, value: int) -> int:
        latest = timezone.localdate().year + 1
        if value < 1950 or value > latest:
            raise serializers.ValidationError(f"Year must be between 1950 and {latest}.")
        return value

    def validate_license_plate(self, value: str) -> str:
        return value.strip().upper()

    def validate_vin(self, value: str | None) -> str | None:
        if not value:
            return None
        return value.strip().upper()
