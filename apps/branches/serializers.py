"""Serializers for branches."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Branch


class BranchSerializer(serializers.ModelSerializer):
    vehicle_count = serializers.SerializerMethodField()

    location = serializers.CharField(min_length=5, max_length=200)
    phone = serializers.CharField(min_length=10, max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)

    class Meta:
        model = Branch
        fields = [
            "id",
            "name",
            "location",
            "phone",
            "email",
            "address",
            "manager_name",
            "opening_hours",
            "vehicle_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_vehicle_count(self, obj: Branch) -> int:
        annotated = getattr(obj, "vehicle_count", None)
        if annotated is not None:
            return annotated
        return obj.vehicles.count()

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Branch name must be at least 2 characters.")
        qs = Branch.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Branch name already exists.")
        return value
