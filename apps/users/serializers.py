"""Serializers for customer profiles."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class CustomerSerializer(serializers.ModelSerializer):
    """Public view of a customer account."""

    customer_id = serializers.ReadOnlyField(source="id")

    class Meta:
        model = User
        fields = [
            "customer_id",
            "name",
            "email",
            "phone",
            "address",
            "date_of_birth",
            "driver_license",
            "role",
            "created_at",
        ]
        read_only_fields = fields
