"""Serializers for payments."""

from __future__ import annotations

from decimal import Decimal

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    reservation_id = serializers.IntegerField(read_only=True)
    customer_email = serializers.EmailField(source="reservation.customer.email", read_only=True)
    vehicle = serializers.SerializerMethodField()
    start_date = serializers.DateField(source="reservation.start_date", read_only=True)
    end_date = serializers.DateField(source="reservation.end_date", read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "reservation_id",
            "customer_email",
            "vehicle",
            "start_date",
            "end_date",
            "amount",
            "payment_method",
            "payment_date",
            "status",
            "txn_ref",
            "created_at",
        ]
        read_only_fields = fields

    def get_vehicle(self, obj: Payment) -> str:
        vehicle = obj.reservation.vehicle
        return f"{vehicle.make} {vehicle.model}"


class PaymentCreateSerializer(serializers.Serializer):
    reservation_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    payment_method = serializers.ChoiceField(choices=Payment.Method.choices)
    payment_date = serializers.DateTimeField(required=False)
    txn_ref = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(
        choices=Payment.Status.choices,
        required=False,
        default=Payment.Status.COMPLETED,
    )

    def validate_txn_ref(self, value):  # type: ignore
        value = (value or "").strip()
        return value or None

    def validate(self, attrs):  # type: ignore
        attrs.setdefault("payment_date", timezone.now())
        return attrs


class PaymentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Payment.Status.choices)
