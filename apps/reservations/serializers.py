"""Serializers for reservations."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.vehicles.models import Vehicle

from .models import Reservation


class ReservationVehicleSerializer(serializers.ModelSerializer):
    branch_name = serializers.CharField(source="branch.name", read_only=True)

    class Meta:
        model = Vehicle
        fields = ["id", "make", "model", "year", "license_plate", "daily_rate", "branch_name"]


class ReservationSerializer(serializers.ModelSerializer):
    customer_id = serializers.IntegerField(read_only=True)
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    customer_email = serializers.EmailField(source="customer.email", read_only=True)
    vehicle = ReservationVehicleSerializer(read_only=True)
    rental_days = serializers.IntegerField(read_only=True)
    payment_status = serializers.SerializerMethodField()

    class Meta:
        model = Reservation
        fields = [
            "id",
            "customer_id",
            "customer_name",
            "customer_email",
            "vehicle",
            "start_date",
            "end_date",
            "rental_days",
            "total_cost",
            "status",
            "pickup_location",
            "dropoff_location",
            "special_requests",
            "payment_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_payment_status(self, obj: Reservation) -> str | None:
        payment = getattr(obj, "payment", None)
        return payment.status if payment is not None else None


class ReservationCreateSerializer(serializers.Serializer):
    """Request shape for booking a vehicle; business rules run in the command handler."""

    vehicle_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=Decimal("0"))
    pickup_location = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    dropoff_location = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    special_requests = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")


class ReservationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Reservation.Status.choices)
