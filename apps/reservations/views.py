"""Reservation API views."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminRole, is_admin_user

from .application.command_handlers import (
    CancelReservationCommand,
    CancelReservationHandler,
    CreateReservationCommand,
    CreateReservationHandler,
    UpdateReservationStatusCommand,
    UpdateReservationStatusHandler,
)
from .serializers import (
    ReservationCreateSerializer,
    ReservationSerializer,
    ReservationStatusSerializer,
)
from .services import scoped_reservations


class ReservationViewSet(viewsets.ModelViewSet):
    """Bookings: customers see their own, admins see and re-status all."""

    serializer_class = ReservationSerializer
    http_method_names = ["get", "post", "put", "head", "options"]
    lookup_value_regex = r"\d+"
    filterset_fields = ["status", "vehicle"]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        return (
            scoped_reservations(user.id, is_admin=is_admin_user(user))
            .select_related("customer", "vehicle__branch", "payment")
            .order_by("-created_at")
        )

    def get_permissions(self):  # type: ignore
        if self.action == "update":
            return [IsAdminRole()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        reservation = CreateReservationHandler().handle(
            CreateReservationCommand(
                customer_id=request.user.id,
                vehicle_id=data["vehicle_id"],
                start_date=data["start_date"],
                end_date=data["end_date"],
                total_cost=data["total_cost"],
                pickup_location=data["pickup_location"],
                dropoff_location=data["dropoff_location"],
                special_requests=data["special_requests"],
            )
        )
        return Response(
            ReservationSerializer(self._reload(reservation.pk)).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):  # type: ignore
        serializer = ReservationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reservation = UpdateReservationStatusHandler().handle(
            UpdateReservationStatusCommand(
                reservation_id=int(kwargs["pk"]),
                status=serializer.validated_data["status"],
                changed_by=request.user.id,
            )
        )
        return Response(ReservationSerializer(self._reload(reservation.pk)).data)

    @action(detail=False, methods=["get"])
    def my(self, request):  # type: ignore
        qs = self.filter_queryset(self.get_queryset().filter(customer=request.user))
        return Response(ReservationSerializer(qs, many=True).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        reservation = CancelReservationHandler().handle(
            CancelReservationCommand(
                reservation_id=int(pk),
                customer_id=request.user.id,
                is_admin=is_admin_user(request.user),
            )
        )
        return Response(ReservationSerializer(self._reload(reservation.pk)).data)

    def _reload(self, pk: int):
        return self.get_queryset().get(pk=pk)
