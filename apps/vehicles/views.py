"""Fleet API views."""

from __future__ import annotations

import logging

from django.db.models import ProtectedError  # type: ignore
from rest_framework import viewsets  # type: ignore

from apps.reservations.services import BLOCKING_STATUSES
from apps.users.permissions import IsAdminRoleOrReadOnly
from shared.domain.exceptions import InvalidInput

from .filters import VehicleFilterSet
from .models import Vehicle
from .serializers import VehicleSerializer

logger = logging.getLogger(__name__)


class VehicleViewSet(viewsets.ModelViewSet):
    """Fleet listing for customers, fleet management for admins."""

    queryset = Vehicle.objects.select_related("branch").order_by("make", "model", "year")
    serializer_class = VehicleSerializer
    permission_classes = [IsAdminRoleOrReadOnly]
    filterset_class = VehicleFilterSet

    def perform_create(self, serializer):  # type: ignore
        vehicle = serializer.save()
        logger.info(f"Vehicle {vehicle.id} ({vehicle.license_plate}) added by {self.request.user.email}")

    def perform_update(self, serializer):  # type: ignore
        vehicle = serializer.save()
        logger.info(f"Vehicle {vehicle.id} updated by {self.request.user.email}")

    def perform_destroy(self, instance: Vehicle):  # type: ignore
        if instance.reservations.filter(status__in=BLOCKING_STATUSES).exists():
            raise InvalidInput("Cannot delete vehicle with active reservations.")
        try:
            instance.delete()
        except ProtectedError as exc:
            raise InvalidInput(
                "Vehicle has reservation history; set its status to retired instead."
            ) from exc
        logger.info(f"Vehicle {instance.license_plate} deleted by {self.request.user.email}")
