"""Branch API views."""

from __future__ import annotations

import logging

from django.db.models import Count  # type: ignore
from rest_framework import viewsets  # type: ignore

from apps.users.permissions import IsAdminRoleOrReadOnly
from shared.domain.exceptions import InvalidInput

from .models import Branch
from .serializers import BranchSerializer

logger = logging.getLogger(__name__)


class BranchViewSet(viewsets.ModelViewSet):
    """Branches are readable by every signed-in customer, managed by admins."""

    serializer_class = BranchSerializer
    permission_classes = [IsAdminRoleOrReadOnly]

    def get_queryset(self):  # type: ignore
        return Branch.objects.annotate(vehicle_count=Count("vehicles")).order_by("name")

    def perform_create(self, serializer):  # type: ignore
        branch = serializer.save()
        logger.info(f"Branch {branch.id} created by {self.request.user.email}")

    def perform_update(self, serializer):  # type: ignore
        branch = serializer.save()
        logger.info(f"Branch {branch.id} updated by {self.request.user.email}")

    def perform_destroy(self, instance: Branch):  # type: ignore
        if instance.vehicles.exists():
            raise InvalidInput("Cannot delete branch with existing vehicles.")
        logger.info(f"Branch {instance.id} deleted by {self.request.user.email}")
        instance.delete()
