"""API views for the dashboards.

Every endpoint except ``user/stats/`` is restricted to administrators.
"""

from __future__ import annotations

from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsAdminRole

from . import services


class AdminStatsView(APIView):
    """Platform totals, monthly revenue, utilisation and top vehicles."""

    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(services.admin_stats())


class CustomerStatsView(APIView):
    """The signed-in customer's own booking and spending summary."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        return Response(services.customer_stats(request.user))


class RevenueView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        period, rows = services.revenue_by_period(request.query_params.get("period", "month"))
        return Response({"period": period, "data": rows})


class VehiclePerformanceView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(services.vehicle_performance())


class BranchPerformanceView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(services.branch_performance())


class SalesByBranchView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(services.sales_by_branch())


class ReservationsTrendView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(services.reservations_trend())


class FleetStatsView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(services.fleet_stats())
