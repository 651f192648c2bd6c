"""URL routing for dashboard analytics."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    AdminStatsView,
    BranchPerformanceView,
    CustomerStatsView,
    FleetStatsView,
    ReservationsTrendView,
    RevenueView,
    SalesByBranchView,
    VehiclePerformanceView,
)

app_name = "analytics"

urlpatterns = [
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
    path("admin/revenue/", RevenueView.as_view(), name="admin-revenue"),
    path("admin/vehicle-performance/", VehiclePerformanceView.as_view(), name="vehicle-performance"),
    path("admin/branch-performance/", BranchPerformanceView.as_view(), name="branch-performance"),
    path("user/stats/", CustomerStatsView.as_view(), name="user-stats"),
    path("sales-by-branch/", SalesByBranchView.as_view(), name="sales-by-branch"),
    path("reservations-trend/", ReservationsTrendView.as_view(), name="reservations-trend"),
    path("fleet-stats/", FleetStatsView.as_view(), name="fleet-stats"),
]
