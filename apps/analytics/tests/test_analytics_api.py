"""Tests for dashboard aggregations."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.branches.models import Branch
from apps.payments.models import Payment
from apps.reservations.models import Reservation
from apps.users.models import User
from apps.vehicles.models import Vehicle


class AnalyticsAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            name="Fleet Admin",
            password="secret123",
            role=User.Role.ADMIN,
        )
        self.customer = User.objects.create_user(
            email="renter@example.com",
            name="Renter",
            password="secret123",
        )
        self.downtown = Branch.objects.create(name="Downtown", location="1 Main Street")
        self.airport = Branch.objects.create(name="Airport", location="Terminal 2")
        self.corolla = Vehicle.objects.create(
            make="Toyota",
            model="Corolla",
            year=2022,
            license_plate="AN-001",
            daily_rate=Decimal("45.00"),
            branch=self.downtown,
        )
        self.civic = Vehicle.objects.create(
            make="Honda",
            model="Civic",
            year=2023,
            license_plate="AN-002",
            daily_rate=Decimal("50.00"),
            branch=self.airport,
            status=Vehicle.Status.MAINTENANCE,
        )
        today = timezone.localdate()
        self.completed = Reservation.objects.create(
            customer=self.customer,
            vehicle=self.corolla,
            start_date=today - timedelta(days=10),
            end_date=today - timedelta(days=5),
            total_cost=Decimal("225.00"),
            status=Reservation.Status.COMPLETED,
        )
        self.upcoming = Reservation.objects.create(
            customer=self.customer,
            vehicle=self.corolla,
            start_date=today + timedelta(days=3),
            end_date=today + timedelta(days=5),
            total_cost=Decimal("90.00"),
            status=Reservation.Status.CONFIRMED,
        )
        Payment.objects.create(
            reservation=self.completed,
            amount=Decimal("225.00"),
            payment_method=Payment.Method.CARD,
            status=Payment.Status.COMPLETED,
            txn_ref="TXN-A",
        )
        Payment.objects.create(
            reservation=self.upcoming,
            amount=Decimal("90.00"),
            payment_method=Payment.Method.CASH,
            status=Payment.Status.PENDING,
            txn_ref="TXN-B",
        )

    def test_admin_endpoints_require_admin(self) -> None:
        self.client.force_authenticate(self.customer)
        for name in (
            "analytics:admin-stats",
            "analytics:admin-revenue",
            "analytics:vehicle-performance",
            "analytics:branch-performance",
            "analytics:sales-by-branch",
            "analytics:reservations-trend",
            "analytics:fleet-stats",
        ):
            response = self.client.get(reverse(name))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, name)

    def test_admin_stats_counts_only_completed_revenue(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("analytics:admin-stats"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        totals = response.data["totals"]
        self.assertEqual(totals["reservations"], 2)
        self.assertEqual(totals["customers"], 2)
        self.assertEqual(totals["vehicles"], 2)
        self.assertEqual(totals["branches"], 2)
        self.assertEqual(totals["revenue"], Decimal("225.00"))
        self.assertEqual(totals["active_reservations"], 1)
        self.assertEqual(response.data["top_vehicles"][0]["rental_count"], 2)
        # Only vehicles currently available appear in utilisation
        self.assertEqual([v["vehicle_id"] for v in response.data["vehicle_utilization"]], [self.corolla.id])

    def test_customer_stats(self) -> None:
        self.client.force_authenticate(self.customer)
        response = self.client.get(reverse("analytics:user-stats"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        totals = response.data["totals"]
        self.assertEqual(totals["reservations"], 2)
        self.assertEqual(totals["upcoming_reservations"], 1)
        self.assertEqual(totals["completed_reservations"], 1)
        self.assertEqual(totals["total_spent"], Decimal("225.00"))
        self.assertEqual(len(response.data["recent_reservations"]), 2)

    def test_revenue_unknown_period_falls_back_to_month(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("analytics:admin-revenue"), {"period": "decade"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["period"], "month")
        self.assertEqual(sum(row["transaction_count"] for row in response.data["data"]), 1)

    def test_branch_and_sales_breakdown(self) -> None:
        self.client.force_authenticate(self.admin)
        branches = self.client.get(reverse("analytics:branch-performance")).data
        self.assertEqual(branches[0]["name"], "Downtown")
        self.assertEqual(branches[0]["total_vehicles"], 1)
        self.assertEqual(branches[0]["total_reservations"], 2)
        self.assertEqual(branches[0]["total_revenue"], Decimal("225.00"))

        sales = self.client.get(reverse("analytics:sales-by-branch")).data
        self.assertEqual(sales[0], {"branch_name": "Downtown", "reservation_count": 2, "total_sales": Decimal("225.00")})
        self.assertEqual(sales[1]["total_sales"], Decimal("0.00"))

    def test_vehicle_performance_and_fleet(self) -> None:
        self.client.force_authenticate(self.admin)
        vehicles = self.client.get(reverse("analytics:vehicle-performance")).data
        self.assertEqual(vehicles[0]["vehicle_id"], self.corolla.id)
        self.assertEqual(vehicles[0]["total_bookings"], 2)
        self.assertEqual(vehicles[0]["utilization_rate"], Decimal("200.00"))

        fleet = self.client.get(reverse("analytics:fleet-stats")).data
        self.assertEqual(fleet, {"available": 1, "rented": 0, "maintenance": 1, "total_vehicles": 2})

    def test_reservations_trend(self) -> None:
        self.client.force_authenticate(self.admin)
        trend = self.client.get(reverse("analytics:reservations-trend")).data
        self.assertEqual(sum(row["reservations"] for row in trend), 2)
