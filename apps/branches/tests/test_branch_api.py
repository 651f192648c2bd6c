"""Tests for branch management."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.branches.models import Branch
from apps.users.models import User
from apps.vehicles.models import Vehicle


class BranchAPITests(APITestCase):
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
        self.branch = Branch.objects.create(name="Downtown", location="1 Main Street")

    def test_customer_can_list_but_not_create(self) -> None:
        self.client.force_authenticate(self.customer)
        response = self.client.get(reverse("branch-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)

        response = self.client.post(
            reverse("branch-list"), {"name": "Airport", "location": "Terminal 2"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_is_rejected(self) -> None:
        response = self.client.get(reverse("branch-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_creates_branch_with_default_hours(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("branch-list"),
            {"name": "Airport", "location": "Terminal 2", "phone": "+1 555 0100 22"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["opening_hours"], "9:00 AM - 6:00 PM")
        self.assertEqual(response.data["vehicle_count"], 0)

    def test_duplicate_name_is_case_insensitive(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("branch-list"), {"name": "downtown", "location": "2 Other Street"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", response.data["errors"])

    def test_short_location_rejected(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("branch-list"), {"name": "Harbour", "location": "abc"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("location", response.data["errors"])

    def test_retrieve_carries_vehicle_count(self) -> None:
        Vehicle.objects.create(
            make="Toyota",
            model="Corolla",
            year=2022,
            license_plate="ABC-001",
            daily_rate=Decimal("45.00"),
            branch=self.branch,
        )
        self.client.force_authenticate(self.customer)
        response = self.client.get(reverse("branch-detail", args=[self.branch.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["vehicle_count"], 1)

    def test_delete_refused_while_vehicles_exist(self) -> None:
        Vehicle.objects.create(
            make="Toyota",
            model="Corolla",
            year=2022,
            license_plate="ABC-001",
            daily_rate=Decimal("45.00"),
            branch=self.branch,
        )
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("branch-detail", args=[self.branch.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertTrue(Branch.objects.filter(pk=self.branch.pk).exists())

    def test_delete_empty_branch(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("branch-detail", args=[self.branch.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Branch.objects.exists())
