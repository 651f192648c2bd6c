"""API tests for booking, cancelling and re-statusing reservations."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.branches.models import Branch
from apps.reservations.models import Reservation
from apps.users.models import User
from apps.vehicles.models import Vehicle


class ReservationAPITests(APITestCase):
    def setUp(self) -> None:
        self.customer = User.objects.create_user(
            email="guest@example.com",
            name="Guest Renter",
            password="secret123",
        )
        self.other = User.objects.create_user(
            email="other@example.com",
            name="Other Renter",
            password="secret123",
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            name="Fleet Admin",
            password="secret123",
            role=User.Role.ADMIN,
        )
        self.branch = Branch.objects.create(name="Downtown", location="1 Main Street")
        self.vehicle = Vehicle.objects.create(
            id=7,
            make="Toyota",
            model="Corolla",
            year=2022,
            license_plate="ABC-007",
            daily_rate=Decimal("45.00"),
            branch=self.branch,
        )
        self.base = timezone.localdate() + timedelta(days=30)
        self.client.force_authenticate(self.customer)

    def _book(self, start_offset: int, end_offset: int, total_cost: str | None = None, vehicle_id: int = 7):
        start = self.base + timedelta(days=start_offset)
        end = self.base + timedelta(days=end_offset)
        if total_cost is None:
            total_cost = str(Decimal("45.00") * (end_offset - start_offset))
        payload = {
            "vehicle_id": vehicle_id,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "total_cost": total_cost,
        }
        return self.client.post(reverse("reservation-list"), payload, format="json")

    def _existing(self, start_offset: int, end_offset: int, status_value=Reservation.Status.CONFIRMED, customer=None):
        return Reservation.objects.create(
            customer=customer or self.other,
            vehicle=self.vehicle,
            start_date=self.base + timedelta(days=start_offset),
            end_date=self.base + timedelta(days=end_offset),
            total_cost=Decimal("45.00") * (end_offset - start_offset),
            status=status_value,
        )

    def test_booking_five_days_at_45_costs_225(self) -> None:
        response = self._book(0, 5, "225.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Reservation.Status.CONFIRMED)
        self.assertEqual(response.data["total_cost"], "225.00")
        self.assertEqual(response.data["rental_days"], 5)
        self.assertEqual(response.data["customer_id"], self.customer.id)

    def test_cost_mismatch_creates_nothing(self) -> None:
        response = self._book(0, 5, "200.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "cost_mismatch")
        self.assertIn("total_cost", response.data["errors"])
        self.assertFalse(Reservation.objects.exists())

    def test_cost_within_tolerance_is_accepted(self) -> None:
        response = self._book(0, 5, "225.01")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_sub_cent_claim_within_tolerance_stores_computed_total(self) -> None:
        response = self._book(0, 5, "225.004")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["total_cost"], "225.00")

    def test_past_start_date_is_invalid(self) -> None:
        start = timezone.localdate() - timedelta(days=1)
        response = self.client.post(
            reverse("reservation-list"),
            {
                "vehicle_id": 7,
                "start_date": start.isoformat(),
                "end_date": (start + timedelta(days=3)).isoformat(),
                "total_cost": "135.00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertIn("start_date", response.data["errors"])

    def test_end_not_after_start_is_invalid(self) -> None:
        response = self._book(3, 3, "0.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertIn("end_date", response.data["errors"])

    def test_today_is_a_valid_start(self) -> None:
        today = timezone.localdate()
        response = self.client.post(
            reverse("reservation-list"),
            {
                "vehicle_id": 7,
                "start_date": today.isoformat(),
                "end_date": (today + timedelta(days=1)).isoformat(),
                "total_cost": "45.00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_overlap_with_confirmed_reservation_conflicts(self) -> None:
        self._existing(2, 7)
        response = self._book(0, 4)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "conflict")
        self.assertEqual(Reservation.objects.count(), 1)

    def test_containment_conflicts_both_ways(self) -> None:
        self._existing(2, 4)
        self.assertEqual(self._book(0, 6).status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(self._book(2, 3).status_code, status.HTTP_409_CONFLICT)

    def test_back_to_back_reservations_do_not_conflict(self) -> None:
        self._existing(2, 7)
        self.assertEqual(self._book(7, 9).status_code, status.HTTP_201_CREATED)
        self.assertEqual(self._book(0, 2).status_code, status.HTTP_201_CREATED)

    def test_pending_and_active_reservations_block(self) -> None:
        self._existing(0, 3, Reservation.Status.PENDING)
        self._existing(5, 8, Reservation.Status.ACTIVE)
        self.assertEqual(self._book(1, 2).status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(self._book(6, 7).status_code, status.HTTP_409_CONFLICT)

    def test_cancelled_and_completed_reservations_do_not_block(self) -> None:
        self._existing(0, 3, Reservation.Status.CANCELLED)
        self._existing(3, 6, Reservation.Status.COMPLETED)
        self.assertEqual(self._book(0, 6).status_code, status.HTTP_201_CREATED)

    def test_unavailable_vehicle_is_rejected(self) -> None:
        self.vehicle.status = Vehicle.Status.MAINTENANCE
        self.vehicle.save(update_fields=["status"])
        response = self._book(0, 2)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "unavailable")

    def test_unknown_vehicle_is_not_found(self) -> None:
        response = self._book(0, 2, vehicle_id=9999)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")

    def test_malformed_payload_is_rejected_before_lookup(self) -> None:
        response = self.client.post(
            reverse("reservation-list"),
            {"vehicle_id": "x", "start_date": "soon", "total_cost": "-1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")
        for field in ("vehicle_id", "start_date", "end_date", "total_cost"):
            self.assertIn(field, response.data["errors"])

    def test_confirmation_email_sent_after_commit(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            response = self._book(0, 5, "225.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["guest@example.com"])
        self.assertIn(f"#{response.data['id']}", mail.outbox[0].subject)

    def test_rejected_booking_sends_no_email(self) -> None:
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            self._book(0, 5, "1.00")
        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])

    def test_customer_lists_only_own_reservations(self) -> None:
        own = self._existing(0, 2, customer=self.customer)
        self._existing(5, 7)
        response = self.client.get(reverse("reservation-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in response.data], [own.id])

        response = self.client.get(reverse("reservation-my"))
        self.assertEqual([r["id"] for r in response.data], [own.id])

    def test_admin_lists_all_reservations(self) -> None:
        self._existing(0, 2, customer=self.customer)
        self._existing(5, 7)
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("reservation-list"))
        self.assertEqual(len(response.data), 2)

    def test_customer_cannot_see_others_reservation(self) -> None:
        foreign = self._existing(0, 2)
        response = self.client.get(reverse("reservation-detail", args=[foreign.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cancel_own_confirmed_reservation(self) -> None:
        own = self._existing(0, 2, customer=self.customer)
        response = self.client.post(reverse("reservation-cancel", args=[own.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        own.refresh_from_db()
        self.assertEqual(own.status, Reservation.Status.CANCELLED)
        # The freed period can be booked again
        self.assertEqual(self._book(0, 2).status_code, status.HTTP_201_CREATED)

    def test_cancellation_email_sent_after_commit(self) -> None:
        own = self._existing(0, 2, customer=self.customer)
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(reverse("reservation-cancel", args=[own.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["guest@example.com"])
        self.assertEqual(mail.outbox[0].subject, f"Reservation #{own.id} cancelled")

    def test_cancel_someone_elses_reservation_is_not_found(self) -> None:
        foreign = self._existing(0, 2)
        response = self.client.post(reverse("reservation-cancel", args=[foreign.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        foreign.refresh_from_db()
        self.assertEqual(foreign.status, Reservation.Status.CONFIRMED)

    def test_active_reservation_cannot_be_cancelled(self) -> None:
        own = self._existing(0, 2, Reservation.Status.ACTIVE, customer=self.customer)
        response = self.client.post(reverse("reservation-cancel", args=[own.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")

    def test_admin_can_cancel_any_reservation(self) -> None:
        foreign = self._existing(0, 2)
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("reservation-cancel", args=[foreign.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_admin_status_update_bypasses_transitions(self) -> None:
        reservation = self._existing(0, 2, Reservation.Status.CANCELLED)
        self.client.force_authenticate(self.admin)
        response = self.client.put(
            reverse("reservation-detail", args=[reservation.id]), {"status": "pending"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "pending")

    def test_admin_status_update_rejects_unknown_status(self) -> None:
        reservation = self._existing(0, 2)
        self.client.force_authenticate(self.admin)
        response = self.client.put(
            reverse("reservation-detail", args=[reservation.id]), {"status": "lost"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")
        self.assertIn("status", response.data["errors"])

    def test_customer_cannot_update_status(self) -> None:
        own = self._existing(0, 2, customer=self.customer)
        response = self.client.put(
            reverse("reservation-detail", args=[own.id]), {"status": "completed"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_is_not_allowed(self) -> None:
        own = self._existing(0, 2, customer=self.customer)
        response = self.client.delete(reverse("reservation-detail", args=[own.id]))
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
