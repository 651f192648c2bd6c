"""
Reservation Command Handlers

These are the use cases for the reservation domain.
Each one runs inside a single DjangoUnitOfWork: any error leaves the
database exactly as it was, and events go out only after commit.

Commands:
- CreateReservationCommand: Book a vehicle for a period
- CancelReservationCommand: Customer (or admin) cancellation
- UpdateReservationStatusCommand: Administrative status change
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
import logging

from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import CostMismatch, InvalidInput, NotFound, Unavailable
from apps.reservations.domain.events import (
    ReservationCancelled,
    ReservationCreated,
    ReservationStatusChanged,
)
from apps.reservations.models import Reservation
from apps.reservations.services import (
    CANCELLABLE_STATUSES,
    _lock_queryset_if_possible,
    calculate_total_cost,
    costs_match,
    ensure_vehicle_is_free,
    lock_vehicle,
    scoped_reservations,
    validate_rental_period,
)

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateReservationCommand:
    """
    Command to book a vehicle

    ``customer_id`` always comes from the authenticated request.
    """
    customer_id: int
    vehicle_id: int
    start_date: date
    end_date: date
    total_cost: Decimal
    pickup_location: str = ''
    dropoff_location: str = ''
    special_requests: str = ''


@dataclass
class CancelReservationCommand:
    """Command to cancel a reservation"""
    reservation_id: int
    customer_id: int
    is_admin: bool = False


@dataclass
class UpdateReservationStatusCommand:
    """Command to set a reservation status directly (admin only)"""
    reservation_id: int
    status: str
    changed_by: int


# ===== Command Handlers =====

class CreateReservationHandler:
    """
    Handler for CreateReservation command

    Steps, all inside one transaction:
    1. Reject past start dates and empty periods (InvalidInput)
    2. Load the vehicle with SELECT FOR UPDATE (NotFound, Unavailable)
    3. Check overlapping blocking reservations (Conflict)
    4. Re-price the rental and compare with the claimed cost (CostMismatch)
    5. Insert the reservation as confirmed
    6. Commit and publish ReservationCreated
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today

    def handle(self, command: CreateReservationCommand) -> Reservation:
        logger.info(
            f"Creating reservation for vehicle {command.vehicle_id}, "
            f"customer {command.customer_id}, dates {command.start_date} - {command.end_date}"
        )

        today = self._today or timezone.localdate()
        errors = validate_rental_period(command.start_date, command.end_date, today=today)
        if errors:
            raise InvalidInput("Invalid rental period.", errors=errors)

        with DjangoUnitOfWork() as uow:
            vehicle = lock_vehicle(command.vehicle_id)
            if not vehicle.is_available:
                raise Unavailable()

            ensure_vehicle_is_free(vehicle, command.start_date, command.end_date)

            expected = calculate_total_cost(command.start_date, command.end_date, vehicle.daily_rate)
            if not costs_match(command.total_cost, expected):
                raise CostMismatch(
                    errors={"total_cost": [f"Expected {expected:.2f} for this period."]},
                )

            reservation = Reservation.objects.create(
                customer_id=command.customer_id,
                vehicle=vehicle,
                start_date=command.start_date,
                end_date=command.end_date,
                total_cost=expected,
                status=Reservation.Status.CONFIRMED,
                pickup_location=command.pickup_location,
                dropoff_location=command.dropoff_location,
                special_requests=command.special_requests,
            )

            uow.add_event(ReservationCreated(
                aggregate_id=reservation.id,
                reservation_id=reservation.id,
                customer_id=command.customer_id,
                vehicle_id=vehicle.id,
                start_date=reservation.start_date,
                end_date=reservation.end_date,
                total_cost=reservation.total_cost,
            ))

        logger.info(f"Reservation {reservation.id} confirmed for vehicle {vehicle.id}")
        return reservation


def _load_locked_reservation(reservation_id: int, customer_id: int, *, is_admin: bool) -> Reservation:
    qs = scoped_reservations(customer_id, is_admin=is_admin).filter(pk=reservation_id)
    reservation = _lock_queryset_if_possible(qs).first()
    if reservation is None:
        raise NotFound("Reservation not found.")
    return reservation


class CancelReservationHandler:
    """
    Handler for CancelReservation command

    Customers may cancel only their own reservations; admins any.
    Only pending and confirmed reservations can be cancelled.
    """

    def handle(self, command: CancelReservationCommand) -> Reservation:
        with DjangoUnitOfWork() as uow:
            reservation = _load_locked_reservation(
                command.reservation_id,
                command.customer_id,
                is_admin=command.is_admin,
            )

            if reservation.status not in CANCELLABLE_STATUSES:
                raise InvalidInput(
                    f"Reservation cannot be cancelled while {reservation.status}.",
                    errors={"status": [reservation.status]},
                )

            reservation.status = Reservation.Status.CANCELLED
            reservation.save(update_fields=["status", "updated_at"])

            uow.add_event(ReservationCancelled(
                aggregate_id=reservation.id,
                reservation_id=reservation.id,
                cancelled_by=command.customer_id,
            ))

        logger.info(f"Reservation {reservation.id} cancelled by user {command.customer_id}")
        return reservation


class UpdateReservationStatusHandler:
    """
    Handler for UpdateReservationStatus command

    Administrative override: any known status may be set from any other.
    """

    def handle(self, command: UpdateReservationStatusCommand) -> Reservation:
        if command.status not in Reservation.Status.values:
            raise InvalidInput(
                "Invalid reservation status.",
                errors={"status": [f"Must be one of: {', '.join(Reservation.Status.values)}."]},
            )

        with DjangoUnitOfWork() as uow:
            reservation = _load_locked_reservation(command.reservation_id, command.changed_by, is_admin=True)
            old_status = reservation.status
            reservation.status = command.status
            reservation.save(update_fields=["status", "updated_at"])

            uow.add_event(ReservationStatusChanged(
                aggregate_id=reservation.id,
                reservation_id=reservation.id,
                old_status=old_status,
                new_status=command.status,
                changed_by=command.changed_by,
            ))

        logger.info(
            f"Reservation {reservation.id} status {old_status} -> {command.status} "
            f"by admin {command.changed_by}"
        )
        return reservation
