"""Domain services for reservation workflows."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.exceptions import Conflict, NotFound
from shared.domain.value_objects import DateRange

from .models import Reservation

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.vehicles.models import Vehicle


# Reservations in these statuses hold their vehicle for their whole period.
BLOCKING_STATUSES: tuple[str, ...] = (
    Reservation.Status.PENDING,
    Reservation.Status.CONFIRMED,
    Reservation.Status.ACTIVE,
)

CANCELLABLE_STATUSES: tuple[str, ...] = (
    Reservation.Status.PENDING,
    Reservation.Status.CONFIRMED,
)


def rental_days(start_date: date, end_date: date) -> int:
    """Whole rental days in [start_date, end_date); partial days count as one."""

    return DateRange(start_date, end_date).days


def calculate_total_cost(start_date: date, end_date: date, daily_rate: Decimal) -> Decimal:
    """Expected price of renting at ``daily_rate`` for the given period.

    Raises ValueError when ``end_date`` is not after ``start_date``; callers
    reject such periods before pricing them.
    """

    return Decimal(rental_days(start_date, end_date)) * Decimal(daily_rate)


def costs_match(claimed: Decimal, expected: Decimal) -> bool:
    tolerance = Decimal(settings.RESERVATION_COST_TOLERANCE)
    return abs(Decimal(claimed) - Decimal(expected)) <= tolerance


def validate_rental_period(start_date: date, end_date: date, *, today: date) -> dict[str, list[str]]:
    """Field errors for a requested period, empty when the period is acceptable."""

    errors: dict[str, list[str]] = {}
    if start_date < today:
        errors.setdefault("start_date", []).append("Start date cannot be in the past.")
    if end_date <= start_date:
        errors.setdefault("end_date", []).append("End date must be after start date.")
    return errors


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def lock_vehicle(vehicle_id: int) -> "Vehicle":
    """Load a vehicle, holding its row lock until the transaction ends.

    Bookings for one vehicle queue up behind this lock, which makes the
    conflict check and the insert that follows it a single serial step.
    """

    from apps.vehicles.models import Vehicle

    vehicle = _lock_queryset_if_possible(Vehicle.objects.filter(pk=vehicle_id)).first()
    if vehicle is None:
        raise NotFound("Vehicle not found.")
    return vehicle


def find_conflicts(vehicle, start_date: date, end_date: date, *, exclude_reservation_id=None):
    """Blocking reservations of ``vehicle`` overlapping [start_date, end_date)."""

    overlapping_filter = Q(start_date__lt=end_date) & Q(end_date__gt=start_date)

    qs = Reservation.objects.filter(
        vehicle=vehicle,
        status__in=BLOCKING_STATUSES,
    ).filter(overlapping_filter)

    if exclude_reservation_id is not None:
        qs = qs.exclude(pk=exclude_reservation_id)

    return _lock_queryset_if_possible(qs)


def ensure_vehicle_is_free(vehicle, start_date: date, end_date: date, *, exclude_reservation_id=None) -> None:
    """Raise Conflict if the vehicle is already held for any part of the period."""

    if find_conflicts(
        vehicle,
        start_date,
        end_date,
        exclude_reservation_id=exclude_reservation_id,
    ).exists():
        raise Conflict()


def scoped_reservations(customer_id: int, *, is_admin: bool):
    """Reservations visible to the caller: all for admins, own otherwise."""

    qs = Reservation.objects.all()
    if not is_admin:
        qs = qs.filter(customer_id=customer_id)
    return qs
