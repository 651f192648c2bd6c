"""Celery tasks for the reservation domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore

from .models import Reservation

logger = logging.getLogger(__name__)


@shared_task
def send_reservation_confirmation(reservation_id: int) -> None:
    """Email the customer a summary of a newly confirmed reservation."""

    try:
        reservation = Reservation.objects.select_related("customer", "vehicle__branch").get(pk=reservation_id)
    except Reservation.DoesNotExist:
        logger.warning(f"Reservation {reservation_id} vanished before confirmation email")
        return

    vehicle = reservation.vehicle
    lines = [
        f"Hello {reservation.customer.name},",
        "",
        f"Your reservation #{reservation.id} is {reservation.get_status_display().lower()}.",
        f"Vehicle: {vehicle.year} {vehicle.make} {vehicle.model} ({vehicle.license_plate})",
        f"Branch: {vehicle.branch.name}, {vehicle.branch.location}",
        f"Period: {reservation.start_date:%Y-%m-%d} to {reservation.end_date:%Y-%m-%d} "
        f"({reservation.rental_days} days)",
        f"Total: {reservation.total_cost}",
    ]
    if reservation.pickup_location:
        lines.append(f"Pickup: {reservation.pickup_location}")

    send_mail(
        subject=f"Reservation #{reservation.id} confirmed",
        message="\n".join(lines),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[reservation.customer.email],
    )
    logger.info(f"Confirmation email sent for reservation {reservation.id}")


@shared_task
def send_reservation_cancellation(reservation_id: int) -> None:
    try:
        reservation = Reservation.objects.select_related("customer", "vehicle").get(pk=reservation_id)
    except Reservation.DoesNotExist:
        logger.warning(f"Reservation {reservation_id} vanished before cancellation email")
        return

    vehicle = reservation.vehicle
    send_mail(
        subject=f"Reservation #{reservation.id} cancelled",
        message="\n".join([
            f"Hello {reservation.customer.name},",
            "",
            f"Your reservation #{reservation.id} for the {vehicle.year} {vehicle.make} {vehicle.model} "
            f"from {reservation.start_date:%Y-%m-%d} to {reservation.end_date:%Y-%m-%d} has been cancelled.",
        ]),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[reservation.customer.email],
    )
    logger.info(f"Cancellation email sent for reservation {reservation.id}")
