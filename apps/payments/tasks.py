"""Celery tasks for payments."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore

from .models import Payment

logger = logging.getLogger(__name__)


@shared_task
def send_payment_receipt(payment_id: int) -> None:
    try:
        payment = Payment.objects.select_related("reservation__customer", "reservation__vehicle").get(pk=payment_id)
    except Payment.DoesNotExist:
        logger.warning(f"Payment {payment_id} vanished before receipt email")
        return

    reservation = payment.reservation
    vehicle = reservation.vehicle
    message = "\n".join(
        [
            f"Hello {reservation.customer.name},",
            "",
            f"We received {payment.amount} by {payment.get_payment_method_display().lower()} "
            f"for reservation #{reservation.id}.",
            f"Vehicle: {vehicle.year} {vehicle.make} {vehicle.model}",
            f"Period: {reservation.start_date:%Y-%m-%d} to {reservation.end_date:%Y-%m-%d}",
            f"Transaction reference: {payment.txn_ref}",
            f"Status: {payment.get_status_display()}",
        ]
    )
    send_mail(
        subject=f"Payment receipt {payment.txn_ref}",
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[reservation.customer.email],
    )
    logger.info(f"Receipt sent for payment {payment.txn_ref}")
