"""
Payment Command Handlers

Commands:
- RecordPaymentCommand: Attach the single payment of a reservation
- UpdatePaymentStatusCommand: Administrative status change
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import AlreadyExists, AmountMismatch, InvalidInput, NotFound
from apps.payments.domain.events import PaymentRecorded, PaymentStatusChanged
from apps.payments.models import Payment
from apps.reservations.services import _lock_queryset_if_possible, costs_match, scoped_reservations

logger = logging.getLogger(__name__)


def generate_txn_ref() -> str:
    """Random transaction reference, e.g. ``TXN-3F2A...`` (32 hex chars)."""
    return f"TXN-{uuid4().hex.upper()}"


# ===== Commands =====

@dataclass
class RecordPaymentCommand:
    """
    Command to pay for a reservation

    Customers may only pay for their own reservations; admins for any.
    """
    reservation_id: int
    customer_id: int
    amount: Decimal
    payment_method: str
    payment_date: datetime = field(default_factory=timezone.now)
    txn_ref: Optional[str] = None
    status: str = Payment.Status.COMPLETED
    is_admin: bool = False


@dataclass
class UpdatePaymentStatusCommand:
    """Command to set a payment status directly (admin only)"""
    payment_id: int
    status: str
    changed_by: int


# ===== Command Handlers =====

class RecordPaymentHandler:
    """
    Handler for RecordPayment command

    Steps, all inside one transaction:
    1. Load the reservation with SELECT FOR UPDATE (NotFound)
    2. Refuse a second payment (AlreadyExists)
    3. Compare amount with the reservation total (AmountMismatch)
    4. Generate a transaction reference when none was supplied
    5. Insert; a unique-constraint collision from a concurrent
       payment is reported as AlreadyExists
    """

    def handle(self, command: RecordPaymentCommand) -> Payment:
        logger.info(
            f"Recording {command.payment_method} payment of {command.amount} "
            f"for reservation {command.reservation_id} by user {command.customer_id}"
        )

        with DjangoUnitOfWork() as uow:
            qs = scoped_reservations(command.customer_id, is_admin=command.is_admin)
            reservation = _lock_queryset_if_possible(qs.filter(pk=command.reservation_id)).first()
            if reservation is None:
                raise NotFound("Reservation not found.")

            if Payment.objects.filter(reservation=reservation).exists():
                raise AlreadyExists()

            if not costs_match(command.amount, reservation.total_cost):
                raise AmountMismatch(
                    errors={"amount": [f"Expected {reservation.total_cost} for this reservation."]},
                )

            txn_ref = command.txn_ref or generate_txn_ref()
            if command.txn_ref and Payment.objects.filter(txn_ref=txn_ref).exists():
                raise InvalidInput(
                    "Transaction reference already used.",
                    errors={"txn_ref": ["Transaction reference already used."]},
                )

            try:
                with transaction.atomic():
                    payment = Payment.objects.create(
                        reservation=reservation,
                        amount=command.amount,
                        payment_method=command.payment_method,
                        payment_date=command.payment_date,
                        status=command.status,
                        txn_ref=txn_ref,
                    )
            except IntegrityError as exc:
                if Payment.objects.filter(reservation_id=reservation.id).exists():
                    raise AlreadyExists() from exc
                raise InvalidInput(
                    "Transaction reference already used.",
                    errors={"txn_ref": ["Transaction reference already used."]},
                ) from exc

            uow.add_event(PaymentRecorded(
                aggregate_id=payment.id,
                payment_id=payment.id,
                reservation_id=reservation.id,
                amount=payment.amount,
                status=payment.status,
                txn_ref=payment.txn_ref,
            ))

        logger.info(f"Payment {payment.txn_ref} recorded for reservation {reservation.id}")
        return payment


class UpdatePaymentStatusHandler:
    """Handler for UpdatePaymentStatus command (enum check only)"""

    def handle(self, command: UpdatePaymentStatusCommand) -> Payment:
        if command.status not in Payment.Status.values:
            raise InvalidInput(
                "Invalid payment status.",
                errors={"status": [f"Must be one of: {', '.join(Payment.Status.values)}."]},
            )

        with DjangoUnitOfWork() as uow:
            payment = _lock_queryset_if_possible(Payment.objects.filter(pk=command.payment_id)).first()
            if payment is None:
                raise NotFound("Payment not found.")

            old_status = payment.status
            payment.status = command.status
            payment.save(update_fields=["status", "updated_at"])

            uow.add_event(PaymentStatusChanged(
                aggregate_id=payment.id,
                payment_id=payment.id,
                old_status=old_status,
                new_status=command.status,
                changed_by=command.changed_by,
            ))

        logger.info(f"Payment {payment.id} status {old_status} -> {command.status} by admin {command.changed_by}")
        return payment
