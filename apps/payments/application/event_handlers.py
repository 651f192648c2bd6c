"""Message bus handlers for payment events."""

from apps.payments.domain.events import PaymentRecorded
from apps.payments.tasks import send_payment_receipt


def send_receipt_on_payment_recorded(event: PaymentRecorded) -> None:
    send_payment_receipt.delay(event.payment_id)
