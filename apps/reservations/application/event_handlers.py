"""Message bus handlers for reservation events."""

import logging

from apps.reservations.domain.events import ReservationCancelled, ReservationCreated
from apps.reservations.tasks import send_reservation_cancellation, send_reservation_confirmation

logger = logging.getLogger(__name__)


def send_confirmation_on_reservation_created(event: ReservationCreated) -> None:
    logger.debug(f"Queueing confirmation email for reservation {event.reservation_id}")
    send_reservation_confirmation.delay(event.reservation_id)


def send_cancellation_on_reservation_cancelled(event: ReservationCancelled) -> None:
    logger.debug(f"Queueing cancellation email for reservation {event.reservation_id}")
    send_reservation_cancellation.delay(event.reservation_id)
