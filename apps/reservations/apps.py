from django.apps import AppConfig  # type: ignore


class ReservationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.reservations"
    verbose_name = "Reservations"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .application.event_handlers import (
            send_cancellation_on_reservation_cancelled,
            send_confirmation_on_reservation_created,
        )
        from .domain.events import ReservationCancelled, ReservationCreated

        message_bus.register_event_handler(ReservationCreated, send_confirmation_on_reservation_created)
        message_bus.register_event_handler(ReservationCancelled, send_cancellation_on_reservation_cancelled)
