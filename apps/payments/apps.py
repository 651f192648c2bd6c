from django.apps import AppConfig  # type: ignore


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.payments"
    verbose_name = "Payments"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .application.event_handlers import send_receipt_on_payment_recorded
        from .domain.events import PaymentRecorded

        message_bus.register_event_handler(PaymentRecorded, send_receipt_on_payment_recorded)
