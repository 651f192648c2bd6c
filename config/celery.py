import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("car_rental")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# Notification tasks are small and idempotent per object id.
app.conf.task_acks_late = True
app.conf.task_default_queue = "notifications"
