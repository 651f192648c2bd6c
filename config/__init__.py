"""Django configuration package for the car rental platform.

Contains the settings modules, URL routing and the WSGI/ASGI/Celery
entry points.
"""

# Import the Celery application as soon as Django starts so that
# shared tasks bind to it.
from .celery import app as celery_app  # noqa: F401
