"""Development settings for the car rental project.

Debug on, permissive hosts and CORS, emails printed to the console and
Celery tasks executed inline so no broker is needed locally.
Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Run tasks inline unless a broker is explicitly configured
CELERY_TASK_ALWAYS_EAGER = os.environ.get('CELERY_BROKER_URL') is None  # noqa: F405

LOGGING['loggers']['apps']['level'] = 'DEBUG'  # noqa: F405
