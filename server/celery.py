"""Celery application used to hand work off to background workers.

The web process only publishes messages: thumbnail generation and
mail delivery run in separate worker deployments.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

app = Celery('server')

# All celery-related settings use the `CELERY_` prefix
app.config_from_object('django.conf:settings', namespace='CELERY')
