"""Celery configuration.

Read by ``server.celery`` through the ``CELERY_`` namespace.
"""

from server.settings.components import config
from server.settings.components.caches import REDIS_URL

CELERY_BROKER_URL = config('CELERY_BROKER_URL', default=REDIS_URL)
CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TIMEZONE = 'UTC'
CELERY_ENABLE_UTC = True

# Thumbnail generation queue consumed by the image worker
THUMBNAIL_QUEUE = config('THUMBNAIL_QUEUE', default='thumbnails')
