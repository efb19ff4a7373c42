"""Settings for the test suite.

Tests inject their own session cache, blob storage and Celery handles,
these overrides only keep stray code paths away from real services.
"""

from server.settings import *  # noqa: F401, F403, WPS347
from server.settings.components.storages import STORAGES as _STORAGES

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'sessions': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'sessions',
    },
}

STORAGES = {
    **_STORAGES,
    'default': {
        **_STORAGES['default'],
        'OPTIONS': {
            **_STORAGES['default']['OPTIONS'],
            'bucket_name': 'files-manager',
            'access_key': 'testing',
            'secret_key': 'testing',
            'endpoint_url': None,
            'region_name': 'us-east-1',
        },
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CELERY_BROKER_URL = 'memory://'
