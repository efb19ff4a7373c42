"""Cache configuration.

The ``sessions`` alias is the key-value store holding API tokens.
It must be shared by every server process, hence Redis.
"""

from server.settings.components import config

REDIS_URL = config('REDIS_URL', default='redis://localhost:6379/0')

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'sessions': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': REDIS_URL,
    },
}
