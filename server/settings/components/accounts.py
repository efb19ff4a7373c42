"""API token session settings."""

from server.settings.components import config

# Cache alias holding `auth_<token>` entries
SESSION_TOKEN_CACHE = 'sessions'

# Token lifetime in seconds (24 hours)
SESSION_TOKEN_TTL = config('SESSION_TOKEN_TTL', cast=int, default=86400)
