"""Session management for API tokens.

Tokens live in a time-bounded key-value store (a Django cache),
mapping ``auth_<token>`` to the owning user id.
"""

import logging
import secrets
from typing import Final, final

from django.core.cache.backends.base import BaseCache

from server.apps.accounts.exceptions import SessionStoreError

logger = logging.getLogger(__name__)

# Token length in bytes (generates 32 hex chars)
_TOKEN_BYTES: Final = 16

# Key prefix of token entries in the store
_KEY_PREFIX: Final = 'auth_'

# Default token lifetime in seconds (24 hours)
DEFAULT_TOKEN_TTL: Final = 24 * 60 * 60


def _session_key(token: str) -> str:
    return f'{_KEY_PREFIX}{token}'


@final
class SessionStore:
    """Issues, resolves and revokes API session tokens.

    Expiry is enforced by the cache itself. Resolution is fail-closed:
    absent, expired, revoked tokens and store errors all resolve to no
    identity. A user may hold any number of concurrent sessions.
    """

    def __init__(self, cache: BaseCache, ttl: int = DEFAULT_TOKEN_TTL) -> None:
        """Initialize session store.

        Args:
            cache: Cache backend holding token entries.
            ttl: Token lifetime in seconds.
        """
        self._cache = cache
        self._ttl = ttl

    def issue(self, user_id: int) -> str:
        """Create a new session for the user.

        Args:
            user_id: ID of the authenticated user.

        Returns:
            Fresh session token.

        Raises:
            SessionStoreError: If the token store is unavailable.
        """
        token = secrets.token_hex(_TOKEN_BYTES)

        try:
            self._cache.set(_session_key(token), user_id, timeout=self._ttl)
        except Exception as error:
            logger.exception('Failed to store session for user %d', user_id)
            raise SessionStoreError('Session store unavailable') from error

        logger.info('Session issued for user %d: %s', user_id, token[:8])
        return token

    def resolve(self, token: str | None) -> int | None:
        """Get the user id owning a session.

        Args:
            token: Session token to look up.

        Returns:
            User id if the session is live, None otherwise.
        """
        if not token:
            return None

        try:
            user_id = self._cache.get(_session_key(token))
        except Exception:
            logger.exception('Failed to resolve session: %s', token[:8])
            return None

        if user_id is None:
            logger.debug('Unknown or expired session: %s', token[:8])
            return None
        return int(user_id)

    def revoke(self, token: str) -> bool:
        """End a session immediately.

        Revoking an absent or already revoked token is not an error.

        Args:
            token: Session token to revoke.

        Returns:
            True if a live session was removed, False otherwise.
        """
        deleted = bool(self._cache.delete(_session_key(token)))

        if deleted:
            logger.info('Session revoked: %s', token[:8])

        return deleted

    def is_alive(self) -> bool:
        """Check whether the token store answers.

        Returns:
            True if a read against the store succeeds.
        """
        try:
            self._cache.get(_session_key('ping'))
        except Exception:
            logger.exception('Session store is unreachable')
            return False
        return True
