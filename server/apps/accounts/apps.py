"""Django app configuration for accounts app."""

from typing import TYPE_CHECKING, override

from django.apps import AppConfig

if TYPE_CHECKING:
    from server.apps.accounts.logic.session_manager import SessionStore


class AccountsConfig(AppConfig):
    """Configuration for accounts app.

    Builds the session store around the token cache once at startup.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.accounts'
    verbose_name = 'Accounts'

    session_store: 'SessionStore'

    @override
    def ready(self) -> None:
        """Build the session store."""
        from django.conf import settings  # noqa: WPS433
        from django.core.cache import caches  # noqa: WPS433

        from server.apps.accounts.logic.session_manager import (  # noqa: WPS433
            SessionStore,
        )

        self.session_store = SessionStore(
            caches[settings.SESSION_TOKEN_CACHE],
            ttl=settings.SESSION_TOKEN_TTL,
        )
