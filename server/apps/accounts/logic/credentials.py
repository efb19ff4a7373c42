"""Credential checks for API logins.

Validates email/password pairs against Django's User model. The email
doubles as the username, so lookups are exact and case-sensitive.
"""

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Final

from django.contrib.auth import authenticate

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

_BASIC_SCHEME: Final = 'Basic'


def parse_basic_authorization(header: str | None) -> tuple[str, str] | None:
    """Extract email and password from an HTTP Basic Auth header.

    The decoded value is split on the first colon, so passwords may
    contain colons.

    Args:
        header: Raw ``Authorization`` header value.

    Returns:
        (email, password) tuple, or None if the header is malformed.
    """
    if not header:
        return None

    parts = header.split(' ')
    if len(parts) != 2 or parts[0] != _BASIC_SCHEME:
        return None

    try:
        decoded = base64.b64decode(parts[1], validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return None

    email, separator, password = decoded.partition(':')
    if not separator or not email or not password:
        return None
    return email, password


def verify_credentials(email: str, password: str) -> int | None:
    """Check an email/password pair.

    Unknown emails and wrong passwords are indistinguishable to the
    caller, both yield None.

    Args:
        email: Email used at signup.
        password: Plaintext password.

    Returns:
        User id if the credentials match an active user, None otherwise.
    """
    user: User | None = authenticate(username=email, password=password)

    if user is None:
        logger.warning('Authentication failed for user: %s', email)
        return None

    if not user.is_active:
        logger.warning('Inactive user attempted login: %s', email)
        return None

    logger.info('User authenticated successfully: %s', email)
    return user.pk
