"""Business logic for user signup and lookup."""

import logging
from functools import partial
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from server.apps.accounts.exceptions import EmailAlreadyExistsError

if TYPE_CHECKING:
    from django.contrib.auth.models import User as UserModel

    from server.apps.files.infrastructure.job_dispatcher import JobDispatcher

User = get_user_model()
logger = logging.getLogger(__name__)


def create_user(
    email: str | None,
    password: str | None,
    job_dispatcher: 'JobDispatcher | None' = None,
) -> 'UserModel':
    """Register a new user.

    The email is stored as both username and email, the unique
    username column rejects duplicates that slip past the lookup
    under concurrent signups.

    Args:
        email: Login email, unique and case-sensitive.
        password: Plaintext password, stored only as a hash.
        job_dispatcher: Optional publisher for the welcome email job.

    Returns:
        Created User instance.

    Raises:
        ValidationError: If email or password is missing.
        EmailAlreadyExistsError: If the email is already registered.
    """
    if not email:
        raise ValidationError('Missing email', code='missing_email')
    if not password:
        raise ValidationError('Missing password', code='missing_password')

    if User.objects.filter(username=email).exists():
        logger.info('Signup rejected, email already registered: %s', email)
        raise EmailAlreadyExistsError(email)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
            )
    except IntegrityError as error:
        logger.warning('Concurrent signup for the same email: %s', email)
        raise EmailAlreadyExistsError(email) from error

    logger.info('User created: %s (ID: %d)', email, user.pk)

    if job_dispatcher is not None:
        transaction.on_commit(partial(job_dispatcher.enqueue_welcome, user.pk))

    return user


def get_user(user_id: int) -> 'UserModel | None':
    """Get a user by id.

    Args:
        user_id: ID of the user.

    Returns:
        User instance, or None if no such user exists.
    """
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        return None
