"""Exceptions for accounts app."""


class EmailAlreadyExistsError(Exception):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, email: str) -> None:
        """Initialize EmailAlreadyExistsError.

        Args:
            email: The duplicate email.
        """
        self.email = email
        super().__init__('Already exist')


class SessionStoreError(Exception):
    """Raised when the token store cannot issue a session."""
