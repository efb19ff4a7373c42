"""Exceptions for files app."""

from django.core.exceptions import ValidationError


class ParentNotFoundError(ValidationError):
    """Raised when a node is created under a parent that does not exist."""

    def __init__(self) -> None:
        """Initialize ParentNotFoundError."""
        super().__init__('Parent not found', code='parent_not_found')


class ParentIsNotFolderError(ValidationError):
    """Raised when a node is created under a file or an image."""

    def __init__(self) -> None:
        """Initialize ParentIsNotFolderError."""
        super().__init__('Parent is not a folder', code='parent_not_folder')


class FolderHasNoContentError(Exception):
    """Raised when content is requested for a folder node."""

    def __init__(self, file_id: int) -> None:
        """Initialize FolderHasNoContentError.

        Args:
            file_id: ID of the folder node.
        """
        self.file_id = file_id
        super().__init__("A folder doesn't have content")


class BlobNotFoundError(Exception):
    """Raised when a locator has no stored content behind it."""

    def __init__(self, locator: str) -> None:
        """Initialize BlobNotFoundError.

        Args:
            locator: Locator that could not be resolved.
        """
        self.locator = locator
        super().__init__(f'Blob not found: {locator}')
