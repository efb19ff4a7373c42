"""Blob store: raw content bytes addressed by generated locators."""

import logging
import uuid
from typing import final

from django.core.files.base import ContentFile
from django.core.files.storage import Storage

from server.apps.files.exceptions import BlobNotFoundError

logger = logging.getLogger(__name__)


def generate_locator() -> str:
    """Generate a fresh locator for one upload.

    Returns:
        Random 32 hex chars locator, unique per call.
    """
    return uuid.uuid4().hex


@final
class BlobStore:
    """Persists content bytes independently of file metadata.

    Every upload is written under a freshly generated locator, so
    concurrent uploads never contend for the same storage key.
    """

    def __init__(self, storage: Storage) -> None:
        """Initialize blob store.

        Args:
            storage: Django storage backend holding the blobs.
        """
        self._storage = storage

    def put(self, content: bytes) -> str:
        """Store content under a new locator.

        Args:
            content: Raw bytes to store.

        Returns:
            Locator of the stored content.

        Raises:
            Exception: If the storage backend fails.
        """
        locator = generate_locator()
        saved_name = self._storage.save(locator, ContentFile(content))
        logger.info('Stored blob %s (%d bytes)', saved_name, len(content))
        return saved_name

    def open(self, locator: str) -> bytes:
        """Read the content stored under a locator.

        Args:
            locator: Locator returned by ``put``.

        Returns:
            Stored bytes.

        Raises:
            BlobNotFoundError: If nothing is stored under the locator.
        """
        if not self.exists(locator):
            logger.warning('Blob missing from storage: %s', locator)
            raise BlobNotFoundError(locator)

        with self._storage.open(locator, 'rb') as blob:
            return blob.read()

    def exists(self, locator: str) -> bool:
        """Check whether content is stored under a locator.

        Args:
            locator: Locator to check.

        Returns:
            True if the blob exists, False otherwise.
        """
        return self._storage.exists(locator)

    def rollback(self, locator: str) -> None:
        """Delete an uploaded blob whose metadata could not be saved.

        This is a best-effort operation - if deletion fails, the error
        is logged but not raised, as the metadata write already failed.

        Args:
            locator: Locator of the blob to delete.
        """
        try:
            logger.warning('Rolling back upload, deleting blob: %s', locator)
            self._storage.delete(locator)
        except Exception:
            # The blob stays in storage without metadata pointing at it
            logger.exception(
                'Failed to rollback upload, orphaned blob: %s',
                locator,
            )
