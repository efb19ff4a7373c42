"""S3 backend holding uploaded blobs."""

import logging
from typing import Any, final, override

from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """django-storages S3 backend that logs every blob write and delete.

    Configured through ``STORAGES['default']``. Keys are prefixed with
    ``BLOB_STORAGE_ROOT`` by the ``location`` option.
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Write a blob.

        Args:
            name: Requested key, relative to the storage root.
            content: File-like object with the bytes.
            max_length: Optional maximum length for the key.

        Returns:
            Key the blob was written under.
        """
        try:
            stored_key = super().save(name, content, max_length)
        except Exception:
            logger.exception('S3 write failed for key %s', name)
            raise
        logger.debug('S3 write done: %s', stored_key)
        return stored_key

    @override
    def delete(self, name: str) -> None:
        """Remove a blob.

        Args:
            name: Key of the blob, relative to the storage root.
        """
        try:
            super().delete(name)
        except Exception:
            logger.exception('S3 delete failed for key %s', name)
            raise
        logger.info('S3 delete done: %s', name)
