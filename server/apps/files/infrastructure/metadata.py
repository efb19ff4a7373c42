"""Metadata helpers for stored content."""

import mimetypes
from typing import Final

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'

# Widths of the derivatives produced by the thumbnail worker
THUMBNAIL_SIZES: Final = frozenset((500, 250, 100))


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from the filename extension.

    Uses Python's built-in mimetypes module to guess MIME type
    from filename extension.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def thumbnail_locator(locator: str, size: int) -> str:
    """Build the locator of a thumbnail derived from a stored image.

    The thumbnail worker writes each derivative next to the original,
    suffixed with its width.

    Example: ('3f2a9c...', 250) -> '3f2a9c..._250'

    Args:
        locator: Locator of the original image.
        size: Thumbnail width in pixels.

    Returns:
        Locator of the derivative.
    """
    return f'{locator}_{size}'
