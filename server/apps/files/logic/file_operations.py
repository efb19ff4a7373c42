"""Business logic for file node operations."""

import base64
import logging
from dataclasses import dataclass
from functools import partial
from typing import Final, final

from django.core.exceptions import ValidationError
from django.db import transaction

from server.apps.files.exceptions import (
    FolderHasNoContentError,
    ParentIsNotFolderError,
    ParentNotFoundError,
)
from server.apps.files.infrastructure.blob_store import BlobStore
from server.apps.files.infrastructure.job_dispatcher import JobDispatcher
from server.apps.files.infrastructure.metadata import (
    THUMBNAIL_SIZES,
    detect_mime_type,
    thumbnail_locator,
)
from server.apps.files.logic import access_control
from server.apps.files.models import ROOT_PARENT_ID, FileKind, FileNode

logger = logging.getLogger(__name__)

PAGE_SIZE: Final = 20

# Parent reference accepted from callers: id, root sentinel or None
ParentRef = int | str | None


@dataclass(frozen=True, slots=True)
class FileContent:
    """Content of a file node ready to be sent to a client."""

    node: FileNode
    data: bytes
    mime_type: str


def is_root(parent_ref: ParentRef) -> bool:
    """Check whether a parent reference is the root sentinel.

    Args:
        parent_ref: Parent reference as received from the caller.

    Returns:
        True for None, empty values and ``ROOT_PARENT_ID``.
    """
    if isinstance(parent_ref, str):
        return parent_ref in ('', str(ROOT_PARENT_ID))
    if isinstance(parent_ref, int) and not isinstance(parent_ref, bool):
        return parent_ref == ROOT_PARENT_ID
    return parent_ref is None


def _to_id(raw_id: object) -> int | None:
    """Convert an id received from a caller to an int.

    Only integers and ASCII digit strings are ids. Booleans and floats
    are rejected rather than coerced.

    Returns:
        The id, or None when it is not a valid integer.
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        return raw_id
    if isinstance(raw_id, str) and raw_id.isascii() and raw_id.isdigit():
        return int(raw_id)
    return None


def _decode_content(content: object) -> bytes:
    """Get upload bytes, decoding base64 text as received over the API.

    Whitespace inside base64 text is ignored, so line-wrapped payloads
    are accepted.

    Raises:
        ValidationError: If content is missing or not valid base64.
    """
    if not content:
        raise ValidationError('Missing data', code='missing_data')
    if isinstance(content, bytes):
        return content
    if not isinstance(content, str):
        raise ValidationError('Invalid data', code='invalid_data')

    try:
        decoded = base64.b64decode(''.join(content.split()), validate=True)
    except ValueError as error:
        raise ValidationError('Invalid data', code='invalid_data') from error

    if not decoded:
        raise ValidationError('Missing data', code='missing_data')
    return decoded


@final
class FileStore:
    """Owns file node metadata and the hierarchy invariants.

    Every read goes through the owner-or-public policy and every
    mutation through the owner-only policy. A denied request fails
    exactly like a missing node, so private nodes never leak.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        job_dispatcher: JobDispatcher,
        page_size: int = PAGE_SIZE,
    ) -> None:
        """Initialize file store.

        Args:
            blob_store: Storage for file and image content.
            job_dispatcher: Publisher for thumbnail jobs.
            page_size: Number of nodes per listing page.
        """
        self._blobs = blob_store
        self._jobs = job_dispatcher
        self._page_size = page_size

    def create(  # noqa: WPS211
        self,
        owner_id: int,
        name: str | None,
        kind: str | None,
        parent_id: ParentRef = None,
        is_public: bool = False,
        content: bytes | str | None = None,
    ) -> FileNode:
        """Create a folder, or upload a file or an image.

        Files and images are written to the blob store first, then
        their metadata is saved. If saving metadata fails, the blob is
        deleted again (rollback). Images get a thumbnail job once the
        metadata is committed; its outcome does not affect the result.

        Args:
            owner_id: ID of the uploading user.
            name: Node name.
            kind: One of ``FileKind`` values.
            parent_id: Parent folder id, or the root sentinel.
            is_public: Initial visibility.
            content: Raw bytes or base64 text, required unless creating
                a folder. Ignored for folders.

        Returns:
            Created FileNode instance.

        Raises:
            ValidationError: If name, kind or content is missing, or
                content is not valid base64.
            ParentNotFoundError: If the parent does not exist.
            ParentIsNotFolderError: If the parent is not a folder.
        """
        if not isinstance(name, str) or not name:
            raise ValidationError('Missing name', code='missing_name')
        if kind not in FileKind.values:
            raise ValidationError('Missing type', code='missing_type')
        data = b''
        if kind != FileKind.FOLDER:
            data = _decode_content(content)

        parent = self._resolve_parent(parent_id)
        fields = {
            'owner_id': owner_id,
            'name': name,
            'kind': kind,
            'parent': parent,
            'is_public': is_public,
        }

        if kind == FileKind.FOLDER:
            node = FileNode.objects.create(**fields)
            logger.info('Folder created: %s (ID: %d)', name, node.id)
            return node

        # Step 1: Upload content first
        locator = self._blobs.put(data)

        # Step 2: Create metadata record (in transaction)
        try:
            with transaction.atomic():
                node = FileNode.objects.create(locator=locator, **fields)
        except Exception:
            logger.exception(
                'Database transaction failed, rolling back blob: %s',
                locator,
            )
            self._blobs.rollback(locator)
            raise

        logger.info(
            'File node created: %s (ID: %d, kind: %s)',
            name,
            node.id,
            kind,
        )

        if kind == FileKind.IMAGE:
            # Workers must not see the job before the row is visible
            transaction.on_commit(
                partial(self._jobs.enqueue_thumbnail, node.id, owner_id),
            )

        return node

    def get(self, file_id: int | str, requester_id: int | None) -> FileNode:
        """Get a node visible to the requester.

        Args:
            file_id: ID of the node.
            requester_id: Resolved user id, or None when anonymous.

        Returns:
            FileNode instance.

        Raises:
            FileNode.DoesNotExist: If the node is missing or hidden.
        """
        node = self._find(file_id)
        if not access_control.can_read(node, requester_id):
            logger.debug('Node %d hidden from requester %s', node.id, requester_id)
            raise FileNode.DoesNotExist(f'File node not found: {file_id}')
        return node

    def list_nodes(
        self,
        owner_id: int,
        parent_id: ParentRef = None,
        page: int = 0,
    ) -> list[FileNode]:
        """List one page of an owner's nodes under a parent.

        No total count is returned, callers page until an empty result.

        Args:
            owner_id: Owner of the listed nodes.
            parent_id: Parent folder id, or the root sentinel.
            page: Zero-based page number, negative values mean 0.

        Returns:
            Up to ``page_size`` nodes in creation order.
        """
        queryset = FileNode.objects.filter(owner_id=owner_id)
        if is_root(parent_id):
            queryset = queryset.filter(parent__isnull=True)
        else:
            parent_pk = _to_id(parent_id)
            if parent_pk is None:
                return []
            queryset = queryset.filter(parent_id=parent_pk)

        start = max(page, 0) * self._page_size
        return list(queryset.order_by('id')[start:start + self._page_size])

    def set_visibility(
        self,
        file_id: int | str,
        requester_id: int | None,
        is_public: bool,
    ) -> FileNode:
        """Publish or unpublish a node.

        Only the owner may change visibility. The flag is overwritten
        directly, concurrent changes are last-write-wins.

        Args:
            file_id: ID of the node.
            requester_id: Resolved user id, or None when anonymous.
            is_public: New visibility.

        Returns:
            Updated FileNode instance.

        Raises:
            FileNode.DoesNotExist: If the node is missing or not owned.
        """
        node = self._find(file_id)
        if not access_control.can_mutate(node, requester_id):
            logger.debug('Node %d not owned by %s', node.id, requester_id)
            raise FileNode.DoesNotExist(f'File node not found: {file_id}')

        FileNode.objects.filter(id=node.id).update(is_public=is_public)
        node.refresh_from_db()

        logger.info(
            'Node visibility changed: ID=%d, public=%s',
            node.id,
            node.is_public,
        )
        return node

    def read_content(
        self,
        file_id: int | str,
        requester_id: int | None,
        size: int | None = None,
    ) -> FileContent:
        """Read the content of a file or an image.

        Args:
            file_id: ID of the node.
            requester_id: Resolved user id, or None when anonymous.
            size: Optional thumbnail width, one of ``THUMBNAIL_SIZES``.

        Returns:
            FileContent with the bytes and their MIME type.

        Raises:
            FileNode.DoesNotExist: If the node is missing or hidden.
            FolderHasNoContentError: If the node is a folder.
            ValidationError: If the thumbnail size is not supported.
            BlobNotFoundError: If the content is missing from storage.
        """
        node = self._find(file_id)
        if node.is_folder:
            raise FolderHasNoContentError(node.id)
        if not access_control.can_read(node, requester_id):
            raise FileNode.DoesNotExist(f'File node not found: {file_id}')

        locator = node.locator
        if size is not None:
            if size not in THUMBNAIL_SIZES:
                raise ValidationError('Invalid size', code='invalid_size')
            locator = thumbnail_locator(locator, size)

        return FileContent(
            node=node,
            data=self._blobs.open(locator),
            mime_type=detect_mime_type(node.name),
        )

    def _find(self, file_id: int | str) -> FileNode:
        node_pk = _to_id(file_id)
        if node_pk is None:
            raise FileNode.DoesNotExist(f'File node not found: {file_id}')
        return FileNode.objects.get(id=node_pk)

    def _resolve_parent(self, parent_id: ParentRef) -> FileNode | None:
        """Validate a parent reference for a new node.

        Returns:
            Parent folder, or None for the root sentinel.

        Raises:
            ParentNotFoundError: If the parent does not exist.
            ParentIsNotFolderError: If the parent is not a folder.
        """
        if is_root(parent_id):
            return None

        parent_pk = _to_id(parent_id)
        if parent_pk is None:
            raise ParentNotFoundError

        try:
            parent = FileNode.objects.get(id=parent_pk)
        except FileNode.DoesNotExist as error:
            raise ParentNotFoundError from error

        if not parent.is_folder:
            raise ParentIsNotFolderError
        return parent
