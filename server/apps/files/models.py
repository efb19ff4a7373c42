"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_KIND_MAX_LENGTH: Final = 16
_LOCATOR_MAX_LENGTH: Final = 255

# Wire value of the root sentinel parent reference
ROOT_PARENT_ID: Final = 0


class FileKind(models.TextChoices):
    """Kinds of nodes in the content hierarchy."""

    FOLDER = 'folder', 'Folder'
    FILE = 'file', 'File'
    IMAGE = 'image', 'Image'


@final
class FileNode(models.Model):
    """File, image or folder owned by a single user.

    Nodes form a hierarchy through ``parent``: a null parent means the
    node sits at the owner's root, otherwise the parent is a folder.
    The table is append-only apart from ``is_public``.

    Files and images keep their bytes in blob storage under ``locator``,
    folders have no content and an empty locator.
    """

    # Owner relationship, set once at creation
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='file_nodes',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    kind = models.CharField(
        max_length=_KIND_MAX_LENGTH,
        choices=FileKind.choices,
    )

    # Null parent is the root sentinel
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        related_name='children',
        null=True,
        blank=True,
    )

    is_public = models.BooleanField(
        default=False,
        help_text='Readable by anyone when set',
    )

    locator = models.CharField(
        max_length=_LOCATOR_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Blob storage locator, empty for folders',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File node'  # type: ignore[mutable-override]
        verbose_name_plural = 'File nodes'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize directory listing queries
            models.Index(
                fields=['owner', 'parent', 'id'],
                name='files_owner_parent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Folders never carry content, files and images always do
            models.CheckConstraint(
                condition=(
                    models.Q(kind=FileKind.FOLDER, locator='') |
                    (~models.Q(kind=FileKind.FOLDER) & ~models.Q(locator=''))
                ),
                name='files_locator_matches_kind',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.name} ({self.kind})'

    @property
    def is_folder(self) -> bool:
        """Check whether the node is a folder."""
        return self.kind == FileKind.FOLDER

    @property
    def parent_ref(self) -> int:
        """Parent id as exposed to clients.

        Returns:
            Parent folder id, or ``ROOT_PARENT_ID`` for root nodes.
        """
        return self.parent_id or ROOT_PARENT_ID

    def to_dict(self) -> dict[str, object]:
        """Serialize the node for API responses.

        Returns:
            Dictionary with the public node representation.
        """
        return {
            'id': self.id,
            'userId': self.owner_id,
            'name': self.name,
            'type': self.kind,
            'isPublic': self.is_public,
            'parentId': self.parent_ref,
        }
