"""Django admin configuration for files app."""

from typing import override

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import FileNode


@admin.register(FileNode)
class FileNodeAdmin(admin.ModelAdmin):
    """Admin interface for FileNode model.

    Nodes are append-only, so the admin is read-only except for the
    visibility flag.
    """

    list_display = [
        'name',
        'kind',
        'owner',
        'parent_display',
        'is_public',
        'created_at',
    ]

    list_filter = [
        'kind',
        'is_public',
        'created_at',
    ]

    search_fields = [
        'name',
        'locator',
        'owner__email',
    ]

    readonly_fields = [
        'owner',
        'name',
        'kind',
        'parent',
        'locator',
        'created_at',
    ]

    fieldsets = (
        ('Node', {
            'fields': ('name', 'kind', 'owner', 'parent'),
        }),
        ('Access', {
            'fields': ('is_public',),
        }),
        ('Storage', {
            'fields': ('locator', 'created_at'),
        }),
    )

    def parent_display(self, obj: FileNode) -> str:
        """Display the parent folder name.

        Args:
            obj: FileNode instance.

        Returns:
            Parent name, or '/' for root nodes.
        """
        if obj.parent is None:
            return '/'
        return obj.parent.name
    parent_display.short_description = 'Parent'  # type: ignore[attr-defined]

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Nodes are only created through the API."""
        return False

    @override
    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: FileNode | None = None,
    ) -> bool:
        """Nodes are never deleted."""
        return False

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[FileNode]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner', 'parent')
