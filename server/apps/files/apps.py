"""Django app configuration for files app."""

from typing import TYPE_CHECKING, override

from django.apps import AppConfig

if TYPE_CHECKING:
    from server.apps.files.infrastructure.blob_store import BlobStore
    from server.apps.files.infrastructure.job_dispatcher import JobDispatcher
    from server.apps.files.logic.file_operations import FileStore


class FilesConfig(AppConfig):
    """Configuration for files app.

    Owns the process-wide handles of the files subsystem. They are
    built once in ``ready()`` and injected into the components, views
    reach them through ``apps.get_app_config('files')``.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.files'
    verbose_name = 'Files'

    blob_store: 'BlobStore'
    job_dispatcher: 'JobDispatcher'
    file_store: 'FileStore'

    @override
    def ready(self) -> None:
        """Build blob store, job dispatcher and file store."""
        from django.conf import settings  # noqa: WPS433
        from django.core.files.storage import storages  # noqa: WPS433

        from server.apps.files.infrastructure.blob_store import (  # noqa: WPS433
            BlobStore,
        )
        from server.apps.files.infrastructure.job_dispatcher import (  # noqa: WPS433
            JobDispatcher,
        )
        from server.apps.files.logic.file_operations import (  # noqa: WPS433
            FileStore,
        )
        from server.celery import app as celery_app  # noqa: WPS433

        self.blob_store = BlobStore(storages['default'])
        self.job_dispatcher = JobDispatcher(
            celery_app,
            thumbnail_queue=getattr(settings, 'THUMBNAIL_QUEUE', None),
        )
        self.file_store = FileStore(self.blob_store, self.job_dispatcher)
