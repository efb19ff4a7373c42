"""Blob storage settings.

Uploaded content goes to an S3-compatible bucket (MinIO locally).
Blobs are addressed only by their generated locator and share one flat
namespace under ``BLOB_STORAGE_ROOT``.
"""

from typing import Any, Final

from server.settings.components import config

BLOB_STORAGE_ROOT: Final = config('BLOB_STORAGE_ROOT', default='files_manager')

_blob_options: dict[str, Any] = {
    'bucket_name': config('AWS_STORAGE_BUCKET_NAME', default='files-manager'),
    'access_key': config('AWS_ACCESS_KEY_ID', default=None),
    'secret_key': config('AWS_SECRET_ACCESS_KEY', default=None),
    'endpoint_url': config('AWS_S3_ENDPOINT_URL', default=None),
    'region_name': config('AWS_S3_REGION_NAME', default='us-east-1'),
    'location': BLOB_STORAGE_ROOT,
    # Locators are unique, an existing key is never replaced
    'file_overwrite': False,
    'default_acl': None,
}

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
        'OPTIONS': _blob_options,
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
