"""Shared fixtures for the whole test suite."""

import uuid
from unittest.mock import Mock

import boto3
import pytest
from celery import Celery
from django.apps import apps
from django.contrib.auth import get_user_model
from django.core.cache.backends.locmem import LocMemCache
from moto import mock_aws

from server.apps.accounts.logic.session_manager import SessionStore
from server.apps.files.infrastructure.blob_store import BlobStore
from server.apps.files.infrastructure.job_dispatcher import JobDispatcher
from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.logic.file_operations import FileStore

User = get_user_model()

TEST_BUCKET = 'files-manager'
TEST_STORAGE_ROOT = 'files_manager'


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='alice@example.com',
        email='alice@example.com',
        password='testpass123',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='bob@example.com',
        email='bob@example.com',
        password='testpass123',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with files-manager bucket.

    Yields:
        boto3 S3 resource with files-manager bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=TEST_BUCKET)

        yield conn


@pytest.fixture
def blob_storage(mock_s3):
    """Create S3 storage backend bound to the mocked bucket.

    Returns:
        FileStorage instance.
    """
    return FileStorage(
        bucket_name=TEST_BUCKET,
        access_key='testing',
        secret_key='testing',
        region_name='us-east-1',
        location=TEST_STORAGE_ROOT,
        file_overwrite=False,
    )


@pytest.fixture
def blob_store(blob_storage):
    """Create blob store on top of the mocked S3 storage.

    Returns:
        BlobStore instance.
    """
    return BlobStore(blob_storage)


@pytest.fixture
def celery_app():
    """Mock Celery application recording published tasks.

    Returns:
        Mock with the Celery interface.
    """
    app = Mock(spec=Celery)
    app.send_task.return_value = Mock(id='task-id')
    return app


@pytest.fixture
def job_dispatcher(celery_app):
    """Create job dispatcher publishing to the mocked Celery app.

    Returns:
        JobDispatcher instance.
    """
    return JobDispatcher(celery_app)


@pytest.fixture
def file_store(blob_store, job_dispatcher):
    """Create file store wired to test handles.

    Returns:
        FileStore instance.
    """
    return FileStore(blob_store, job_dispatcher)


@pytest.fixture
def session_cache():
    """In-memory cache standing in for Redis.

    Yields:
        Empty LocMemCache instance.
    """
    cache = LocMemCache(f'sessions-{uuid.uuid4().hex}', {})
    yield cache
    cache.clear()


@pytest.fixture
def session_store(session_cache):
    """Create session store on the in-memory cache.

    Returns:
        SessionStore instance.
    """
    return SessionStore(session_cache)


@pytest.fixture
def wired_services(monkeypatch, session_store, blob_store, job_dispatcher, file_store):
    """Replace the handles built at startup with test handles.

    Returns:
        Dictionary of the injected components.
    """
    accounts_config = apps.get_app_config('accounts')
    files_config = apps.get_app_config('files')

    monkeypatch.setattr(accounts_config, 'session_store', session_store)
    monkeypatch.setattr(files_config, 'blob_store', blob_store)
    monkeypatch.setattr(files_config, 'job_dispatcher', job_dispatcher)
    monkeypatch.setattr(files_config, 'file_store', file_store)

    return {
        'session_store': session_store,
        'blob_store': blob_store,
        'job_dispatcher': job_dispatcher,
        'file_store': file_store,
    }
