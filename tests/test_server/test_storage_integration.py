"""Integration tests against live blob and token stores.

These tests verify that MinIO and Redis are properly configured and
accessible when running in Docker Compose.
"""
import os
from typing import Final

import boto3
import pytest
from botocore.client import BaseClient
from botocore.exceptions import ClientError
from django.core.cache.backends.redis import RedisCache

from server.apps.accounts.logic.session_manager import SessionStore
from server.apps.files.exceptions import BlobNotFoundError
from server.apps.files.infrastructure.blob_store import BlobStore
from server.apps.files.infrastructure.storage import FileStorage

_TEST_BUCKET: Final = 'files-manager'
_TEST_STORAGE_ROOT: Final = 'integration'
_TEST_FILE_CONTENT: Final = b'Hello from MinIO integration test!'

_MINIO_ENDPOINT: Final = os.getenv('MINIO_ENDPOINT', 'http://minio:9000')
_MINIO_USER: Final = os.getenv('MINIO_ROOT_USER', 'minioadmin')
_MINIO_PASSWORD: Final = os.getenv('MINIO_ROOT_PASSWORD', 'minioadmin')
_REDIS_URL: Final = os.getenv('REDIS_URL', 'redis://redis:6379/15')


@pytest.fixture
def s3_client() -> BaseClient:
    """Create S3 client for MinIO.

    Returns:
        Configured boto3 S3 client for MinIO.
    """
    return boto3.client(
        's3',
        endpoint_url=_MINIO_ENDPOINT,
        aws_access_key_id=_MINIO_USER,
        aws_secret_access_key=_MINIO_PASSWORD,
        region_name='us-east-1',
    )


@pytest.fixture
def test_bucket(s3_client: BaseClient) -> str:
    """Ensure test bucket exists.

    Args:
        s3_client: boto3 S3 client.

    Returns:
        Name of the test bucket.
    """
    try:
        s3_client.head_bucket(Bucket=_TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=_TEST_BUCKET)

    return _TEST_BUCKET


@pytest.fixture
def live_blob_store(test_bucket: str) -> BlobStore:
    """Create blob store writing to MinIO.

    Args:
        test_bucket: Name of the test bucket.

    Returns:
        BlobStore instance.
    """
    storage = FileStorage(
        bucket_name=test_bucket,
        access_key=_MINIO_USER,
        secret_key=_MINIO_PASSWORD,
        endpoint_url=_MINIO_ENDPOINT,
        region_name='us-east-1',
        location=_TEST_STORAGE_ROOT,
        file_overwrite=False,
    )
    return BlobStore(storage)


@pytest.mark.integration
def test_s3_client_connection(s3_client: BaseClient) -> None:
    """Test that S3 client can connect to MinIO."""
    # List buckets to verify connection
    response = s3_client.list_buckets()
    assert 'Buckets' in response


@pytest.mark.integration
def test_put_and_open(
    live_blob_store: BlobStore,
    s3_client: BaseClient,
    test_bucket: str,
) -> None:
    """Test content round trip through MinIO.

    Args:
        live_blob_store: Blob store backed by MinIO.
        s3_client: boto3 S3 client.
        test_bucket: Name of the test bucket.
    """
    locator = live_blob_store.put(_TEST_FILE_CONTENT)

    response = s3_client.head_object(
        Bucket=test_bucket,
        Key=f'{_TEST_STORAGE_ROOT}/{locator}',
    )
    assert response['ContentLength'] == len(_TEST_FILE_CONTENT)
    assert live_blob_store.open(locator) == _TEST_FILE_CONTENT

    live_blob_store.rollback(locator)


@pytest.mark.integration
def test_rollback_removes_object(live_blob_store: BlobStore) -> None:
    """Test rolled back uploads are gone from MinIO.

    Args:
        live_blob_store: Blob store backed by MinIO.
    """
    locator = live_blob_store.put(_TEST_FILE_CONTENT)

    live_blob_store.rollback(locator)

    assert not live_blob_store.exists(locator)
    with pytest.raises(BlobNotFoundError):
        live_blob_store.open(locator)


@pytest.mark.integration
def test_redis_sessions() -> None:
    """Test token issue, resolve and revoke against Redis."""
    sessions = SessionStore(RedisCache(_REDIS_URL, {}), ttl=60)

    assert sessions.is_alive()

    token = sessions.issue(7)
    assert sessions.resolve(token) == 7

    assert sessions.revoke(token)
    assert sessions.resolve(token) is None
