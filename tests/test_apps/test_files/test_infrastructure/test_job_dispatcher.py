"""Tests for background job dispatch."""

from server.apps.files.infrastructure.job_dispatcher import (
    THUMBNAIL_MAX_ATTEMPTS,
    THUMBNAIL_RETRY_DELAY,
    THUMBNAIL_TASK,
    WELCOME_TASK,
    JobDispatcher,
    thumbnail_retry_policy,
)


def test_thumbnail_retry_policy():
    """Test thumbnail jobs get 3 attempts with a fixed 5s delay."""
    assert THUMBNAIL_MAX_ATTEMPTS == 3
    assert THUMBNAIL_RETRY_DELAY == 5
    assert thumbnail_retry_policy() == {
        'attempts': 3,
        'backoff': {'type': 'fixed', 'delay': 5000},
    }


def test_enqueue_thumbnail(job_dispatcher, celery_app):
    """Test thumbnail job payload and retry policy."""
    result = job_dispatcher.enqueue_thumbnail(file_id=7, owner_id=3)

    assert result is True
    celery_app.send_task.assert_called_once_with(
        THUMBNAIL_TASK,
        kwargs={'fileId': 7, 'ownerId': 3},
        headers=thumbnail_retry_policy(),
    )


def test_enqueue_thumbnail_to_queue(celery_app):
    """Test thumbnail jobs are routed to the configured queue."""
    dispatcher = JobDispatcher(celery_app, thumbnail_queue='thumbnails')

    dispatcher.enqueue_thumbnail(file_id=7, owner_id=3)

    assert celery_app.send_task.call_args.kwargs['queue'] == 'thumbnails'


def test_enqueue_thumbnail_broker_failure(job_dispatcher, celery_app, caplog):
    """Test broker errors are logged and swallowed."""
    celery_app.send_task.side_effect = ConnectionError('broker down')

    result = job_dispatcher.enqueue_thumbnail(file_id=7, owner_id=3)

    assert result is False
    assert f'Failed to enqueue {THUMBNAIL_TASK}' in caplog.text


def test_enqueue_welcome(job_dispatcher, celery_app):
    """Test welcome job payload."""
    result = job_dispatcher.enqueue_welcome(user_id=3)

    assert result is True
    celery_app.send_task.assert_called_once_with(
        WELCOME_TASK,
        kwargs={'userId': 3},
    )
