"""Hand-off of background jobs to external Celery workers.

Only the publishing side lives here. Workers consume the tasks by name
and honour the retry policy carried in the message headers. Payload keys
use the camelCase names the workers expect (`fileId`, `ownerId`, `userId`).
"""

import logging
from typing import Any, Final, final

from celery import Celery

logger = logging.getLogger(__name__)

THUMBNAIL_TASK: Final = 'files.generate_thumbnail'
WELCOME_TASK: Final = 'accounts.send_welcome_email'

# Thumbnail retry policy: 3 attempts in total, fixed delay in seconds
THUMBNAIL_MAX_ATTEMPTS: Final = 3
THUMBNAIL_RETRY_DELAY: Final = 5


def thumbnail_retry_policy() -> dict[str, Any]:
    """Build the retry policy attached to thumbnail jobs.

    Returns:
        Headers understood by the thumbnail worker, delay in milliseconds.
    """
    return {
        'attempts': THUMBNAIL_MAX_ATTEMPTS,
        'backoff': {
            'type': 'fixed',
            'delay': THUMBNAIL_RETRY_DELAY * 1000,
        },
    }


@final
class JobDispatcher:
    """Publishes jobs for background workers.

    Submission is advisory: a failure to publish is logged and reported
    through the return value, it never propagates to the caller.
    """

    def __init__(self, app: Celery, thumbnail_queue: str | None = None) -> None:
        """Initialize dispatcher.

        Args:
            app: Celery application used to publish messages.
            thumbnail_queue: Optional queue name for thumbnail jobs.
        """
        self._app = app
        self._thumbnail_queue = thumbnail_queue

    def enqueue_thumbnail(self, file_id: int, owner_id: int) -> bool:
        """Request thumbnail generation for an uploaded image.

        Args:
            file_id: ID of the image node.
            owner_id: ID of the image owner.

        Returns:
            True if the job was handed to the broker, False otherwise.
        """
        return self._send(
            THUMBNAIL_TASK,
            {'fileId': file_id, 'ownerId': owner_id},
            headers=thumbnail_retry_policy(),
            queue=self._thumbnail_queue,
        )

    def enqueue_welcome(self, user_id: int) -> bool:
        """Request the welcome email for a new user.

        Args:
            user_id: ID of the new user.

        Returns:
            True if the job was handed to the broker, False otherwise.
        """
        return self._send(WELCOME_TASK, {'userId': user_id})

    def _send(
        self,
        task_name: str,
        payload: dict[str, Any],
        headers: dict[str, Any] | None = None,
        queue: str | None = None,
    ) -> bool:
        options: dict[str, Any] = {}
        if headers:
            options['headers'] = headers
        if queue:
            options['queue'] = queue

        try:
            result = self._app.send_task(task_name, kwargs=payload, **options)
        except Exception:
            # No caller-visible signal: the job is simply lost
            logger.exception(
                'Failed to enqueue %s with payload %s',
                task_name,
                payload,
            )
            return False

        logger.info(
            'Enqueued %s (task %s) with payload %s',
            task_name,
            result.id,
            payload,
        )
        return True
