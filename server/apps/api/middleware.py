"""Maps domain exceptions raised by API views to JSON responses."""

import logging
from collections.abc import Callable
from typing import Final, final

from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.accounts.exceptions import EmailAlreadyExistsError
from server.apps.files.exceptions import (
    BlobNotFoundError,
    FolderHasNoContentError,
)
from server.apps.files.models import FileNode

logger = logging.getLogger(__name__)

_API_NAMESPACE: Final = 'api'


def error_response(message: str, status: int) -> JsonResponse:
    """Build the JSON error body used by every API endpoint.

    Args:
        message: Human readable error.
        status: HTTP status code.

    Returns:
        JsonResponse with ``{"error": message}``.
    """
    return JsonResponse({'error': message}, status=status)


@final
class JsonExceptionMiddleware:
    """Turns exceptions escaping API views into JSON error responses.

    Missing and hidden nodes both become 404. Anything unexpected is
    logged here and answered with a bare 500, no internal detail is
    sent to the client. Non-API views are left to Django.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize middleware.

        Args:
            get_response: Next handler in the middleware chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Map an exception raised by a view.

        Args:
            request: Request being handled.
            exception: Exception raised by the view.

        Returns:
            JSON error response, or None for non-API views.
        """
        match = request.resolver_match
        if match is None or match.namespace != _API_NAMESPACE:
            return None

        if isinstance(exception, ValidationError):
            return error_response(exception.messages[0], 400)
        if isinstance(exception, (FolderHasNoContentError, EmailAlreadyExistsError)):
            return error_response(str(exception), 400)
        if isinstance(exception, (FileNode.DoesNotExist, BlobNotFoundError)):
            return error_response('Not found', 404)

        logger.exception('Unhandled error in %s %s', request.method, request.path)
        return error_response('Internal Server Error', 500)
