"""Token authentication helpers for API views."""

from collections.abc import Callable
from functools import wraps
from typing import Any, Final

from django.apps import apps
from django.http import HttpRequest, HttpResponse

from server.apps.accounts.logic.session_manager import SessionStore
from server.apps.api.middleware import error_response

TOKEN_HEADER: Final = 'X-Token'


def get_session_store() -> SessionStore:
    """Session store built by the accounts app at startup."""
    return apps.get_app_config('accounts').session_store


def unauthorized() -> HttpResponse:
    """Response for missing or unresolvable credentials."""
    return error_response('Unauthorized', 401)


def resolve_requester(request: HttpRequest) -> int | None:
    """Resolve the user behind the request token.

    Args:
        request: Incoming request.

    Returns:
        User id, or None for anonymous or unresolvable tokens.
    """
    return get_session_store().resolve(request.headers.get(TOKEN_HEADER))


def token_required(
    view: Callable[..., HttpResponse],
) -> Callable[..., HttpResponse]:
    """Reject requests without a live session token.

    The resolved user id is passed to the view right after the request.

    Args:
        view: View function taking ``(request, user_id, ...)``.

    Returns:
        Wrapped view answering 401 for unauthenticated requests.
    """
    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        user_id = resolve_requester(request)
        if user_id is None:
            return unauthorized()
        return view(request, user_id, *args, **kwargs)

    return wrapper
