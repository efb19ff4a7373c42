"""HTTP endpoints of the files manager API.

Views only translate between HTTP and the components built at startup.
Domain exceptions are mapped to responses by ``JsonExceptionMiddleware``.
"""

import json
import logging
from typing import Any

from django.apps import apps
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import connection
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from server.apps.accounts.logic.credentials import (
    parse_basic_authorization,
    verify_credentials,
)
from server.apps.accounts.logic.user_operations import create_user, get_user
from server.apps.api.auth import (
    TOKEN_HEADER,
    get_session_store,
    resolve_requester,
    token_required,
    unauthorized,
)
from server.apps.files.logic.file_operations import FileStore
from server.apps.files.models import FileNode

User = get_user_model()
logger = logging.getLogger(__name__)


def _file_store() -> FileStore:
    return apps.get_app_config('files').file_store


def _json_body(request: HttpRequest) -> dict[str, Any]:
    """Parse a JSON object from the request body.

    Raises:
        ValidationError: If the body is not a JSON object.
    """
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise ValidationError('Invalid JSON') from error
    if not isinstance(body, dict):
        raise ValidationError('Invalid JSON')
    return body


def _int_param(raw: str | None, default: int) -> int:
    try:
        return int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


@require_GET
def status(request: HttpRequest) -> JsonResponse:
    """Report whether the token store and the database answer."""
    try:
        connection.ensure_connection()
    except Exception:
        logger.exception('Database is unreachable')
        db_alive = False
    else:
        db_alive = True

    return JsonResponse({
        'redis': get_session_store().is_alive(),
        'db': db_alive,
    })


@require_GET
def stats(request: HttpRequest) -> JsonResponse:
    """Report the number of users and file nodes."""
    return JsonResponse({
        'users': User.objects.count(),
        'files': FileNode.objects.count(),
    })


@csrf_exempt
@require_http_methods(['POST'])
def users(request: HttpRequest) -> JsonResponse:
    """Sign up a new user."""
    body = _json_body(request)
    user = create_user(
        body.get('email'),
        body.get('password'),
        job_dispatcher=apps.get_app_config('files').job_dispatcher,
    )
    return JsonResponse({'id': user.pk, 'email': user.email}, status=201)


@require_GET
@token_required
def users_me(request: HttpRequest, user_id: int) -> HttpResponse:
    """Return the user owning the request token."""
    user = get_user(user_id)
    if user is None:
        return unauthorized()
    return JsonResponse({'id': user.pk, 'email': user.email})


@require_GET
def connect(request: HttpRequest) -> HttpResponse:
    """Exchange Basic Auth credentials for a session token."""
    credentials = parse_basic_authorization(request.headers.get('Authorization'))
    if credentials is None:
        return unauthorized()

    user_id = verify_credentials(*credentials)
    if user_id is None:
        return unauthorized()

    token = get_session_store().issue(user_id)
    return JsonResponse({'token': token})


@require_GET
def disconnect(request: HttpRequest) -> HttpResponse:
    """Revoke the request token."""
    token = request.headers.get(TOKEN_HEADER)
    sessions = get_session_store()
    if sessions.resolve(token) is None:
        return unauthorized()

    sessions.revoke(token)  # type: ignore[arg-type]
    return HttpResponse(status=204)


@csrf_exempt
@require_http_methods(['GET', 'POST'])
@token_required
def files(request: HttpRequest, user_id: int) -> JsonResponse:
    """Upload a node (POST) or list one page of nodes (GET)."""
    if request.method == 'POST':
        body = _json_body(request)
        node = _file_store().create(
            owner_id=user_id,
            name=body.get('name'),
            kind=body.get('type'),
            parent_id=body.get('parentId'),
            is_public=bool(body.get('isPublic', False)),
            content=body.get('data'),
        )
        return JsonResponse(node.to_dict(), status=201)

    nodes = _file_store().list_nodes(
        owner_id=user_id,
        parent_id=request.GET.get('parentId'),
        page=_int_param(request.GET.get('page'), 0),
    )
    return JsonResponse([node.to_dict() for node in nodes], safe=False)


@require_GET
@token_required
def file_detail(request: HttpRequest, user_id: int, file_id: str) -> JsonResponse:
    """Return one node visible to the requester."""
    node = _file_store().get(file_id, user_id)
    return JsonResponse(node.to_dict())


@csrf_exempt
@require_http_methods(['PUT'])
@token_required
def file_publish(request: HttpRequest, user_id: int, file_id: str) -> JsonResponse:
    """Make a node public."""
    node = _file_store().set_visibility(file_id, user_id, is_public=True)
    return JsonResponse(node.to_dict())


@csrf_exempt
@require_http_methods(['PUT'])
@token_required
def file_unpublish(request: HttpRequest, user_id: int, file_id: str) -> JsonResponse:
    """Make a node private."""
    node = _file_store().set_visibility(file_id, user_id, is_public=False)
    return JsonResponse(node.to_dict())


@require_GET
def file_data(request: HttpRequest, file_id: str) -> HttpResponse:
    """Return the raw content of a file, anonymous access allowed."""
    raw_size = request.GET.get('size')
    size = None
    if raw_size is not None:
        size = _int_param(raw_size, -1)

    content = _file_store().read_content(
        file_id,
        resolve_requester(request),
        size=size,
    )
    return HttpResponse(content.data, content_type=content.mime_type)
