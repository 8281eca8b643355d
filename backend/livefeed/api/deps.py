"""Shared API helpers: auth context, service wiring and response helpers."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from livefeed.core.extensions import get_blob_store, get_hub
from livefeed.core.logger import ensure_request_id
from livefeed.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from livefeed.services._shared.base import ServiceContext
from livefeed.services.auth import Anonymous, AuthContext, AuthService, authenticate
from livefeed.services.posts import PostCommandService, PostQueryService

F = TypeVar("F", bound=Callable[..., Any])

AUTH_KEY = "auth"


def resolve_auth() -> None:
    """``before_request`` hook storing the caller's auth context on ``g``."""

    if request.method == "OPTIONS":
        g.auth = Anonymous("missing")
        return
    g.auth = authenticate(request.headers.get("Authorization"), JWTTokenProvider())


def current_auth() -> AuthContext:
    """Return the auth context resolved for this request."""

    return g.get(AUTH_KEY) or Anonymous("missing")


def service_context() -> ServiceContext:
    return ServiceContext(request_id=ensure_request_id())


def auth_service() -> AuthService:
    return AuthService(token_provider=JWTTokenProvider(), ctx=service_context())


def post_commands() -> PostCommandService:
    return PostCommandService(hub=get_hub(), blobs=get_blob_store(), ctx=service_context())


def post_queries() -> PostQueryService:
    page_size = int(current_app.config.get("FEED_PAGE_SIZE", 2))
    return PostQueryService(page_size=page_size, ctx=service_context())


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
