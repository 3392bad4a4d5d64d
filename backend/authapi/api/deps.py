"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from authapi.core.errors import Unauthorized, from_failure
from authapi.core.extensions import get_auth_components
from authapi.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from authapi.services._shared.result import Failure, Result
from authapi.services.auth import AuthService, TokenService

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")

BEARER_SCHEME = "bearer"
MISSING_TOKEN_MESSAGE = "Missing or malformed bearer token"


def get_token_service() -> TokenService:
    """Build a :class:`TokenService` from the collaborators of the current app."""

    components = get_auth_components()
    return TokenService(
        provider=JWTTokenProvider(),
        denylist=components.denylist,
        settings=components.settings,
        sessions=components.sessions,
    )


def get_auth_service() -> AuthService:
    """Build an :class:`AuthService` with its dependencies injected explicitly."""

    components = get_auth_components()
    return AuthService(
        tokens=get_token_service(),
        hasher=components.hasher,
        dummy_hash=components.dummy_hash,
    )


def bearer_token_from_header(header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""

    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        return None
    return token


def require_bearer(func: F) -> F:
    """Pass the request's bearer token to the view as the ``token`` keyword.

    Only the header is parsed here; the token itself is verified by the
    service the view calls.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = bearer_token_from_header(request.headers.get("Authorization"))
        if token is None:
            raise Unauthorized(MISSING_TOKEN_MESSAGE)
        return func(*args, token=token, **kwargs)

    return wrapper  # type: ignore[return-value]


def unwrap(result: Result[T]) -> T:
    """Return the value of ``Ok`` or raise the :class:`APIError` matching a failure."""

    if isinstance(result, Failure):
        raise from_failure(result)
    return result.value


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def envelope(message: str, data: Any = None, *, status: int = 200) -> Response:
    """Return the ``{"message", "data"}`` success envelope."""

    return json_response({"message": message, "data": data}, status=status)


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
