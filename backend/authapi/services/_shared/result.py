"""
Explicit outcome values returned by the authentication services.

Every public service operation returns either :class:`Ok` wrapping the value
or :class:`Failure` carrying an :class:`AuthErrorKind`. Callers branch on
``isinstance(result, Failure)`` and ``result.kind``; nothing is raised across
the service boundary for expected outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class AuthErrorKind(Enum):
    """Closed set of failures an auth operation can report."""

    VALIDATION_ERROR = "validation_error"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    STORE_UNAVAILABLE = "store_unavailable"

    @property
    def is_unauthorized(self) -> bool:
        """``True`` for kinds surfaced to clients as 401."""
        return self in _UNAUTHORIZED_KINDS


_UNAUTHORIZED_KINDS = frozenset(
    {
        AuthErrorKind.INVALID_CREDENTIALS,
        AuthErrorKind.TOKEN_EXPIRED,
        AuthErrorKind.TOKEN_INVALID,
    }
)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful outcome.

    :param value: Operation payload.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """
    Failed outcome.

    :param kind: Failure category.
    :type kind: AuthErrorKind
    :param message: Client-safe message.
    :type message: str
    :param reason: Internal detail for logs only (e.g. ``"revoked"``).
    :type reason: str | None
    :param details: Optional structured client-safe details (field errors).
    :type details: dict[str, Any]
    """

    kind: AuthErrorKind
    message: str
    reason: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


Result = Ok[T] | Failure

# Client-facing messages. Token failures share one message on purpose.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"
DUPLICATE_EMAIL_MESSAGE = "Email is already registered"
STORE_UNAVAILABLE_MESSAGE = "Service temporarily unavailable"


def token_failure(kind: AuthErrorKind, reason: str) -> Failure:
    """Build a token failure with the shared client message."""
    return Failure(kind=kind, message=INVALID_TOKEN_MESSAGE, reason=reason)


def store_failure(reason: str) -> Failure:
    """Build a ``STORE_UNAVAILABLE`` failure."""
    return Failure(
        kind=AuthErrorKind.STORE_UNAVAILABLE,
        message=STORE_UNAVAILABLE_MESSAGE,
        reason=reason,
    )
