"""
Service-level exceptions raised by adapters and repositories.

These exceptions are **framework-agnostic**: they never carry Flask or HTTP
concepts. Adapters (SQLAlchemy repositories, JWT codec, Redis stores) raise
them, and the services translate them into explicit
:class:`~authapi.services._shared.result.Failure` values before anything
reaches the API layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *, columns: Iterable[str] = ()) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the error message; SQLite only
    reports ``UNIQUE constraint failed: <table>.<column>``, so the qualified
    column names are accepted as a fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').
    columns : Iterable[str], optional
        Qualified column names (``"users.email"``) covered by the constraint.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else str(exc).lower()
    if constraint_name.lower() in message:
        return True
    return any(col.lower() in message for col in columns)


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They never leave the service layer; services convert them into
      ``Failure`` values.
    """


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class DuplicateEmailError(ServiceError):
    """
    Raised when the email unique constraint rejects an insert.

    :param email: Normalized email that collided.
    :type email: str
    """

    email: str

    def __str__(self) -> str:
        return "Email is already registered"


class StoreUnavailableError(ServiceError):
    """Raised when the database or the revocation store cannot be reached."""


class TokenDecodeError(ServiceError):
    """Raised by a token codec when a token is malformed or its signature is bad."""


class TokenExpiredError(ServiceError):
    """Raised by a token codec when a well-formed token is past its ``exp``."""
