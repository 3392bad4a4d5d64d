# authapi/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param name: Display name.
    :type name: str
    :param email: Email address (normalized by the model).
    :type email: str
    :param password: Raw password (hashed before it reaches the store).
    :type password: str
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class PublicUser:
    """
    User as exposed outside the service layer. Carries no password hash.

    :param id: User primary key.
    :param name: Display name.
    :param email: Normalized email.
    :param created_at: Creation timestamp.
    """

    id: int
    name: str
    email: str
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user: Any) -> PublicUser:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=getattr(user, "created_at", None),
        )


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    A freshly signed bearer token.

    :param token: Encoded JWT.
    :param jti: Unique token id (revocation key).
    :param expires_at: Natural expiry (UTC).
    :param expires_in: Lifetime in whole seconds at issue time.
    """

    token: str
    jti: str
    expires_at: datetime
    expires_in: int


@dataclass(frozen=True, slots=True)
class VerifiedToken:
    """
    Claims of a token that passed signature, expiry and revocation checks.

    :param user_id: Subject as an integer user id.
    :param jti: Unique token id.
    :param issued_at: ``iat`` of this token.
    :param expires_at: ``exp`` of this token.
    :param orig_iat: Issue time of the first token in the refresh chain.
    """

    user_id: int
    jti: str
    issued_at: datetime
    expires_at: datetime
    orig_iat: datetime


@dataclass(frozen=True, slots=True)
class AuthSession:
    """
    Result of login/refresh: the token envelope plus the public user.

    :param access_token: Encoded JWT.
    :param expires_in: Lifetime in seconds.
    :param user: Authenticated user.
    :param token_type: Always ``"bearer"``.
    """

    access_token: str
    expires_in: int
    user: PublicUser
    token_type: str = "bearer"
