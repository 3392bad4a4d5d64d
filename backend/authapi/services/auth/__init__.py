"""Authentication use-cases and token lifecycle."""

from .dto import AuthSession, IssuedToken, LoginIn, PublicUser, RegisterIn, VerifiedToken
from .service import AuthService
from .token_service import TokenService

__all__ = [
    "AuthService",
    "AuthSession",
    "IssuedToken",
    "LoginIn",
    "PublicUser",
    "RegisterIn",
    "TokenService",
    "VerifiedToken",
]
