"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from authapi.api.deps import envelope, get_auth_service, require_bearer, timing, unwrap
from authapi.schemas import LoginSchema, RegisterSchema, TokenResponseSchema, UserSchema
from authapi.services.auth import AuthSession, LoginIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()
token_schema = TokenResponseSchema()


def _token_body(auth_session: AuthSession) -> dict:
    return token_schema.dump(
        {
            "access_token": auth_session.access_token,
            "token_type": auth_session.token_type,
            "expires_in": auth_session.expires_in,
            "user": auth_session.user,
        }
    )


@bp.post("/register")
@timing
def register():
    """Register a new user and return its public representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    user = unwrap(get_auth_service().register(RegisterIn(**payload)))
    return envelope("User registered successfully", {"user": user_schema.dump(user)}, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access token."""

    payload = login_schema.load(request.get_json(silent=True) or {})
    auth_session = unwrap(get_auth_service().login(LoginIn(**payload)))
    return envelope("Login successful", _token_body(auth_session))


@bp.get("/me")
@require_bearer
@timing
def me(*, token: str):
    """Return the profile of the user owning the bearer token."""

    user = unwrap(get_auth_service().me(token))
    return envelope("User profile retrieved successfully", {"user": user_schema.dump(user)})


@bp.post("/logout")
@require_bearer
@timing
def logout(*, token: str):
    """Revoke the bearer token."""

    unwrap(get_auth_service().logout(token))
    return envelope("Successfully logged out")


@bp.post("/refresh")
@require_bearer
@timing
def refresh(*, token: str):
    """Exchange the bearer token for a new one; the old token stops working."""

    auth_session = unwrap(get_auth_service().refresh(token))
    return envelope("Token refreshed successfully", _token_body(auth_session))
