# tests/unit/services/test_auth_service.py
from __future__ import annotations

import logging

import pytest
from sqlalchemy.exc import OperationalError

from authapi.models import User
from authapi.repositories.user import UserRepository
from authapi.services._shared.result import (
    DUPLICATE_EMAIL_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_TOKEN_MESSAGE,
    AuthErrorKind,
    Failure,
    Ok,
)
from authapi.services.auth import AuthService, AuthSession, LoginIn, PublicUser, RegisterIn
from tests.factories.user import DEFAULT_PASSWORD, UserFactory

SERVICE_LOGGER = "authapi.services.auth.service"


class _SpyHasher:
    """Wrap a real hasher and record which digests were verified."""

    def __init__(self, inner):
        self.inner = inner
        self.verified: list[str] = []

    def hash(self, password):
        return self.inner.hash(password)

    def verify(self, password, hashed):
        self.verified.append(hashed)
        return self.inner.verify(password, hashed)


def _login(service: AuthService, email: str, password: str = DEFAULT_PASSWORD) -> AuthSession:
    result = service.login(LoginIn(email=email, password=password))
    assert isinstance(result, Ok), result
    return result.value


# ------------------------------ Register ---------------------------------- #
def test_register_returns_public_user(auth_service, session):
    result = auth_service.register(
        RegisterIn(name="Jane", email="Jane@X.com", password="secret123")
    )

    assert isinstance(result, Ok)
    user = result.value
    assert isinstance(user, PublicUser)
    assert user.id is not None
    assert user.email == "jane@x.com"
    assert not hasattr(user, "password_hash")

    stored = session.get(User, user.id)
    assert stored.password_hash != "secret123"


def test_register_duplicate_email_leaves_single_row(auth_service, session):
    first = auth_service.register(RegisterIn(name="A", email="dup@x.com", password="secret123"))
    second = auth_service.register(RegisterIn(name="B", email="DUP@x.com", password="secret456"))

    assert isinstance(first, Ok)
    assert isinstance(second, Failure)
    assert second.kind is AuthErrorKind.DUPLICATE_EMAIL
    assert second.message == DUPLICATE_EMAIL_MESSAGE
    assert session.query(User).filter_by(email="dup@x.com").count() == 1


def test_register_short_password_is_validation_error(auth_service, session):
    result = auth_service.register(RegisterIn(name="A", email="a@x.com", password="short"))

    assert isinstance(result, Failure)
    assert result.kind is AuthErrorKind.VALIDATION_ERROR
    assert "password" in result.details["errors"]
    assert session.query(User).count() == 0


def test_register_overlong_password_is_validation_error(auth_service, session):
    result = auth_service.register(RegisterIn(name="A", email="a@x.com", password="p" * 10_000))

    assert isinstance(result, Failure)
    assert result.kind is AuthErrorKind.VALIDATION_ERROR
    assert result.details["errors"]["password"] == ["Longer than maximum length 128."]
    assert session.query(User).count() == 0


def test_register_malformed_email_is_validation_error(auth_service, session):
    result = auth_service.register(RegisterIn(name="A", email="nope", password="secret123"))

    assert isinstance(result, Failure)
    assert result.kind is AuthErrorKind.VALIDATION_ERROR
    assert session.query(User).count() == 0


# -------------------------------- Login ----------------------------------- #
def test_login_issues_token_for_user(auth_service, token_service):
    user = UserFactory(email="a@x.com")

    auth = _login(auth_service, "A@X.com")

    assert auth.token_type == "bearer"
    assert auth.expires_in == 3600
    assert auth.user.id == user.id
    verified = token_service.verify(auth.access_token)
    assert isinstance(verified, Ok)
    assert verified.value.user_id == user.id


def test_login_failures_are_indistinguishable(auth_service, caplog):
    UserFactory(email="a@x.com")
    caplog.set_level(logging.INFO, logger=SERVICE_LOGGER)

    wrong_password = auth_service.login(LoginIn(email="a@x.com", password="wrong-pass"))
    unknown_email = auth_service.login(LoginIn(email="b@x.com", password=DEFAULT_PASSWORD))

    assert isinstance(wrong_password, Failure)
    assert isinstance(unknown_email, Failure)
    assert wrong_password.kind is unknown_email.kind is AuthErrorKind.INVALID_CREDENTIALS
    assert wrong_password.message == unknown_email.message == INVALID_CREDENTIALS_MESSAGE
    assert wrong_password.details == unknown_email.details == {}

    reasons = [r.reason for r in caplog.records if getattr(r, "event", "") == "auth.login.failed"]
    assert reasons == ["bad_password", "unknown_email"]


def test_login_unknown_email_still_verifies_a_hash(components, token_service):
    spy = _SpyHasher(components.hasher)
    service = AuthService(tokens=token_service, hasher=spy, dummy_hash=components.dummy_hash)

    service.login(LoginIn(email="ghost@x.com", password="whatever1"))

    assert spy.verified == [components.dummy_hash]


def test_login_database_down_is_store_unavailable(auth_service, monkeypatch):
    def _boom(self, email):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    monkeypatch.setattr(UserRepository, "find_by_email", _boom)

    result = auth_service.login(LoginIn(email="a@x.com", password="secret123"))
    assert isinstance(result, Failure)
    assert result.kind is AuthErrorKind.STORE_UNAVAILABLE


# --------------------------------- Me ------------------------------------- #
def test_me_returns_profile(auth_service):
    user = UserFactory(name="Jane", email="jane@x.com")
    token = _login(auth_service, "jane@x.com").access_token

    result = auth_service.me(token)

    assert isinstance(result, Ok)
    assert result.value.id == user.id
    assert result.value.name == "Jane"


def test_me_for_deleted_user_is_unauthorized(auth_service, session):
    user = UserFactory(email="gone@x.com")
    token = _login(auth_service, "gone@x.com").access_token
    session.delete(session.get(User, user.id))
    session.commit()

    result = auth_service.me(token)

    assert isinstance(result, Failure)
    assert result.kind.is_unauthorized
    assert result.message == INVALID_TOKEN_MESSAGE


# ------------------------------- Logout ----------------------------------- #
def test_logout_invalidates_token(auth_service):
    UserFactory(email="a@x.com")
    token = _login(auth_service, "a@x.com").access_token

    assert isinstance(auth_service.logout(token), Ok)

    after = auth_service.me(token)
    assert isinstance(after, Failure)
    assert after.kind is AuthErrorKind.TOKEN_INVALID
    again = auth_service.logout(token)
    assert isinstance(again, Failure)
    assert again.kind.is_unauthorized


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_rotates_token(auth_service):
    user = UserFactory(email="a@x.com")
    old = _login(auth_service, "a@x.com").access_token

    refreshed = auth_service.refresh(old)
    assert isinstance(refreshed, Ok)
    assert refreshed.value.user.id == user.id
    assert refreshed.value.expires_in == 3600
    new = refreshed.value.access_token

    assert isinstance(auth_service.refresh(old), Failure)
    assert isinstance(auth_service.me(old), Failure)
    assert isinstance(auth_service.me(new), Ok)


def test_refresh_for_deleted_user_is_unauthorized(auth_service, token_service, session):
    user = UserFactory(email="gone@x.com")
    token = _login(auth_service, "gone@x.com").access_token
    session.delete(session.get(User, user.id))
    session.commit()

    result = auth_service.refresh(token)

    assert isinstance(result, Failure)
    assert result.kind.is_unauthorized
    # the presented token was not consumed by the failed refresh
    assert isinstance(token_service.verify(token), Ok)


@pytest.mark.parametrize("operation", ["me", "logout", "refresh"])
def test_token_operations_reject_garbage(auth_service, operation):
    result = getattr(auth_service, operation)("garbage")

    assert isinstance(result, Failure)
    assert result.kind is AuthErrorKind.TOKEN_INVALID
    assert result.message == INVALID_TOKEN_MESSAGE
