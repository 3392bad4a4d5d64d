# authapi/services/auth/service.py
from __future__ import annotations

import logging
import secrets

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from authapi.models.user import password_length_error
from authapi.services._shared.base import BaseService
from authapi.services._shared.errors import DuplicateEmailError
from authapi.services._shared.ports import PasswordHasher
from authapi.services._shared.result import (
    DUPLICATE_EMAIL_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    AuthErrorKind,
    Failure,
    Ok,
    Result,
    store_failure,
    token_failure,
)
from authapi.services.auth.dto import (
    AuthSession,
    IssuedToken,
    LoginIn,
    PublicUser,
    RegisterIn,
)
from authapi.services.auth.token_service import TokenService

log = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validation failed"


class AuthService(BaseService):
    """
    Authentication use-cases: register, login, me, logout and refresh.

    Every operation takes its inputs (credentials or the bearer token)
    explicitly and returns :class:`Ok` or :class:`Failure`; no operation
    reads a "current user" from request state.

    :param tokens: Token service (issue/verify/rotate/revoke).
    :param hasher: Password hasher.
    :param dummy_hash: Digest verified when the email is unknown so both
        login failures cost the same. Computed lazily when omitted.
    :param session: Optional explicit SQLAlchemy session.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        hasher: PasswordHasher,
        dummy_hash: str | None = None,
        session: Session | None = None,
    ) -> None:
        super().__init__(session=session)
        self.tokens = tokens
        self.hasher = hasher
        self._dummy_hash = dummy_hash

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> Result[PublicUser]:
        """
        Create an account.

        :returns: The public user, ``DUPLICATE_EMAIL`` when the email is taken
            or ``VALIDATION_ERROR`` when a field is rejected.
        """
        password_error = password_length_error(dto.password)
        if password_error is not None:
            return Failure(
                kind=AuthErrorKind.VALIDATION_ERROR,
                message=VALIDATION_MESSAGE,
                reason="password_length",
                details={"errors": {"password": [password_error]}},
            )

        password_hash = self.hasher.hash(dto.password)
        try:
            with self.rw_uow() as uow:
                user = uow.users.create_user(
                    name=dto.name, email=dto.email, password_hash=password_hash
                )
                public = PublicUser.from_model(user)
        except DuplicateEmailError:
            log.info(
                "registration rejected",
                extra={"event": "auth.register.failed", "reason": "duplicate_email"},
            )
            return Failure(
                kind=AuthErrorKind.DUPLICATE_EMAIL,
                message=DUPLICATE_EMAIL_MESSAGE,
                reason="duplicate_email",
            )
        except ValueError as exc:
            return Failure(
                kind=AuthErrorKind.VALIDATION_ERROR,
                message=VALIDATION_MESSAGE,
                reason="model_validation",
                details={"errors": {"_schema": [str(exc)]}},
            )
        except OperationalError:
            log.exception("database unavailable during registration")
            return store_failure("database_unavailable")

        log.info(
            "user registered",
            extra={"event": "auth.register.succeeded", "user_id": public.id},
        )
        return Ok(public)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> Result[AuthSession]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password produce the same failure; only the
        log record tells them apart.
        """
        try:
            with self.ro_uow() as uow:
                user = uow.users.find_by_email(dto.email)
                public = PublicUser.from_model(user) if user is not None else None
                stored_hash = user.password_hash if user is not None else None
        except OperationalError:
            log.exception("database unavailable during login")
            return store_failure("database_unavailable")

        if public is None or stored_hash is None:
            # burn the same hashing cost as a real check
            self.hasher.verify(dto.password, self.dummy_hash)
            return self._invalid_credentials(reason="unknown_email")

        if not self.hasher.verify(dto.password, stored_hash):
            return self._invalid_credentials(reason="bad_password", user_id=public.id)

        issued = self.tokens.issue(public.id)
        if isinstance(issued, Failure):
            return issued

        log.info("login succeeded", extra={"event": "auth.login.succeeded", "user_id": public.id})
        return Ok(self._session_for(issued.value, public))

    # ------------------------------------------------------------------ #
    # Me
    # ------------------------------------------------------------------ #

    def me(self, token: str) -> Result[PublicUser]:
        """Resolve the user a bearer token belongs to."""
        verified = self.tokens.verify(token)
        if isinstance(verified, Failure):
            return self._log_token_failure("auth.me.failed", verified)
        user = self._load_user(verified.value.user_id)
        if isinstance(user, Failure):
            return self._log_token_failure("auth.me.failed", user)
        return user

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, token: str) -> Result[None]:
        """Revoke a valid token until its natural expiry."""
        verified = self.tokens.verify(token)
        if isinstance(verified, Failure):
            return self._log_token_failure("auth.logout.failed", verified)
        revoked = self.tokens.revoke_verified(verified.value)
        if isinstance(revoked, Failure):
            return self._log_token_failure("auth.logout.failed", revoked)
        log.info(
            "logout succeeded",
            extra={"event": "auth.logout.succeeded", "user_id": verified.value.user_id},
        )
        return revoked

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, token: str) -> Result[AuthSession]:
        """
        Exchange a valid token for a new one; the presented token is revoked.

        The user is loaded before rotation so a deleted account cannot keep
        refreshing.
        """
        verified = self.tokens.verify(token)
        if isinstance(verified, Failure):
            return self._log_token_failure("auth.refresh.failed", verified)
        user = self._load_user(verified.value.user_id)
        if isinstance(user, Failure):
            return self._log_token_failure("auth.refresh.failed", user)
        issued = self.tokens.rotate(verified.value)
        if isinstance(issued, Failure):
            return self._log_token_failure("auth.refresh.failed", issued)
        log.info(
            "token refreshed",
            extra={"event": "auth.refresh.succeeded", "user_id": user.value.id},
        )
        return Ok(self._session_for(issued.value, user.value))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @property
    def dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    def _load_user(self, user_id: int) -> Result[PublicUser]:
        try:
            with self.ro_uow() as uow:
                user = uow.users.find_by_id(user_id)
                if user is None:
                    return token_failure(AuthErrorKind.TOKEN_INVALID, "user_not_found")
                return Ok(PublicUser.from_model(user))
        except OperationalError:
            log.exception("database unavailable while loading user")
            return store_failure("database_unavailable")

    @staticmethod
    def _session_for(issued: IssuedToken, user: PublicUser) -> AuthSession:
        return AuthSession(access_token=issued.token, expires_in=issued.expires_in, user=user)

    @staticmethod
    def _invalid_credentials(*, reason: str, user_id: int | None = None) -> Failure:
        log.info(
            "login failed",
            extra={"event": "auth.login.failed", "reason": reason, "user_id": user_id},
        )
        return Failure(
            kind=AuthErrorKind.INVALID_CREDENTIALS,
            message=INVALID_CREDENTIALS_MESSAGE,
            reason=reason,
        )

    @staticmethod
    def _log_token_failure(event: str, failure: Failure) -> Failure:
        level = (
            logging.WARNING if failure.kind is AuthErrorKind.STORE_UNAVAILABLE else logging.INFO
        )
        log.log(level, "token rejected", extra={"event": event, "reason": failure.reason})
        return failure
