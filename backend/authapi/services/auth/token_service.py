"""
Token lifecycle: issue, verify, refresh (rotate) and revoke bearer tokens.

Tokens are HS256 JWTs produced by an injected :class:`TokenProvider`. Every
token carries ``sub`` (user id as a string), ``iat``, ``exp``, ``jti``,
``type`` (``"access"``) and ``orig_iat``, the issue time of the first token of
a refresh chain. Revocation state lives in an injected
:class:`TokenDenylistStore` and is consulted on every verification.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from authapi.core.config import AuthSettings
from authapi.services._shared.errors import (
    StoreUnavailableError,
    TokenDecodeError,
    TokenExpiredError,
)
from authapi.services._shared.ports import (
    ActiveSessionRegistry,
    TokenDenylistStore,
    TokenProvider,
)
from authapi.services._shared.result import (
    AuthErrorKind,
    Failure,
    Ok,
    Result,
    store_failure,
    token_failure,
)
from authapi.services.auth.dto import IssuedToken, VerifiedToken

ACCESS_TOKEN_TYPE = "access"
ORIG_IAT_CLAIM = "orig_iat"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _timestamp(claims: dict[str, Any], key: str) -> datetime | None:
    value = claims.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return datetime.fromtimestamp(value, tz=UTC)


class TokenService:
    """
    Issue, verify, refresh and revoke bearer tokens.

    :param provider: JWT codec (signing and verification).
    :param denylist: Revocation record of ``jti`` values.
    :param settings: TTL, refresh window and session policy.
    :param sessions: Active-session registry, consulted only when
        ``settings.single_session`` is enabled.
    """

    def __init__(
        self,
        *,
        provider: TokenProvider,
        denylist: TokenDenylistStore,
        settings: AuthSettings,
        sessions: ActiveSessionRegistry | None = None,
    ) -> None:
        self.provider = provider
        self.denylist = denylist
        self.settings = settings
        self.sessions = sessions

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.settings.token_ttl_seconds)

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue(self, user_id: int, *, orig_iat: datetime | None = None) -> Result[IssuedToken]:
        """
        Sign a new token for ``user_id`` valid for the configured TTL.

        In single-session mode the previously active token of the user is
        revoked, so only the token returned here stays usable.

        :param user_id: Subject of the token.
        :param orig_iat: Start of the refresh chain; ``None`` starts a new one.
        :returns: ``Ok(IssuedToken)`` or a ``STORE_UNAVAILABLE`` failure.
        """
        now = _utcnow()
        jti = str(uuid4())
        expires_at = now + self.ttl
        chain_start = orig_iat or now
        token = self.provider.create_access_token(
            identity=str(user_id),
            additional_claims={"jti": jti, ORIG_IAT_CLAIM: int(chain_start.timestamp())},
            expires_delta=self.ttl,
        )

        if self.settings.single_session and self.sessions is not None:
            try:
                previous = self.sessions.swap(
                    user_id=str(user_id), jti=jti, expires_at=expires_at
                )
                if previous is not None and previous.jti != jti:
                    self.denylist.revoke_jti(jti=previous.jti, expires_at=previous.expires_at)
            except StoreUnavailableError:
                return store_failure("session_registry_unavailable")

        return Ok(
            IssuedToken(
                token=token,
                jti=jti,
                expires_at=expires_at,
                expires_in=self.settings.token_ttl_seconds,
            )
        )

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify(self, token: str) -> Result[VerifiedToken]:
        """
        Check signature, expiry, claims and revocation of ``token``.

        :returns: ``Ok(VerifiedToken)``; ``TOKEN_EXPIRED`` once ``now >= exp``;
            ``TOKEN_INVALID`` for anything malformed or revoked.
        """
        try:
            claims = self.provider.decode(token)
        except TokenExpiredError:
            return token_failure(AuthErrorKind.TOKEN_EXPIRED, "expired")
        except TokenDecodeError as exc:
            return token_failure(AuthErrorKind.TOKEN_INVALID, f"malformed:{exc}")

        if claims.get("type") != ACCESS_TOKEN_TYPE:
            return token_failure(AuthErrorKind.TOKEN_INVALID, "wrong_type")

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject.isdigit():
            return token_failure(AuthErrorKind.TOKEN_INVALID, "bad_subject")

        jti = claims.get("jti")
        issued_at = _timestamp(claims, "iat")
        expires_at = _timestamp(claims, "exp")
        if not isinstance(jti, str) or not jti or issued_at is None or expires_at is None:
            return token_failure(AuthErrorKind.TOKEN_INVALID, "missing_claims")
        orig_iat = _timestamp(claims, ORIG_IAT_CLAIM) or issued_at

        try:
            revoked = self.denylist.is_revoked(jti)
        except StoreUnavailableError:
            return store_failure("denylist_unavailable")
        if revoked:
            return token_failure(AuthErrorKind.TOKEN_INVALID, "revoked")

        return Ok(
            VerifiedToken(
                user_id=int(subject),
                jti=jti,
                issued_at=issued_at,
                expires_at=expires_at,
                orig_iat=orig_iat,
            )
        )

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, token: str) -> Result[IssuedToken]:
        """Verify ``token`` and rotate it. See :meth:`rotate`."""
        verified = self.verify(token)
        if isinstance(verified, Failure):
            return verified
        return self.rotate(verified.value)

    def rotate(self, verified: VerifiedToken) -> Result[IssuedToken]:
        """
        Supersede an already verified token with a new one.

        The old ``jti`` is revoked with insert-if-absent semantics: of two
        concurrent refreshes of the same token only the first one wins, the
        other gets ``TOKEN_INVALID``. A chain older than the refresh window
        fails with ``TOKEN_EXPIRED``.
        """
        window = timedelta(seconds=self.settings.refresh_window_seconds)
        if _utcnow() - verified.orig_iat >= window:
            return token_failure(AuthErrorKind.TOKEN_EXPIRED, "refresh_window_elapsed")

        try:
            won = self.denylist.revoke_jti(jti=verified.jti, expires_at=verified.expires_at)
        except StoreUnavailableError:
            return store_failure("denylist_unavailable")
        if not won:
            return token_failure(AuthErrorKind.TOKEN_INVALID, "refresh_replayed")

        return self.issue(verified.user_id, orig_iat=verified.orig_iat)

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(self, token: str) -> Result[None]:
        """Verify ``token`` and put its ``jti`` on the denylist until ``exp``."""
        verified = self.verify(token)
        if isinstance(verified, Failure):
            return verified
        return self.revoke_verified(verified.value)

    def revoke_verified(self, verified: VerifiedToken) -> Result[None]:
        try:
            won = self.denylist.revoke_jti(jti=verified.jti, expires_at=verified.expires_at)
        except StoreUnavailableError:
            return store_failure("denylist_unavailable")
        if not won:
            # a concurrent logout/refresh revoked it between verify and now
            return token_failure(AuthErrorKind.TOKEN_INVALID, "revoked")
        return Ok(None)
