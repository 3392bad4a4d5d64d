from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """
    Port for encoding and decoding signed bearer tokens.

    Implementations raise :class:`~authapi.services._shared.errors.TokenExpiredError`
    for expired tokens and :class:`~authapi.services._shared.errors.TokenDecodeError`
    for anything else that fails verification. Library exceptions must not leak.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...
