import math
from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from authapi.services._shared.errors import StoreUnavailableError


def expire_at_or_after(expires_at: datetime) -> int:
    """Unix second for ``EXAT``: never before ``expires_at`` and always in the future."""
    now = datetime.now(UTC).timestamp()
    return max(math.ceil(expires_at.timestamp()), math.floor(now) + 1)


class RedisTokenDenylistStore:
    """
    Denylist for **access tokens** by jti.

    Each entry expires at (or just after) the token's own ``exp``, so Redis
    drops it once the token could no longer be presented anyway.
    """

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k(jti: str) -> str:
        return f"deny:at:{jti}"

    def is_revoked(self, jti: str) -> bool:
        try:
            return cast(int, self.r.exists(self._k(jti))) == 1
        except RedisError as exc:
            raise StoreUnavailableError("denylist lookup failed") from exc

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> bool:
        try:
            # SET NX: only the first revocation of a jti wins
            created = self.r.set(
                self._k(jti), "1", exat=expire_at_or_after(expires_at), nx=True
            )
        except RedisError as exc:
            raise StoreUnavailableError("denylist insert failed") from exc
        return bool(created)
