from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Protocol


class TokenDenylistStore(Protocol):
    """
    Abstraction for a denylist of revoked **access tokens** keyed by jti.

    Entries only need to live until the token would have expired naturally,
    which keeps the set bounded.
    """

    def is_revoked(self, jti: str) -> bool: ...

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> bool:
        """
        Insert ``jti`` if absent (atomic).

        :returns: ``True`` if this call inserted the entry, ``False`` if the
            jti was already revoked.
        """
        ...


class InMemoryDenylistStore(TokenDenylistStore):
    """
    Process-local denylist for **access** tokens by JTI.

    .. note::
       Only shared between threads of one process. Multi-worker deployments
       need the Redis store.
    """

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def _purge(self, now: datetime) -> None:
        # caller holds the lock
        expired = [jti for jti, exp in self._revoked.items() if exp <= now]
        for jti in expired:
            del self._revoked[jti]

    def is_revoked(self, jti: str) -> bool:
        now = datetime.now(UTC)
        with self._lock:
            exp = self._revoked.get(jti)
            return exp is not None and exp > now

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> bool:
        now = datetime.now(UTC)
        with self._lock:
            self._purge(now)
            if jti in self._revoked:
                return False
            self._revoked[jti] = expires_at
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._revoked)
