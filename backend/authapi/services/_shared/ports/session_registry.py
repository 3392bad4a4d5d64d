from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ActiveSession:
    """
    The token currently considered active for a user.

    :ivar jti: Token identifier.
    :ivar expires_at: Natural expiry of that token (UTC).
    """

    jti: str
    expires_at: datetime


class ActiveSessionRegistry(Protocol):
    """
    Tracks the single active token per user (single-session mode).

    The swap MUST be atomic so two concurrent logins cannot both believe they
    replaced the same predecessor.
    """

    def swap(self, *, user_id: str, jti: str, expires_at: datetime) -> ActiveSession | None:
        """
        Record ``jti`` as the active token of ``user_id``.

        :returns: The previously active session, if any and not yet expired.
        """
        ...


class InMemorySessionRegistry(ActiveSessionRegistry):
    """Thread-safe, process-local registry."""

    def __init__(self) -> None:
        self._by_user: dict[str, ActiveSession] = {}
        self._lock = threading.Lock()

    def swap(self, *, user_id: str, jti: str, expires_at: datetime) -> ActiveSession | None:
        with self._lock:
            previous = self._by_user.get(user_id)
            self._by_user[user_id] = ActiveSession(jti=jti, expires_at=expires_at)
        if previous is None or previous.expires_at <= datetime.now(UTC):
            return None
        return previous
