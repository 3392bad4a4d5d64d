# comments in English; reST docstrings
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from authapi.infra.redis.redis_denylist_store import expire_at_or_after
from authapi.services._shared.errors import StoreUnavailableError
from authapi.services._shared.ports import ActiveSession, ActiveSessionRegistry


@dataclass(slots=True)
class RedisSessionRegistry(ActiveSessionRegistry):
    """
    Redis-backed registry of the active token per user.

    Value layout: ``"<jti>|<exp_ts>"`` under ``sess:u:<user_id>``, expiring
    together with the token it points to.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    @staticmethod
    def _ku(user_id: str) -> str:
        return f"sess:u:{user_id}"

    @staticmethod
    def _decode(raw: bytes | str | None) -> ActiveSession | None:
        if raw is None:
            return None
        text = raw.decode() if isinstance(raw, bytes | bytearray) else str(raw)
        jti, _, exp = text.partition("|")
        if not jti or not exp.isdigit():
            return None
        return ActiveSession(jti=jti, expires_at=datetime.fromtimestamp(int(exp), tz=UTC))

    def swap(self, *, user_id: str, jti: str, expires_at: datetime) -> ActiveSession | None:
        now = datetime.now(UTC)
        exp_ts = math.ceil(expires_at.timestamp())
        try:
            # SET ... GET EXAT: read-and-replace plus expiry in one command
            previous_raw = self.r.set(
                self._ku(user_id),
                f"{jti}|{exp_ts}",
                get=True,
                exat=expire_at_or_after(expires_at),
            )
        except RedisError as exc:
            raise StoreUnavailableError("session registry swap failed") from exc

        previous = self._decode(previous_raw)
        if previous is None or previous.expires_at <= now:
            return None
        return previous
