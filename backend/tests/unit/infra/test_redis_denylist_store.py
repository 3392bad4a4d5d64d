"""
Unit tests for RedisTokenDenylistStore using fakeredis.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import fakeredis
import pytest
from freezegun import freeze_time

from authapi.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from authapi.services._shared.errors import StoreUnavailableError


def _now() -> datetime:
    return datetime.now(UTC)


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    yield r
    r.flushall()


@pytest.fixture
def store(fake_redis) -> RedisTokenDenylistStore:
    return RedisTokenDenylistStore(fake_redis)


def test_revoke_is_insert_if_absent(store):
    expires_at = _now() + timedelta(minutes=5)

    assert store.revoke_jti(jti="jti-1", expires_at=expires_at) is True
    assert store.revoke_jti(jti="jti-1", expires_at=expires_at) is False
    assert store.is_revoked("jti-1") is True
    assert store.is_revoked("jti-2") is False


def test_entry_ttl_tracks_token_expiry(store, fake_redis):
    store.revoke_jti(jti="jti-ttl", expires_at=_now() + timedelta(seconds=120))

    ttl = fake_redis.ttl("deny:at:jti-ttl")
    assert 0 < ttl <= 121


def test_entry_outlives_token_for_fractional_revoke_time(store):
    with freeze_time("2026-03-01 12:00:00.900") as frozen:
        store.revoke_jti(jti="late", expires_at=datetime(2026, 3, 1, 13, 0, tzinfo=UTC))

        frozen.move_to("2026-03-01 12:59:59.950")
        assert store.is_revoked("late") is True

        frozen.move_to("2026-03-01 13:00:02")
        assert store.is_revoked("late") is False


def test_already_expired_token_gets_minimal_ttl(store):
    with freeze_time("2026-03-01 12:00:00.500") as frozen:
        store.revoke_jti(jti="old", expires_at=datetime(2026, 3, 1, 11, 59, tzinfo=UTC))
        assert store.is_revoked("old") is True

        frozen.move_to("2026-03-01 12:00:02")
        assert store.is_revoked("old") is False


def test_connection_errors_become_store_unavailable():
    server = fakeredis.FakeServer()
    server.connected = False
    store = RedisTokenDenylistStore(fakeredis.FakeRedis(server=server))

    with pytest.raises(StoreUnavailableError):
        store.is_revoked("jti-1")
    with pytest.raises(StoreUnavailableError):
        store.revoke_jti(jti="jti-1", expires_at=_now() + timedelta(minutes=1))
