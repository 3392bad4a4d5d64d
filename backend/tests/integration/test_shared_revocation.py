"""Two application processes sharing one Redis see each other's logouts."""

from __future__ import annotations

import fakeredis
import pytest

from authapi.core.config import ProductionConfig
from authapi.core.extensions import db as _db
from authapi.factory import create_app
from tests.helpers.assertions import assert_problem
from tests.helpers.http import auth_url, json_headers


@pytest.fixture()
def worker_pair(tmp_path, monkeypatch):
    """Two production apps on one SQLite file and one (fake) Redis server."""
    server = fakeredis.FakeServer()
    monkeypatch.setattr(
        "authapi.core.extensions.redis.Redis.from_url",
        lambda url, **kwargs: fakeredis.FakeRedis(server=server),
    )

    class WorkerConfig(ProductionConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'shared.db'}"
        JWT_SECRET_KEY = "production-like-secret-key-with-enough-bytes"
        PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
        REDIS_URL = "redis://shared:6379/0"
        USE_PROXYFIX = False

    first = create_app(WorkerConfig, instance_relative_config=False)
    second = create_app(WorkerConfig, instance_relative_config=False)
    with first.app_context():
        _db.create_all()
    yield first, second
    with first.app_context():
        _db.drop_all()


def test_logout_on_one_worker_is_seen_by_another(worker_pair):
    first, second = worker_pair
    a, b = first.test_client(), second.test_client()
    credentials = {"email": "jane@example.com", "password": "secret123"}

    assert a.post(auth_url("register"), json={"name": "Jane", **credentials}).status_code == 201
    token = a.post(auth_url("login"), json=credentials).get_json()["data"]["access_token"]
    assert b.get(auth_url("me"), headers=json_headers(token)).status_code == 200

    assert a.post(auth_url("logout"), headers=json_headers(token)).status_code == 200

    assert_problem(b.get(auth_url("me"), headers=json_headers(token)), 401, "unauthorized")
