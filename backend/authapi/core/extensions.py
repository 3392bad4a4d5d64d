"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from dataclasses import dataclass

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from authapi.core.config import AuthSettings
from authapi.services._shared.ports import (
    ActiveSessionRegistry,
    InMemoryDenylistStore,
    InMemorySessionRegistry,
    PasswordHasher,
    TokenDenylistStore,
)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global extension objects (import-safe, bound per app in init_app)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

AUTH_EXTENSION_KEY = "authapi.auth"


@dataclass(frozen=True, slots=True)
class AuthComponents:
    """
    Per-app authentication collaborators, built once at startup.

    :ivar settings: Frozen auth settings.
    :ivar hasher: Password hasher configured with the cost parameters.
    :ivar denylist: Revocation record (Redis or in-memory).
    :ivar sessions: Active-session registry (Redis or in-memory).
    :ivar dummy_hash: Digest verified for unknown emails during login.
    """

    settings: AuthSettings
    hasher: PasswordHasher
    denylist: TokenDenylistStore
    sessions: ActiveSessionRegistry
    dummy_hash: str


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the auth collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`authapi.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    With ``REDIS_URL`` set, revocation state is shared through Redis and the
    connection is checked eagerly. Without it, development and testing fall
    back to thread-safe in-memory stores (single process only) and any other
    configuration refuses to start.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from authapi import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    app.extensions[AUTH_EXTENSION_KEY] = build_auth_components(app)


def build_auth_components(app: Flask) -> AuthComponents:
    """Build the auth collaborators for ``app`` from its config."""
    from authapi.infra.redis.redis_denylist_store import RedisTokenDenylistStore
    from authapi.infra.redis.redis_session_registry import RedisSessionRegistry
    from authapi.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher

    settings = AuthSettings.from_mapping(app.config)
    hasher = WerkzeugPasswordHasher(method=settings.password_hash_method)

    denylist: TokenDenylistStore
    sessions: ActiveSessionRegistry
    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        client = redis.Redis.from_url(redis_url)
        try:
            client.ping()
        except RedisError as exc:
            raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
        app.extensions["redis_client"] = client
        denylist = RedisTokenDenylistStore(client)
        sessions = RedisSessionRegistry(client)
    elif not (app.config.get("TESTING") or app.config.get("DEBUG")):
        raise RuntimeError(
            "REDIS_URL is required outside development and testing: "
            "revocation state must be shared by every worker."
        )
    else:
        app.extensions.pop("redis_client", None)
        denylist = InMemoryDenylistStore()
        sessions = InMemorySessionRegistry()

    return AuthComponents(
        settings=settings,
        hasher=hasher,
        denylist=denylist,
        sessions=sessions,
        dummy_hash=hasher.hash("authapi-dummy-password"),
    )


def get_auth_components(app: Flask | None = None) -> AuthComponents:
    """Return the auth collaborators bound to ``app`` (default: current app)."""
    target = app or current_app
    try:
        return target.extensions[AUTH_EXTENSION_KEY]
    except KeyError as exc:
        raise RuntimeError("Auth components are not initialized. Call init_app() first.") from exc
