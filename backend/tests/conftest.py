"""Pytest fixtures: a fresh application and in-memory database per test.

Each test gets its own app, so the in-memory revocation store and the
session registry never leak between cases either.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from authapi.core.config import TestingConfig
from authapi.core.extensions import db as _db
from authapi.core.extensions import get_auth_components
from authapi.factory import create_app
from authapi.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from authapi.services.auth import AuthService, TokenService


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied, its app context
        pushed and all tables created.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("TEST_DATABASE_URL", None)
    application = create_app(TestingConfig)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app: Flask) -> Any:
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db: Any) -> Any:
    """Flask-scoped SQLAlchemy session of the current app context."""
    return db.session


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def runner(app: Flask):
    return app.test_cli_runner()


@pytest.fixture()
def components(app: Flask):
    """Auth collaborators built by the application factory."""
    return get_auth_components(app)


@pytest.fixture()
def token_service(components) -> TokenService:
    return TokenService(
        provider=JWTTokenProvider(),
        denylist=components.denylist,
        settings=components.settings,
        sessions=components.sessions,
    )


@pytest.fixture()
def auth_service(components, token_service) -> AuthService:
    return AuthService(
        tokens=token_service,
        hasher=components.hasher,
        dummy_hash=components.dummy_hash,
    )


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the Flask-scoped session ---------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when a test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(_db.session)
    yield
    SQLAlchemySession.set(None)
