"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``.

    Blank or non-numeric values are ignored rather than crashing startup.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val.strip())
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development placeholder.
    JWT_SECRET_KEY: str
        HMAC key used by ``flask-jwt-extended`` to sign bearer tokens.
    JWT_ALGORITHM: str
        Signing algorithm (``HS256``).
    JWT_TTL_SECONDS: int
        Lifetime of an issued token. ``expires_in`` in responses.
    JWT_REFRESH_WINDOW_SECONDS: int
        Absolute window, measured from the original login, during which a
        token chain may keep being refreshed.
    AUTH_SINGLE_SESSION: bool
        When ``True`` a new login or refresh supersedes the user's previous
        token, so at most one token per user is active.
    PASSWORD_HASH_METHOD: str
        Werkzeug hashing method string, which carries the cost parameters
        (e.g. ``scrypt:32768:8:1`` or ``pbkdf2:sha256:600000``).
    REDIS_URL: str | None
        Revocation store backend. Required unless DEBUG or TESTING is set;
        those fall back to an in-memory store when it is unset.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_TTL_SECONDS = env_int("JWT_TTL_SECONDS", 3600)
    JWT_REFRESH_WINDOW_SECONDS = env_int("JWT_REFRESH_WINDOW_SECONDS", 14 * 24 * 3600)
    AUTH_SINGLE_SESSION = env_bool("AUTH_SINGLE_SESSION", True)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Revocation store
    REDIS_URL = os.getenv("REDIS_URL") or None

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never talks to Redis; the in-memory revocation store is used.
    - Uses a cheap hash method so suites stay fast.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "testing-secret-key-with-enough-bytes-for-hs256"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    REDIS_URL = None
    USE_PROXYFIX = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control. ``REDIS_URL`` must be set: the app
    refuses to start with per-process revocation state.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None = None) -> type[BaseConfig]:
    """Return the configuration class for ``name`` or inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when the name is unknown.
    """
    selected = (name or os.getenv(ENV_VAR, "development")).strip().lower()
    return CONFIG_MAP.get(selected, DevelopmentConfig)


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """
    Immutable snapshot of the authentication settings.

    Built once by the application factory; services receive it explicitly.

    :param token_ttl_seconds: Lifetime of every issued token.
    :type token_ttl_seconds: int
    :param refresh_window_seconds: Absolute refresh eligibility window.
    :type refresh_window_seconds: int
    :param single_session: Supersede older tokens on issue.
    :type single_session: bool
    :param password_hash_method: Werkzeug method string (cost parameters).
    :type password_hash_method: str
    """

    token_ttl_seconds: int
    refresh_window_seconds: int
    single_session: bool
    password_hash_method: str

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthSettings:
        """Build settings from a Flask config mapping, validating bounds."""
        ttl = int(config.get("JWT_TTL_SECONDS", 3600))
        window = int(config.get("JWT_REFRESH_WINDOW_SECONDS", 14 * 24 * 3600))
        if ttl <= 0:
            raise ValueError("JWT_TTL_SECONDS must be positive.")
        if window < ttl:
            raise ValueError("JWT_REFRESH_WINDOW_SECONDS must be >= JWT_TTL_SECONDS.")
        return cls(
            token_ttl_seconds=ttl,
            refresh_window_seconds=window,
            single_session=bool(config.get("AUTH_SINGLE_SESSION", True)),
            password_hash_method=str(config.get("PASSWORD_HASH_METHOD", "scrypt")),
        )
