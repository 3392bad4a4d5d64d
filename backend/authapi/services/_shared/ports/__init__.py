"""
authapi.services._shared.ports
==============================

Collection of *ports* (hexagonal interfaces) that define the contracts
for password hashing, token encoding and token revocation.

These ports decouple the service layer from concrete implementations.

Modules
-------
- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: one-way hash + verify.

- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: abstraction for JWT creation and decoding.

- :mod:`denylist_store`:
    Defines :class:`~.TokenDenylistStore`: revoked-but-unexpired token ids.

- :mod:`session_registry`:
    Defines :class:`~.ActiveSessionRegistry`: the one active token per user
    when single-session mode is enabled.

Concrete adapters (Werkzeug, Flask-JWT-Extended, Redis) live under
``authapi.infra``; in-memory implementations live next to their port.
"""

from __future__ import annotations

from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .password_hasher import PasswordHasher
from .session_registry import ActiveSession, ActiveSessionRegistry, InMemorySessionRegistry
from .token_provider import TokenProvider

__all__ = [
    "ActiveSession",
    "ActiveSessionRegistry",
    "InMemoryDenylistStore",
    "InMemorySessionRegistry",
    "PasswordHasher",
    "TokenDenylistStore",
    "TokenProvider",
]
