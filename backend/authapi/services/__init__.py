"""Service layer public API.

This package root stays import-light: adapters and repositories import
``authapi.services._shared`` modules, so the root must not pull in the
use-case modules (which import those repositories back).

Re-exports
----------
- Outcome values (from ``authapi.services._shared.result``)
    * :class:`Ok`, :class:`Failure`, :class:`AuthErrorKind`, ``Result``

Use-cases live in :mod:`authapi.services.auth`
(:class:`~authapi.services.auth.AuthService`,
:class:`~authapi.services.auth.TokenService` and their DTOs).
"""

from __future__ import annotations

from ._shared.result import AuthErrorKind, Failure, Ok, Result

__all__ = [
    "AuthErrorKind",
    "Failure",
    "Ok",
    "Result",
]
