"""Repository package exposing persistence-layer access for domain models."""

from __future__ import annotations

from authapi.repositories.base import BaseRepository
from authapi.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
