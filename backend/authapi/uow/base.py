"""
Abstract Unit of Work contract shared by the auth use-cases.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from authapi.repositories import UserRepository


class UnitOfWork(ABC):
    """
    Transactional boundary for one use-case.

    Concrete implementations expose ``users`` bound to the same session and
    commit on success, roll back on error.
    """

    users: UserRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
