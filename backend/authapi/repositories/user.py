"""User repository: the credential store behind authentication."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from authapi.models.user import EMAIL_UNIQUE_CONSTRAINT, User, normalize_email
from authapi.repositories.base import BaseRepository
from authapi.services._shared.errors import DuplicateEmailError, violates


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It stores and looks up users; it never hashes passwords or touches
    tokens.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def find_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_id(self, user_id: int) -> User | None:
        """Fetch a user by primary key."""
        return self.get(user_id)

    # ---------------------------- Mutations ----------------------------

    def create_user(self, *, name: str, email: str, password_hash: str) -> User:
        """Insert a user and flush so the unique constraint is checked now.

        No read-before-write: the unique constraint alone rejects a second
        row for the same email, concurrent inserts included.

        :raises DuplicateEmailError: When ``uq_users_email`` rejects the row.
        :raises ValueError: When model validation rejects a field.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        try:
            return self.add(user)
        except IntegrityError as exc:
            if violates(exc, EMAIL_UNIQUE_CONSTRAINT, columns=("users.email",)):
                raise DuplicateEmailError(user.email) from exc
            raise
