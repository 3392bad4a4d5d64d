"""User model: the single identity record behind authentication."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from authapi.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"

# Plaintext password bounds, checked before hashing.
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


def normalize_email(value: str) -> str:
    """Lowercase and trim an email so lookups are case-insensitive."""
    return value.strip().lower()


def password_length_error(password: object) -> str | None:
    """Return why ``password`` violates the length bounds, or ``None``."""
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        return f"Shorter than minimum length {PASSWORD_MIN_LENGTH}."
    if len(password) > PASSWORD_MAX_LENGTH:
        return f"Longer than maximum length {PASSWORD_MAX_LENGTH}."
    return None


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account.

    Fields
    ------
    name : str
        Display name.
    email : str
        Login email. Stored normalized (lowercase, trimmed) and unique.
    password_hash : str
        Digest produced by the password hasher. Never serialized.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # The unique constraint is the race-safe guard for concurrent sign-ups.
    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = normalize_email(value)
        # Minimal sanity check; full validation happens at API layer.
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()

    @validates("password_hash")
    def _require_hash(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value:
            raise ValueError("Password hash is required.")
        return value
