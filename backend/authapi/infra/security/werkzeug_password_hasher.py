"""Password hashing strategies."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from authapi.services._shared.ports import PasswordHasher


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted one-way hashing through :mod:`werkzeug.security`.

    :param method: Werkzeug method string; carries the cost parameters
        (``"scrypt"`` is memory-hard and the Werkzeug default).
    """

    method: str = "scrypt"

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self.method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed or not isinstance(hashed, str):
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            # unknown method or malformed parameters in the stored digest
            return False
