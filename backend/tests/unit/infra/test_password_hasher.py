"""Unit tests for WerkzeugPasswordHasher."""

from __future__ import annotations

import pytest

from authapi.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


def test_hash_is_salted_and_verifiable(hasher):
    first = hasher.hash("secret123")
    second = hasher.hash("secret123")

    assert first != second  # random salt per hash
    assert first.startswith("pbkdf2:sha256:1000$")
    assert hasher.verify("secret123", first) is True
    assert hasher.verify("secret124", first) is False


def test_default_method_is_scrypt():
    digest = WerkzeugPasswordHasher().hash("secret123")
    assert digest.startswith("scrypt:")
    assert WerkzeugPasswordHasher().verify("secret123", digest) is True


@pytest.mark.parametrize(
    "digest",
    [
        "",
        "not-a-digest",
        "unknown-method$salt$abcdef",
        "pbkdf2:sha256:notanumber$salt$abcdef",
    ],
)
def test_verify_never_raises_on_malformed_digest(hasher, digest):
    assert hasher.verify("secret123", digest) is False
