"""Password hashing primitives."""

import pytest

from movie_catalog.auth.security import hash_password, verify_password


def test_hash_is_salted_and_not_plaintext():
    h1 = hash_password("Secret123!")
    h2 = hash_password("Secret123!")

    assert "Secret123!" not in h1
    assert h1 != h2
    assert h1.startswith("$pbkdf2-sha256$")


def test_verify_password_roundtrip():
    h = hash_password("Secret123!")

    assert verify_password("Secret123!", h) is True
    assert verify_password("secret123!", h) is False
    assert verify_password("wrong", h) is False


def test_verify_password_blank_or_garbage_hash():
    assert verify_password("", hash_password("x")) is False
    assert verify_password("x", "") is False
    assert verify_password("x", "not-a-hash") is False


def test_hash_password_rejects_blank():
    with pytest.raises(ValueError, match="password_blank"):
        hash_password("")
