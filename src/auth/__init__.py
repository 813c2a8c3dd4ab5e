"""Credential hashing package."""

from src.auth.hasher import (
    DIGEST_LENGTH,
    HASH_ALGORITHM,
    HashUnavailableError,
    ensure_hash_available,
    hash_password,
    verify_password,
)

__all__ = [
    "DIGEST_LENGTH",
    "HASH_ALGORITHM",
    "HashUnavailableError",
    "ensure_hash_available",
    "hash_password",
    "verify_password",
]
