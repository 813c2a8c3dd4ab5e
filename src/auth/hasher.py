"""
Credential Hasher

Turns a plaintext password into a deterministic, fixed-length hex digest.

DESIGN DECISION: SHA-256 without salt. Identical passwords always produce
identical digests, which is what the accounts file has always contained.
Adding a salt would invalidate every stored digest, so this weakness is
kept on purpose and documented rather than changed.
"""

import hashlib
import hmac


HASH_ALGORITHM = "sha256"
DIGEST_LENGTH = 64


class HashUnavailableError(RuntimeError):
    """The hash primitive is missing from this interpreter. Fatal."""
    pass


def _new_hash():
    try:
        return hashlib.new(HASH_ALGORITHM)
    except ValueError as e:
        raise HashUnavailableError(
            f"Hash algorithm '{HASH_ALGORITHM}' is not available"
        ) from e


def hash_password(plaintext: str) -> str:
    """
    Hash a password.

    Returns the lowercase hex digest of the UTF-8 encoded plaintext
    (64 characters for SHA-256). Lone surrogates, which ``input()`` can
    hand back for undecodable bytes, are encoded as-is instead of failing.

    Raises:
        HashUnavailableError: If the algorithm cannot be loaded
    """
    digest = _new_hash()
    digest.update(plaintext.encode("utf-8", "surrogatepass"))
    return digest.hexdigest()


def verify_password(plaintext: str, digest: str) -> bool:
    """Check a plaintext password against a stored digest."""
    return hmac.compare_digest(hash_password(plaintext), digest)


def ensure_hash_available() -> None:
    """Fail fast at startup if passwords cannot be hashed."""
    _new_hash()
