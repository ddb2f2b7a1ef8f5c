"""Access token generation and hashing.

Access tokens are 24 random bytes rendered as 48 hex characters. The
server only keeps the SHA-256 digest of a token's bytes, so reading the
database is not enough to impersonate a user.
"""
import hashlib
import re
import secrets

ACCESS_TOKEN_BYTES = 24
ACCESS_TOKEN_PATTERN = re.compile(f"[0-9a-f]{{{ACCESS_TOKEN_BYTES * 2}}}")
MALFORMED_TOKEN_PREFIX = b"clavision:malformed-access-token:"


def create_access_token() -> str:
    """Generate a new random access token."""
    return secrets.token_hex(ACCESS_TOKEN_BYTES)


def create_random_state() -> str:
    """Generate a random value for login states (128 bits)."""
    return secrets.token_hex(16)


def _token_bytes(access_token: str) -> bytes:
    if ACCESS_TOKEN_PATTERN.fullmatch(access_token):
        return bytes.fromhex(access_token)
    # Not a token we issued. The prefix is longer than a decoded token,
    # so no text can hash like a real one and the lookup just misses.
    return MALFORMED_TOKEN_PREFIX + access_token.encode("utf-8")


def hash_access_token(access_token: str) -> str:
    """Return the hex SHA-256 digest of an access token.

    The hex token is decoded to its raw bytes before hashing. The result
    is deterministic and always 64 lowercase hex characters.
    """
    return hashlib.sha256(_token_bytes(access_token)).hexdigest()
