"""Tests for access token generation and hashing."""

import hashlib

from app.auth.hashing import create_access_token, create_random_state, hash_access_token


class TestCreateAccessToken:
    """Tests for token and state generation."""

    def test_length_and_alphabet(self):
        """Test tokens are 48 lowercase hex characters."""
        token = create_access_token()
        assert len(token) == 48
        assert all(c in "0123456789abcdef" for c in token)

    def test_tokens_differ(self):
        """Test generated tokens do not repeat."""
        tokens = {create_access_token() for _ in range(100)}
        assert len(tokens) == 100

    def test_random_state(self):
        """Test login states are 32 hex characters and random."""
        state = create_random_state()
        assert len(state) == 32
        assert state != create_random_state()


class TestHashAccessToken:
    """Tests for access token hashing."""

    def test_deterministic(self):
        """Test the same token always gives the same digest."""
        token = create_access_token()
        assert hash_access_token(token) == hash_access_token(token)

    def test_distinct_tokens_distinct_hashes(self):
        """Test distinct tokens give distinct digests."""
        tokens = [create_access_token() for _ in range(100)]
        hashes = {hash_access_token(token) for token in tokens}
        assert len(hashes) == 100

    def test_hashes_token_bytes(self):
        """Test the digest is taken over the decoded token bytes."""
        token = "00ff" * 12
        expected = hashlib.sha256(bytes.fromhex(token)).hexdigest()
        assert hash_access_token(token) == expected

    def test_digest_format(self):
        """Test digests are 64 lowercase hex characters."""
        digest = hash_access_token(create_access_token())
        assert len(digest) == 64
        assert digest == digest.lower()

    def test_hash_is_not_the_token(self):
        """Test the digest does not contain the token."""
        token = create_access_token()
        assert token not in hash_access_token(token)

    def test_malformed_token_does_not_raise(self):
        """Test a non-hex token still hashes."""
        digest = hash_access_token("not a hex token!")
        assert len(digest) == 64

    def test_only_canonical_hex_is_decoded(self):
        """Test that text spelling the same bytes differently hashes differently."""
        token = "ab" * 24
        assert hash_access_token(token.upper()) != hash_access_token(token)
        assert hash_access_token(" " + token) != hash_access_token(token)
        assert hash_access_token("xyz") != hash_access_token("78797a")
