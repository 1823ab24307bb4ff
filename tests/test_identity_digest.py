"""
Unit tests for SECRET_HASH computation in lab.cognito.gateway.identity.digest
"""

from lab.cognito.gateway.identity.digest import generate_secret_hash, message_digest


class TestMessageDigest:
    def test_known_vector(self):
        """HMAC-SHA-256 of the standard test sentence, base64 encoded."""
        digest = message_digest(
            b"The quick brown fox jumps over the lazy dog", b"key"
        )
        assert digest == "97yD9DBThCSxMpjmqm+xQ+9NWaFJRhdZl0edvC0aPNg="

    def test_deterministic(self):
        assert message_digest(b"msg", b"key") == message_digest(b"msg", b"key")


class TestGenerateSecretHash:
    def test_known_value(self):
        """The hash covers username followed by client id, keyed by the secret."""
        assert (
            generate_secret_hash("alice", "3g7h2k1client", "s3cret")
            == "3AnNm0xMCps1L9GY1PJSWjvgLZXN8A4gKipbZLBsvNg="
        )

    def test_single_byte_changes_output(self):
        base = generate_secret_hash("alice", "client", "secret")
        assert generate_secret_hash("alicf", "client", "secret") != base
        assert generate_secret_hash("alice", "clienu", "secret") != base
        assert generate_secret_hash("alice", "client", "secreu") != base

    def test_concatenation_order(self):
        """Swapping username and client id produces a different hash."""
        assert generate_secret_hash("ab", "cd", "k") != generate_secret_hash(
            "cd", "ab", "k"
        )

    def test_non_ascii_username(self):
        digest = generate_secret_hash("zoë", "client", "secret")
        assert digest == generate_secret_hash("zoë", "client", "secret")
        assert digest.endswith("=")
