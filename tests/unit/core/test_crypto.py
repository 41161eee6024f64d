"""
Unit tests for the crypto capability.
"""

import hashlib
import hmac

from core.crypto import HashlibCryptoProvider, default_crypto


class TestHashlibCryptoProvider:
    """Tests for HashlibCryptoProvider."""

    def test_hmac_sha256(self):
        """Test HMAC matches the RFC 4231 test case 2 vector."""
        digest = HashlibCryptoProvider().hmac_sha256(b"Jefe", b"what do ya want for nothing?")
        assert digest.hex() == (
            "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
        )

    def test_sha256_hex(self):
        """Test SHA-256 hex digest."""
        assert default_crypto.sha256_hex(b"abc") == hashlib.sha256(b"abc").hexdigest()

    def test_constant_time_equals(self):
        """Test comparison."""
        assert default_crypto.constant_time_equals(b"abc", b"abc")
        assert not default_crypto.constant_time_equals(b"abc", b"abd")
        assert hmac.compare_digest(b"", b"") == default_crypto.constant_time_equals(b"", b"")
