"""
Cryptographic primitives shared by key verification and the activation ledger.

Callers depend on the ``CryptoProvider`` capability rather than on a concrete
library, so the client validator and the server-side ledger always run the
same HMAC-SHA256 / SHA-256 code.
"""
import hashlib
import hmac
from abc import ABC, abstractmethod


class CryptoProvider(ABC):
    """Capability interface for the primitives the license scheme needs."""

    @abstractmethod
    def hmac_sha256(self, key: bytes, data: bytes) -> bytes:
        """Return the full 32-byte HMAC-SHA256 of ``data`` keyed by ``key``."""
        pass

    @abstractmethod
    def sha256_hex(self, data: bytes) -> str:
        """Return the hex SHA-256 digest of ``data``."""
        pass

    @abstractmethod
    def constant_time_equals(self, left: bytes, right: bytes) -> bool:
        """Compare two byte strings without leaking timing information."""
        pass


class HashlibCryptoProvider(CryptoProvider):
    """``CryptoProvider`` backed by the ``hashlib``/``hmac`` modules."""

    def hmac_sha256(self, key: bytes, data: bytes) -> bytes:
        return hmac.new(key, data, hashlib.sha256).digest()

    def sha256_hex(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()

    def constant_time_equals(self, left: bytes, right: bytes) -> bool:
        return hmac.compare_digest(left, right)


default_crypto = HashlibCryptoProvider()
