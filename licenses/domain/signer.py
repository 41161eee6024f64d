"""
License key signer.

The tag is the first 5 bytes of HMAC-SHA256 over the 10-byte entitlement
prefix of the payload. The key's 25th character repeats the top 5 bits of the
last tag byte so corrupted keys can be rejected before the HMAC runs.
"""
from core.crypto import CryptoProvider, default_crypto
from licenses.domain.key_codec import ALPHABET

PREFIX_LENGTH = 10
TAG_LENGTH = 5
PAYLOAD_LENGTH = PREFIX_LENGTH + TAG_LENGTH


class KeySigner:
    """Computes and checks license key authentication tags."""

    def __init__(self, secret: bytes, crypto: CryptoProvider = default_crypto):
        if not secret:
            raise ValueError("Signing secret is required")
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        self.secret = secret
        self.crypto = crypto

    def tag(self, prefix: bytes) -> bytes:
        """
        Compute the tag for an entitlement prefix.

        Args:
            prefix: The 10-byte entitlement prefix (payload[0:10])

        Returns:
            5-byte tag
        """
        if len(prefix) != PREFIX_LENGTH:
            raise ValueError(f"Entitlement prefix must be {PREFIX_LENGTH} bytes")
        return self.crypto.hmac_sha256(self.secret, prefix)[:TAG_LENGTH]

    def verify(self, payload: bytes) -> bool:
        """
        Check the tag embedded in a 15-byte payload.

        Args:
            payload: Decoded payload (prefix followed by tag)

        Returns:
            True if the embedded tag authenticates the prefix
        """
        if len(payload) != PAYLOAD_LENGTH:
            return False
        expected = self.tag(payload[:PREFIX_LENGTH])
        return self.crypto.constant_time_equals(payload[PREFIX_LENGTH:], expected)

    @staticmethod
    def checksum_char(tag: bytes) -> str:
        """Return the checksum character for a tag."""
        return ALPHABET[tag[TAG_LENGTH - 1] >> 3]

    @classmethod
    def checksum_matches(cls, payload: bytes, checksum: str) -> bool:
        """Cheap pre-check of the trailing key character. Not a security boundary."""
        return cls.checksum_char(payload[PREFIX_LENGTH:]) == checksum.upper()
