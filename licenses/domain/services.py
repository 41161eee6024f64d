"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass

from core.domain.exceptions import (
    ChecksumMismatchError,
    InvalidCharacterError,
    KeyLengthError,
    SignatureMismatchError,
)
from licenses.domain import key_codec
from licenses.domain.license_key import (
    BODY_LENGTH,
    KEY_LENGTH,
    Entitlement,
    interpret,
    normalize_license_key,
)
from licenses.domain.signer import PAYLOAD_LENGTH, KeySigner


@dataclass(frozen=True)
class VerifiedLicenseKey:
    """A key that passed decoding, checksum and signature checks."""

    normalized_key: str
    payload: bytes
    entitlement: Entitlement


class LicenseKeyVerifier:
    """
    Domain service for local license key verification.

    Used by the client validator and, independently, by the activation
    ledger before it credits a key.
    """

    def __init__(self, signer: KeySigner):
        """Initialize verifier with the signer holding the shared secret."""
        self.signer = signer

    def verify(self, raw_key: str) -> VerifiedLicenseKey:
        """
        Decode and authenticate a human-entered key.

        Args:
            raw_key: Key as typed, hyphens optional, any case

        Returns:
            VerifiedLicenseKey with the derived entitlement

        Raises:
            KeyLengthError: Key is not 25 significant characters
            InvalidCharacterError: Key contains a symbol outside the alphabet
            UnalignedPaddingError: Decoded bits do not align
            ChecksumMismatchError: Trailing checksum character is wrong
            SignatureMismatchError: Tag does not authenticate the payload
        """
        normalized = normalize_license_key(raw_key or "")
        if len(normalized) != KEY_LENGTH:
            raise KeyLengthError()

        payload = key_codec.decode(normalized[:BODY_LENGTH])
        if len(payload) != PAYLOAD_LENGTH:
            raise InvalidCharacterError()

        if not self.signer.checksum_matches(payload, normalized[BODY_LENGTH]):
            raise ChecksumMismatchError()

        if not self.signer.verify(payload):
            raise SignatureMismatchError()

        return VerifiedLicenseKey(
            normalized_key=normalized,
            payload=payload,
            entitlement=interpret(payload),
        )
