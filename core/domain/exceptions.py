"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class InvalidLicenseKeyError(LicenseException):
    """
    Raised when a license key fails local verification.

    ``reason`` is one of ``length``, ``format``, ``checksum`` or ``signature``.
    """

    reason = "invalid"

    def __init__(self, message: str = "Invalid license key", code: str = "INVALID_LICENSE_KEY"):
        super().__init__(message, code=code)


class KeyLengthError(InvalidLicenseKeyError):
    """Raised when a normalized key is not exactly 25 characters."""

    reason = "length"

    def __init__(self, message: str = "License key must be exactly 25 characters"):
        super().__init__(message, code="KEY_LENGTH_MISMATCH")


class InvalidCharacterError(InvalidLicenseKeyError):
    """Raised when a key contains a symbol outside the key alphabet."""

    reason = "format"

    def __init__(self, message: str = "Invalid license key format"):
        super().__init__(message, code="INVALID_CHARACTER")


class UnalignedPaddingError(InvalidLicenseKeyError):
    """Raised when decoding leaves non-zero bits in a final partial group."""

    reason = "format"

    def __init__(self, message: str = "Invalid license key format"):
        super().__init__(message, code="UNALIGNED_PADDING")


class ChecksumMismatchError(InvalidLicenseKeyError):
    """Raised when the trailing checksum character does not match the tag."""

    reason = "checksum"

    def __init__(self, message: str = "License key is invalid or corrupted"):
        super().__init__(message, code="CHECKSUM_MISMATCH")


class SignatureMismatchError(InvalidLicenseKeyError):
    """Raised when the embedded tag does not authenticate the payload."""

    reason = "signature"

    def __init__(self, message: str = "License key is not authentic"):
        super().__init__(message, code="SIGNATURE_MISMATCH")


class ActivationException(DomainException):
    """Base exception for activation-related errors."""

    pass


class ActivationNotFoundError(ActivationException):
    """Raised when no activation record exists for a deployment."""

    def __init__(self, message: str = "Activation not found"):
        super().__init__(message, code="ACTIVATION_NOT_FOUND")
