"""
License key value objects and key semantics.

A key is 25 significant characters: 24 characters that decode to a 15-byte
payload, followed by one checksum character. Payload layout:

    [0:2]   cores - 1          (big-endian u16)
    [2:4]   issue day          (big-endian u16, days since 2020-01-01 UTC)
    [4:6]   license id         (big-endian u16)
    [6:10]  reserved           (signed, not interpreted)
    [10:15] tag
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from core.crypto import CryptoProvider, default_crypto
from licenses.domain import key_codec
from licenses.domain.signer import PREFIX_LENGTH, KeySigner

KEY_LENGTH = 25
BODY_LENGTH = 24
GROUP_SIZE = 5
EPOCH = datetime(2020, 1, 1, tzinfo=timezone.utc)
MAX_CORES = 0xFFFF + 1
RESERVED_LENGTH = 4

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def normalize_license_key(raw_key: str) -> str:
    """Strip hyphens and upper-case a key. This is the form that gets hashed."""
    return raw_key.replace("-", "").upper()


def clean_license_key(raw_key: str) -> str:
    """Drop every non-alphanumeric character (spaces, hyphens, ...) and upper-case."""
    return _NON_ALPHANUMERIC.sub("", raw_key).upper()


def format_license_key(raw_key: str) -> str:
    """Render a key as hyphen-separated groups of five."""
    cleaned = clean_license_key(raw_key)
    return "-".join(cleaned[i : i + GROUP_SIZE] for i in range(0, len(cleaned), GROUP_SIZE))


def is_valid_license_format(raw_key: str) -> bool:
    """True when the cleaned key is 25 alphanumeric characters."""
    cleaned = clean_license_key(raw_key)
    return len(cleaned) == KEY_LENGTH and cleaned.isalnum()


def hash_license_key(raw_key: str, crypto: CryptoProvider = default_crypto) -> str:
    """One-way digest of the normalized key; the only form the ledger stores."""
    return crypto.sha256_hex(normalize_license_key(raw_key).encode("utf-8"))


@dataclass(frozen=True)
class Entitlement:
    """Rights granted by an authenticated key."""

    max_cores: int
    license_id: str
    issued_at: datetime
    reserved: bytes = bytes(RESERVED_LENGTH)


def interpret(payload: bytes) -> Entitlement:
    """
    Interpret an authenticated payload.

    Args:
        payload: 15-byte payload that already passed signature verification

    Returns:
        Entitlement
    """
    cores_field = int.from_bytes(payload[0:2], "big")
    day_field = int.from_bytes(payload[2:4], "big")
    id_field = int.from_bytes(payload[4:6], "big")
    return Entitlement(
        max_cores=cores_field + 1,
        license_id=f"{id_field:03d}",
        issued_at=EPOCH + timedelta(days=day_field),
        reserved=bytes(payload[6:PREFIX_LENGTH]),
    )


def issue_license_key(
    signer: KeySigner,
    max_cores: int,
    license_id: int,
    issued_on: Optional[date] = None,
    reserved: bytes = bytes(RESERVED_LENGTH),
) -> str:
    """
    Build a signed, formatted license key.

    Args:
        signer: Signer holding the issuing secret
        max_cores: Entitled core count, 1..65536
        license_id: Numeric license id, 0..65535
        issued_on: Issue date (defaults to today, UTC)
        reserved: 4 reserved bytes carried in the signed prefix

    Returns:
        Key formatted as XXXXX-XXXXX-XXXXX-XXXXX-XXXXX
    """
    if not 1 <= max_cores <= MAX_CORES:
        raise ValueError(f"max_cores must be between 1 and {MAX_CORES}")
    if not 0 <= license_id <= 0xFFFF:
        raise ValueError("license_id must fit in 16 bits")
    if len(reserved) != RESERVED_LENGTH:
        raise ValueError(f"reserved must be {RESERVED_LENGTH} bytes")

    issued_on = issued_on or datetime.now(timezone.utc).date()
    days = (issued_on - EPOCH.date()).days
    if not 0 <= days <= 0xFFFF:
        raise ValueError("issue date is outside the encodable range")

    prefix = (
        (max_cores - 1).to_bytes(2, "big")
        + days.to_bytes(2, "big")
        + license_id.to_bytes(2, "big")
        + bytes(reserved)
    )
    tag = signer.tag(prefix)
    body = key_codec.encode(prefix + tag)
    return format_license_key(body + KeySigner.checksum_char(tag))
