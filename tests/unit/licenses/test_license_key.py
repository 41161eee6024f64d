"""
Unit tests for license key semantics and helpers.
"""

from datetime import date, datetime, timezone

import pytest

from core.crypto import HashlibCryptoProvider
from licenses.domain import key_codec
from licenses.domain.license_key import (
    EPOCH,
    MAX_CORES,
    clean_license_key,
    format_license_key,
    hash_license_key,
    interpret,
    is_valid_license_format,
    issue_license_key,
    normalize_license_key,
)


class TestInterpret:
    """Tests for payload interpretation."""

    def test_interpret_fields(self):
        """Test cores, issue date, id and reserved bytes are decoded."""
        payload = b"\x00\x07\x00\x0a\x00\x2a\xde\xad\xbe\xef" + bytes(5)
        entitlement = interpret(payload)

        assert entitlement.max_cores == 8
        assert entitlement.issued_at == datetime(2020, 1, 11, tzinfo=timezone.utc)
        assert entitlement.license_id == "042"
        assert entitlement.reserved == b"\xde\xad\xbe\xef"

    def test_interpret_extremes(self):
        """Test field boundaries."""
        payload = b"\xff\xff\x00\x00\x30\x39" + bytes(9)
        entitlement = interpret(payload)

        assert entitlement.max_cores == MAX_CORES
        assert entitlement.issued_at == EPOCH
        assert entitlement.license_id == "12345"


class TestKeyHelpers:
    """Tests for normalization and formatting helpers."""

    def test_normalize_strips_hyphens_and_uppercases(self):
        """Test normalization."""
        assert normalize_license_key("abcde-12345") == "ABCDE12345"

    def test_clean_drops_all_separators(self):
        """Test cleaning removes spaces and punctuation."""
        assert clean_license_key(" ab cd_e-12 ") == "ABCDE12"

    def test_format_groups_of_five(self):
        """Test hyphenation."""
        assert format_license_key("a" * 25) == "-".join(["AAAAA"] * 5)

    def test_is_valid_license_format(self):
        """Test format validation."""
        assert is_valid_license_format("AAAAA-BBBBB-CCCCC-DDDDD-EEEEE")
        assert not is_valid_license_format("AAAAA-BBBBB")

    def test_hash_uses_normalized_key(self):
        """Test hash ignores hyphens and case."""
        expected = HashlibCryptoProvider().sha256_hex(b"ABCDE12345")
        assert hash_license_key("abcde-12345") == expected
        assert hash_license_key("ABCDE12345") == expected
        assert len(expected) == 64


class TestIssueLicenseKey:
    """Tests for key issuance."""

    def test_issued_key_shape(self, issue_key):
        """Test issued keys are five hyphenated groups."""
        key = issue_key()
        groups = key.split("-")
        assert len(groups) == 5
        assert all(len(group) == 5 for group in groups)

    def test_issued_key_verifies(self, issue_key, verifier):
        """Test issued keys carry their entitlement."""
        verified = verifier.verify(issue_key(max_cores=16, license_id=7))
        entitlement = verified.entitlement

        assert entitlement.max_cores == 16
        assert entitlement.license_id == "007"
        assert entitlement.issued_at.date() == date(2024, 1, 15)

    def test_reserved_bytes_are_signed(self, signer, verifier):
        """Test reserved bytes round-trip through a key."""
        key = issue_license_key(signer, 4, 1, date(2024, 1, 15), reserved=b"\x01\x02\x03\x04")
        assert verifier.verify(key).entitlement.reserved == b"\x01\x02\x03\x04"

    def test_issued_body_decodes_to_payload(self, issue_key):
        """Test key body is the encoded 15-byte payload."""
        body = normalize_license_key(issue_key())[:24]
        assert len(key_codec.decode(body)) == 15

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_cores": 0, "license_id": 1},
            {"max_cores": MAX_CORES + 1, "license_id": 1},
            {"max_cores": 1, "license_id": 0x10000},
            {"max_cores": 1, "license_id": 1, "issued_on": date(2019, 12, 31)},
            {"max_cores": 1, "license_id": 1, "reserved": b"\x00"},
        ],
    )
    def test_out_of_range_fields_rejected(self, signer, kwargs):
        """Test invalid issuance inputs."""
        with pytest.raises(ValueError):
            issue_license_key(signer, **kwargs)
