"""
Unit tests for expiry arithmetic.
"""

from datetime import datetime, timezone

from activations.domain.services import LicenseTerm, add_years


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestAddYears:
    """Tests for calendar-year addition."""

    def test_keeps_month_and_day(self):
        """Test plain year addition."""
        assert add_years(utc(2024, 1, 15, 9, 30), 2) == utc(2026, 1, 15, 9, 30)

    def test_leap_day_rolls_to_march_first(self):
        """Test 29 February in a non-leap target year."""
        assert add_years(utc(2024, 2, 29), 1) == utc(2025, 3, 1)

    def test_leap_day_to_leap_year(self):
        """Test 29 February is kept when the target year is a leap year."""
        assert add_years(utc(2024, 2, 29), 4) == utc(2028, 2, 29)


class TestLicenseTerm:
    """Tests for LicenseTerm."""

    def test_expiry_example(self):
        """Test two years from 2024-01-15."""
        term = LicenseTerm(activation_date=utc(2024, 1, 15), years=2)

        assert term.expires_at == utc(2026, 1, 15)
        assert term.is_expired(utc(2025, 6, 1)) is False
        assert term.is_expired(utc(2026, 2, 1)) is True

    def test_not_expired_at_exact_expiry(self):
        """Test expiry is strictly after the expiration instant."""
        term = LicenseTerm(activation_date=utc(2024, 1, 15), years=1)
        assert term.is_expired(utc(2025, 1, 15)) is False

    def test_days_remaining_rounds_up(self):
        """Test partial days count as a full day."""
        term = LicenseTerm(activation_date=utc(2024, 1, 15), years=1)

        assert term.days_remaining(utc(2025, 1, 14, 12)) == 1
        assert term.days_remaining(utc(2025, 1, 5)) == 10

    def test_days_remaining_never_negative(self):
        """Test expired terms report zero days."""
        term = LicenseTerm(activation_date=utc(2024, 1, 15), years=1)
        assert term.days_remaining(utc(2026, 1, 1)) == 0
