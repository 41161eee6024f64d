"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

SECONDS_PER_DAY = 86400


def add_years(moment: datetime, years: int) -> datetime:
    """
    Add calendar years, keeping month, day and time of day.

    29 February rolls over to 1 March when the target year is not a leap year.
    """
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, month=3, day=1)


@dataclass(frozen=True)
class LicenseTerm:
    """Validity window derived from an activation date and credited years."""

    activation_date: datetime
    years: int

    @property
    def expires_at(self) -> datetime:
        """Expiration timestamp."""
        return add_years(self.activation_date, self.years)

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is past the expiration timestamp."""
        return now > self.expires_at

    def days_remaining(self, now: datetime) -> int:
        """Whole days left, rounded up, never negative."""
        remaining = (self.expires_at - now) / timedelta(seconds=SECONDS_PER_DAY)
        return max(0, math.ceil(remaining))
