# core/services/fine_policy.py
"""Overdue fine policy.

A loan is free for a grace period after the issue date; every whole day
beyond it costs a flat daily rate. The policy is a frozen value so services
and tests can be given different constants without touching module state.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from core.config import Settings, settings

DateLike = Union[date, datetime]

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class FineDetails:
    days_issued: int
    days_overdue: int
    fine_amount: Decimal
    has_fine: bool


@dataclass(frozen=True)
class FinePolicy:
    grace_period_days: int = 7
    daily_rate: Decimal = Decimal("5")

    def __post_init__(self):
        if self.grace_period_days < 0:
            raise ValueError("grace_period_days cannot be negative")
        if Decimal(self.daily_rate) < 0:
            raise ValueError("daily_rate cannot be negative")
        # Accept ints and strings for the rate but always hold a Decimal
        object.__setattr__(self, "daily_rate", Decimal(str(self.daily_rate)))

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "FinePolicy":
        return cls(
            grace_period_days=config.fine_grace_period_days,
            daily_rate=config.fine_daily_rate,
        )

    def compute(self, issue_date: DateLike, return_date: Optional[DateLike] = None) -> FineDetails:
        """Fine owed for a loan returned on ``return_date`` (today if omitted).

        Days are counted by truncation: a copy back 7 days and 23 hours after
        issue has been out 7 days. A return date before the issue date gives
        a negative day count and no fine.
        """
        if return_date is None:
            return_date = date.today()
        issue_date, return_date = _align(issue_date, return_date)

        # timedelta.days floors toward negative infinity
        days_issued = (return_date - issue_date).days
        days_overdue = max(0, days_issued - self.grace_period_days)
        fine_amount = (self.daily_rate * days_overdue).quantize(_CENTS)

        return FineDetails(
            days_issued=days_issued,
            days_overdue=days_overdue,
            fine_amount=fine_amount,
            has_fine=fine_amount > 0,
        )


def _align(issue_date: DateLike, return_date: DateLike):
    """Compare datetimes as datetimes; otherwise drop to calendar dates."""
    if isinstance(issue_date, datetime) and isinstance(return_date, datetime):
        if (issue_date.tzinfo is None) != (return_date.tzinfo is None):
            return issue_date.date(), return_date.date()
        return issue_date, return_date
    if isinstance(issue_date, datetime):
        issue_date = issue_date.date()
    if isinstance(return_date, datetime):
        return_date = return_date.date()
    return issue_date, return_date


DEFAULT_POLICY = FinePolicy()


def compute_fine(
    issue_date: DateLike,
    return_date: Optional[DateLike] = None,
    policy: FinePolicy = DEFAULT_POLICY,
) -> FineDetails:
    """Module-level shortcut for ``policy.compute``."""
    return policy.compute(issue_date, return_date)
