"""Accounting period resolution for group budgets.

Pure date arithmetic, no I/O. All instants are handled in UTC; naive
datetimes (as returned by SQLite) are taken to be UTC already.
"""

import calendar
from datetime import UTC, datetime

from src.models.enums import BudgetApproach
from src.schemas.budget import Period

PER_GIFT_LABEL = "Per gift suggestion"

# Labels are English regardless of LC_TIME
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def add_years(value: datetime, years: int) -> datetime:
    """Shift by whole years, clamping 29 February to 28 February."""
    year = value.year + years
    day = min(value.day, calendar.monthrange(year, value.month)[1])
    return value.replace(year=year, day=day)


def completed_years(start: datetime, now: datetime) -> int:
    """Number of full years elapsed from ``start`` to ``now`` (never negative)."""
    years = now.year - start.year
    if years > 0 and add_years(start, years) > now:
        years -= 1
    return max(years, 0)


def month_period(now: datetime) -> Period:
    """Calendar month containing ``now``."""
    now = as_utc(now)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return Period(start=start, end=end, label=f"{MONTH_NAMES[start.month - 1]} {start.year}")


def anniversary_period(group_created_at: datetime, now: datetime) -> Period:
    """Year-long window anchored on the group's creation date."""
    created = as_utc(group_created_at)
    now = as_utc(now)
    elapsed = completed_years(created, now)
    start = add_years(created, elapsed)
    end = add_years(created, elapsed + 1)
    label = (
        f"{MONTH_NAMES[start.month - 1][:3]} {start.year} - "
        f"{MONTH_NAMES[end.month - 1][:3]} {end.year}"
    )
    return Period(start=start, end=end, label=label)


def resolve_period(
    approach: BudgetApproach | str,
    group_created_at: datetime,
    now: datetime,
) -> Period:
    """Resolve the active accounting period for a budget approach.

    Args:
        approach: The group's budget approach
        group_created_at: When the group was created (anchors yearly budgets)
        now: The current instant

    Returns:
        Period with inclusive start and exclusive end. A per-gift budget
        has no window: start and end both equal ``now``.
    """
    approach = BudgetApproach(approach)
    if approach == BudgetApproach.MONTHLY:
        return month_period(now)
    if approach == BudgetApproach.YEARLY:
        return anniversary_period(group_created_at, now)
    now = as_utc(now)
    return Period(start=now, end=now, label=PER_GIFT_LABEL)
