"""Leave entitlement calculator — flat annual caps and tenure-tiered special leave.

Special leave tiers, keyed by whole elapsed months of service:

    < 6 months      0
    6 – 12 months   3   (one-time grant at the 6-month mark)
    1 – 2 years     7
    2 – 3 years    10
    3 – 5 years    14 / year
    5 – 10 years   15 / year
    >= 10 years    16 + (years - 10) / year, capped at 30

Months are counted by calendar year and month only; the day of month is
ignored, so an employee reaches a tier on the first day of the anniversary
month.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, assert_never
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

from leave_engine.common.constants import (
    PERSONAL_LEAVE_DAYS,
    SICK_LEAVE_DAYS,
    SPECIAL_LEAVE_MAX_DAYS_PER_YEAR,
    TIMEZONE,
    WORKDAY_MINUTES,
    AccrualMode,
    LeaveCategory,
)
from leave_engine.common.exceptions import MissingHireDate
from leave_engine.common.timeutils import add_months, elapsed_months
from leave_engine.leave.schemas import AccrualMilestone, Entitlement

logger = logging.getLogger(__name__)

FIRST_GRANT_MONTHS = 6
FIRST_GRANT_DAYS = 3


class LeavePolicy(BaseModel):
    """Per-category entitlement policy."""

    model_config = ConfigDict(frozen=True)

    personal_days: int = Field(PERSONAL_LEAVE_DAYS, ge=0)
    sick_days: int = Field(SICK_LEAVE_DAYS, ge=0)
    special_max_days_per_year: int = Field(SPECIAL_LEAVE_MAX_DAYS_PER_YEAR, ge=0)

    @classmethod
    def from_settings(cls, settings) -> "LeavePolicy":
        return cls(
            personal_days=settings.PERSONAL_LEAVE_DAYS,
            sick_days=settings.SICK_LEAVE_DAYS,
            special_max_days_per_year=settings.SPECIAL_LEAVE_MAX_DAYS_PER_YEAR,
        )


DEFAULT_POLICY = LeavePolicy()


def _today() -> date:
    return datetime.now(ZoneInfo(TIMEZONE)).date()


def tenure_months(hire_date: Optional[date], as_of: Optional[date] = None) -> int:
    """Whole elapsed months of service. Raises MissingHireDate without a hire date."""
    if hire_date is None:
        raise MissingHireDate()
    return max(0, elapsed_months(hire_date, as_of or _today()))


def grant_date(hire_date: date, months: int) -> date:
    """First day on which ``tenure_months`` reaches ``months``."""
    return add_months(hire_date.replace(day=1), months)


# ── Tier table ──────────────────────────────────────────────────────

def annual_grant_days(service_year: int, cap: int = SPECIAL_LEAVE_MAX_DAYS_PER_YEAR) -> int:
    """Days granted on the ``service_year``-th anniversary (1-based)."""
    if service_year < 1:
        return 0
    if service_year == 1:
        return 7
    if service_year == 2:
        return 10
    if service_year < 5:
        return 14
    if service_year < 10:
        return 15
    return min(16 + (service_year - 10), cap)


def snapshot_days(months: int, cap: int = SPECIAL_LEAVE_MAX_DAYS_PER_YEAR) -> int:
    """Days granted at the current tier only."""
    if months < FIRST_GRANT_MONTHS:
        return 0
    if months < 12:
        return FIRST_GRANT_DAYS
    return annual_grant_days(months // 12, cap)


def cumulative_days(months: int, cap: int = SPECIAL_LEAVE_MAX_DAYS_PER_YEAR) -> int:
    """Sum of every grant crossed since hire."""
    if months < FIRST_GRANT_MONTHS:
        return 0
    total = FIRST_GRANT_DAYS
    for year in range(1, months // 12 + 1):
        total += annual_grant_days(year, cap)
    return total


# ── Public API ──────────────────────────────────────────────────────

def entitlement(
    category: LeaveCategory,
    hire_date: Optional[date] = None,
    as_of: Optional[date] = None,
    *,
    mode: AccrualMode = AccrualMode.cumulative,
    policy: Optional[LeavePolicy] = None,
) -> Entitlement:
    """Accrued entitlement for ``category`` as of ``as_of`` (default: today).

    Personal and sick leave are flat annual caps. Special leave follows the
    tenure tiers; without a hire date it degrades to zero.
    """
    policy = policy or DEFAULT_POLICY

    match category:
        case LeaveCategory.personal:
            days = policy.personal_days
        case LeaveCategory.sick:
            days = policy.sick_days
        case LeaveCategory.special:
            try:
                months = tenure_months(hire_date, as_of)
            except MissingHireDate:
                logger.warning("Special leave entitlement requested without hire date; using 0")
                months = 0
            cap = policy.special_max_days_per_year
            if mode is AccrualMode.snapshot:
                days = snapshot_days(months, cap)
            else:
                days = cumulative_days(months, cap)
        case _:
            assert_never(category)

    return Entitlement(
        category=category,
        mode=mode,
        total_days=days,
        total_minutes=days * WORKDAY_MINUTES,
    )


def next_accrual_milestone(
    hire_date: Optional[date],
    as_of: Optional[date] = None,
    *,
    policy: Optional[LeavePolicy] = None,
) -> Optional[AccrualMilestone]:
    """The upcoming special-leave grant, or ``None`` without a hire date.

    The date is the first day of the anniversary month, the day on which
    ``entitlement`` starts including the grant.
    """
    if hire_date is None:
        return None
    policy = policy or DEFAULT_POLICY
    months = tenure_months(hire_date, as_of)

    if months < FIRST_GRANT_MONTHS:
        return AccrualMilestone(
            date=grant_date(hire_date, FIRST_GRANT_MONTHS),
            days_granted=FIRST_GRANT_DAYS,
        )

    service_year = months // 12 + 1
    return AccrualMilestone(
        date=grant_date(hire_date, service_year * 12),
        days_granted=annual_grant_days(service_year, policy.special_max_days_per_year),
    )


def accrual_schedule(
    hire_date: Optional[date],
    as_of: Optional[date] = None,
    *,
    policy: Optional[LeavePolicy] = None,
) -> list[AccrualMilestone]:
    """Every special-leave grant crossed so far, oldest first."""
    if hire_date is None:
        return []
    policy = policy or DEFAULT_POLICY
    months = tenure_months(hire_date, as_of)
    if months < FIRST_GRANT_MONTHS:
        return []

    grants = [
        AccrualMilestone(
            date=grant_date(hire_date, FIRST_GRANT_MONTHS),
            days_granted=FIRST_GRANT_DAYS,
        )
    ]
    for year in range(1, months // 12 + 1):
        grants.append(
            AccrualMilestone(
                date=grant_date(hire_date, year * 12),
                days_granted=annual_grant_days(year, policy.special_max_days_per_year),
            )
        )
    return grants
