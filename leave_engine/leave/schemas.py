"""Leave Pydantic v2 schemas — records, computed values, request bodies.

Naming conventions:
  - *Record   → externally owned rows handed to the engine (read-only)
  - *Query    → request bodies (the HTTP layer passes records inline)
  - everything else → computed value objects, never persisted
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)

from leave_engine.common.constants import (
    MINUTES_PER_HOUR,
    WORKDAY_MINUTES,
    AccrualMode,
    BalanceCheckOutcome,
    BalanceLevel,
    LeaveCategory,
    LeaveStatus,
)


# ═════════════════════════════════════════════════════════════════════
# Records (owned by the approval workflow / HR ledger)
# ═════════════════════════════════════════════════════════════════════


class TimeInterval(BaseModel):
    """``[start, end)``; may span days, may be empty or inverted."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    start: dt.datetime
    end: dt.datetime


class LeaveRequestRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    emp_id: str
    category: LeaveCategory
    interval: TimeInterval
    status: LeaveStatus = LeaveStatus.created
    reason: Optional[str] = None


class LeaveAdjustmentRecord(BaseModel):
    """Manual, append-only ledger entry. Positive minutes add to the balance."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[str] = None
    emp_id: str
    category: LeaveCategory
    minutes: int
    reason: str = Field(..., min_length=1, max_length=1000)
    created_by: str
    created_at: dt.datetime

    @field_validator("reason")
    @classmethod
    def reason_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Adjustment reason must not be blank.")
        return v.strip()


# ═════════════════════════════════════════════════════════════════════
# Entitlement
# ═════════════════════════════════════════════════════════════════════


class Entitlement(BaseModel):
    category: LeaveCategory
    mode: AccrualMode = AccrualMode.cumulative
    total_days: int = 0
    total_minutes: int = 0


class AccrualMilestone(BaseModel):
    """A special-leave grant: the day it lands and how many days it adds."""

    date: dt.date
    days_granted: int


# ═════════════════════════════════════════════════════════════════════
# Balance
# ═════════════════════════════════════════════════════════════════════


def minutes_to_hours(minutes: int) -> float:
    return minutes / MINUTES_PER_HOUR


def minutes_to_days(minutes: int) -> float:
    return minutes / WORKDAY_MINUTES


def balance_level(category: LeaveCategory, remaining_minutes: int) -> BalanceLevel:
    """Traffic-light level of a remaining balance.

    Personal / special leave: > 56h success, > 24h warning.
    Sick leave: > 120h success, > 56h warning.
    """
    hours = minutes_to_hours(remaining_minutes)
    if category is LeaveCategory.sick:
        success_above, warning_above = 120, 56
    else:
        success_above, warning_above = 56, 24
    if hours > success_above:
        return BalanceLevel.success
    if hours > warning_above:
        return BalanceLevel.warning
    return BalanceLevel.error


class LeaveBalance(BaseModel):
    """Derived balance; ``remaining = total - used + adjustments`` (may be negative)."""

    emp_id: str
    category: LeaveCategory
    total_minutes: int = 0
    used_minutes: int = 0
    adjustment_minutes: int = 0
    remaining_minutes: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_hours(self) -> float:
        return round(minutes_to_hours(self.remaining_minutes), 2)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_days(self) -> float:
        return round(minutes_to_days(self.remaining_minutes), 4)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def level(self) -> BalanceLevel:
        return balance_level(self.category, self.remaining_minutes)


class BalanceCheck(BaseModel):
    """Pre-approval outcome; ``insufficient_balance`` is a warning, not a rejection."""

    outcome: BalanceCheckOutcome
    requested_minutes: int
    remaining_minutes: int
    remaining_after_minutes: int
    message: Optional[str] = None

    @property
    def requires_confirmation(self) -> bool:
        return self.outcome is BalanceCheckOutcome.insufficient_balance


# ═════════════════════════════════════════════════════════════════════
# Request bodies
# ═════════════════════════════════════════════════════════════════════


class BalanceQuery(BaseModel):
    """Snapshot of one employee's records for one category."""

    emp_id: str
    category: LeaveCategory
    hire_date: Optional[dt.date] = None
    as_of: Optional[dt.date] = None
    requests: list[LeaveRequestRecord] = Field(default_factory=list)
    adjustments: list[LeaveAdjustmentRecord] = Field(default_factory=list)
    holidays: list[str] = Field(default_factory=list)


class BalanceCheckQuery(BalanceQuery):
    candidate: TimeInterval


class SickLeaveHistory(BaseModel):
    """Sick-leave days already taken, as tracked on the employee profile."""

    days_past_year: float = Field(0, ge=0)
    hospitalized_days_past_year: float = Field(0, ge=0)
    days_past_two_years: float = Field(0, ge=0)


class LeaveValidateQuery(BaseModel):
    start: str
    end: str
    category: LeaveCategory
    hospitalized: bool = False
    sick_history: SickLeaveHistory = Field(default_factory=SickLeaveHistory)


class LeaveValidateOut(BaseModel):
    valid: bool = True
    requested_minutes: int
