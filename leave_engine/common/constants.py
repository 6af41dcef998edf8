"""Enums and constants for the time & leave accounting engine."""

from __future__ import annotations

import enum


# ── Leave ───────────────────────────────────────────────────────────

class LeaveCategory(str, enum.Enum):
    personal = "personal"
    sick = "sick"
    special = "special"


class LeaveStatus(str, enum.Enum):
    created = "created"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


class AccrualMode(str, enum.Enum):
    """How special leave entitlement is read off the tenure tiers."""

    snapshot = "snapshot"
    cumulative = "cumulative"


class BalanceCheckOutcome(str, enum.Enum):
    ok = "ok"
    insufficient_balance = "insufficient_balance"


class BalanceLevel(str, enum.Enum):
    success = "success"
    warning = "warning"
    error = "error"


# ── Calendar ────────────────────────────────────────────────────────

class HolidayType(str, enum.Enum):
    statutory = "statutory"
    regular_rest = "regular_rest"
    special = "special"


class DayKind(str, enum.Enum):
    working = "working"
    weekend = "weekend"
    holiday = "holiday"


# ── Misc constants ──────────────────────────────────────────────────

TIMEZONE = "Asia/Taipei"
WEEKEND_DAYS = frozenset({5, 6})     # Saturday, Sunday (date.weekday())

MINUTES_PER_HOUR = 60
WORKDAY_MINUTES = 8 * 60             # one leave day = 480 minutes

PERSONAL_LEAVE_DAYS = 14
SICK_LEAVE_DAYS = 30
SPECIAL_LEAVE_MAX_DAYS_PER_YEAR = 30

SICK_LEAVE_YEARLY_CAP_DAYS = 30
SICK_LEAVE_HOSPITALIZED_TWO_YEAR_CAP_DAYS = 365
