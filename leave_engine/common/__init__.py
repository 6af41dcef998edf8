"""Common module — shared enums, exceptions and civil-time helpers."""

from leave_engine.common.constants import (
    MINUTES_PER_HOUR,
    TIMEZONE,
    WEEKEND_DAYS,
    WORKDAY_MINUTES,
    AccrualMode,
    BalanceCheckOutcome,
    BalanceLevel,
    DayKind,
    HolidayType,
    LeaveCategory,
    LeaveStatus,
)
from leave_engine.common.exceptions import (
    AppException,
    InvalidDateFormat,
    MissingHireDate,
    ValidationException,
    register_exception_handlers,
)
from leave_engine.common.timeutils import parse_civil_date, parse_instant

__all__ = [
    # Constants / Enums
    "AccrualMode",
    "BalanceCheckOutcome",
    "BalanceLevel",
    "DayKind",
    "HolidayType",
    "LeaveCategory",
    "LeaveStatus",
    "MINUTES_PER_HOUR",
    "TIMEZONE",
    "WEEKEND_DAYS",
    "WORKDAY_MINUTES",
    # Exceptions
    "AppException",
    "InvalidDateFormat",
    "MissingHireDate",
    "ValidationException",
    "register_exception_handlers",
    # Time
    "parse_civil_date",
    "parse_instant",
]
