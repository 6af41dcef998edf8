"""Leave request policy rules checked before a request is accepted."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from math import ceil
from typing import Optional

from leave_engine.common.constants import (
    SICK_LEAVE_HOSPITALIZED_TWO_YEAR_CAP_DAYS,
    SICK_LEAVE_YEARLY_CAP_DAYS,
    WORKDAY_MINUTES,
    LeaveCategory,
)
from leave_engine.common.exceptions import ValidationException
from leave_engine.common.timeutils import InstantLike, parse_instant
from leave_engine.leave.schemas import SickLeaveHistory
from leave_engine.worktime.business_calendar import BusinessCalendar
from leave_engine.worktime.schedule import DEFAULT_SCHEDULE, WorkSchedule
from leave_engine.worktime.service import calc_working_duration

logger = logging.getLogger(__name__)

DEFAULT_LEAVE_END_FLEX_MINUTES = 60


def _shift(clock: time, minutes: int) -> time:
    return (datetime.combine(date.min, clock) + timedelta(minutes=minutes)).time()


def _hhmm(clock: time) -> str:
    return clock.strftime("%H:%M")


def window_errors(
    start: datetime,
    end: datetime,
    *,
    schedule: WorkSchedule = DEFAULT_SCHEDULE,
    flex_minutes: int = DEFAULT_LEAVE_END_FLEX_MINUTES,
    calendar: Optional[BusinessCalendar] = None,
) -> dict[str, list[str]]:
    """Per-field violations of the leave time-window rules."""
    calendar = calendar or BusinessCalendar()
    errors: dict[str, list[str]] = {}

    if calendar.is_weekend(start.date()):
        errors.setdefault("start", []).append("Leave may not start on a weekend.")
    if calendar.is_weekend(end.date()):
        errors.setdefault("end", []).append("Leave may not end on a weekend.")
    if end < start:
        errors.setdefault("end", []).append("End time is earlier than start time.")

    if start.time() < schedule.work_start:
        errors.setdefault("start", []).append(
            f"Leave may not start before {_hhmm(schedule.work_start)}."
        )
    latest_end = _shift(schedule.work_end, flex_minutes)
    if end.time() > latest_end:
        errors.setdefault("end", []).append(
            f"Leave may not end after {_hhmm(latest_end)}."
        )

    # Half-day requests are expressed at the break start, not the break end.
    if start.time() == schedule.break_end:
        errors.setdefault("start", []).append(
            f"Leave may not start at {_hhmm(schedule.break_end)}; "
            f"start at {_hhmm(schedule.break_start)} instead."
        )
    if end.time() == schedule.break_end:
        errors.setdefault("end", []).append(
            f"Leave may not end at {_hhmm(schedule.break_end)}; "
            f"end at {_hhmm(schedule.break_start)} instead."
        )

    return errors


def sick_leave_errors(
    requested_minutes: int,
    history: SickLeaveHistory,
    *,
    hospitalized: bool = False,
) -> dict[str, list[str]]:
    """Violations of the rolling sick-leave caps.

    Requested days round up to whole 480-minute days. Non-hospitalised sick
    leave is capped at 30 days per year; hospitalised plus non-hospitalised
    sick leave at 365 days across two years.
    """
    requested_days = ceil(requested_minutes / WORKDAY_MINUTES)

    if not hospitalized:
        total = history.days_past_year + requested_days
        if total > SICK_LEAVE_YEARLY_CAP_DAYS:
            return {"sick_history": [
                f"Sick leave without hospitalisation may not exceed "
                f"{SICK_LEAVE_YEARLY_CAP_DAYS} days within one year "
                f"(would be {total:g})."
            ]}
        return {}

    total = (
        history.days_past_year
        + history.hospitalized_days_past_year
        + history.days_past_two_years
        + requested_days
    )
    if total > SICK_LEAVE_HOSPITALIZED_TWO_YEAR_CAP_DAYS:
        return {"sick_history": [
            f"Sick leave with and without hospitalisation may not exceed "
            f"{SICK_LEAVE_HOSPITALIZED_TWO_YEAR_CAP_DAYS} days within two years "
            f"(would be {total:g})."
        ]}
    return {}


def validate_leave_request(
    start: InstantLike,
    end: InstantLike,
    category: LeaveCategory,
    *,
    hospitalized: bool = False,
    sick_history: Optional[SickLeaveHistory] = None,
    schedule: Optional[WorkSchedule] = None,
    flex_minutes: int = DEFAULT_LEAVE_END_FLEX_MINUTES,
) -> int:
    """Check a leave submission; return its standardized-block cost in minutes.

    Raises:
        InvalidDateFormat: ``start`` or ``end`` cannot be parsed.
        ValidationException: one or more rules failed (all are reported).
    """
    schedule = schedule or DEFAULT_SCHEDULE
    start_at = parse_instant(start, "start", schedule.timezone)
    end_at = parse_instant(end, "end", schedule.timezone)

    errors = window_errors(start_at, end_at, schedule=schedule, flex_minutes=flex_minutes)

    if category is LeaveCategory.sick and not errors:
        physical = calc_working_duration(start_at, end_at, schedule=schedule).minutes
        errors.update(
            sick_leave_errors(
                physical,
                sick_history or SickLeaveHistory(),
                hospitalized=hospitalized,
            )
        )

    if errors:
        logger.debug("Leave request %s → %s rejected: %s", start_at, end_at, errors)
        raise ValidationException(errors)

    return calc_working_duration(
        start_at, end_at, use_standard_4_hour_blocks=True, schedule=schedule,
    ).minutes
