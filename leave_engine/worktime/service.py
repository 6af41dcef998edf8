"""Working duration calculator — business minutes between two instants.

Each calendar day touched by ``[start, end)`` is evaluated on its own and the
per-day figures are summed:

  - Weekend / holiday days add their whole overlap to ``holiday_minutes``.
  - Working days split the overlap into morning + afternoon work,
    the break, and night (everything outside the working window).
  - In standardized-block mode each half-day window is credited
    ``overlap / physical_length * standard_half_day_minutes`` instead of
    its raw overlap, so a full morning and a full afternoon both cost
    exactly one standard block.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from fractions import Fraction
from math import floor
from typing import Iterable, NamedTuple, Optional

from leave_engine.common.constants import MINUTES_PER_HOUR, DayKind
from leave_engine.common.timeutils import (
    InstantLike,
    at,
    iter_days,
    next_midnight,
    overlap_minutes,
    parse_instant,
    whole_minutes,
)
from leave_engine.worktime.business_calendar import BusinessCalendar, HolidayLike
from leave_engine.worktime.schedule import DEFAULT_SCHEDULE, WorkSchedule
from leave_engine.worktime.schemas import DurationResult

logger = logging.getLogger(__name__)


class DayBreakdown(NamedTuple):
    """Physical minutes of one working-day slice, by window."""

    morning: int
    afternoon: int
    break_: int
    night: int


def _round_half_up(value: Fraction) -> int:
    return floor(value + Fraction(1, 2))


def split_working_day(
    day: date,
    start: datetime,
    end: datetime,
    schedule: WorkSchedule,
) -> DayBreakdown:
    """Intersect ``[start, end)`` (confined to ``day``) with the day's windows."""
    work_start = at(day, schedule.work_start)
    break_start = at(day, schedule.break_start)
    break_end = at(day, schedule.break_end)
    work_end = at(day, schedule.work_end)

    morning = overlap_minutes(start, end, work_start, break_start)
    afternoon = overlap_minutes(start, end, break_end, work_end)
    break_ = overlap_minutes(start, end, break_start, break_end)
    night = whole_minutes(start, end) - morning - afternoon - break_
    return DayBreakdown(morning, afternoon, break_, night)


def credited_minutes(
    breakdown: DayBreakdown,
    schedule: WorkSchedule,
    use_standard_4_hour_blocks: bool,
) -> int:
    """Work minutes credited for one day in physical or standardized mode."""
    if not use_standard_4_hour_blocks:
        return breakdown.morning + breakdown.afternoon

    block = schedule.standard_half_day_minutes
    credited = 0
    if breakdown.morning > 0:
        credited += _round_half_up(Fraction(breakdown.morning * block, schedule.morning_minutes))
    if breakdown.afternoon > 0:
        credited += _round_half_up(Fraction(breakdown.afternoon * block, schedule.afternoon_minutes))
    return credited


def calc_working_duration(
    start: InstantLike,
    end: InstantLike,
    *,
    holidays: Iterable[HolidayLike] = (),
    use_standard_4_hour_blocks: bool = False,
    schedule: Optional[WorkSchedule] = None,
    calendar: Optional[BusinessCalendar] = None,
) -> DurationResult:
    """Convert ``[start, end)`` into business-relevant minutes.

    Args:
        start, end: ISO-8601 strings, ``datetime`` or ``date`` values.
        holidays: Extra non-working dates for this call only, on top of
            ``calendar`` (or the plain Saturday/Sunday rule).
        use_standard_4_hour_blocks: Credit each half-day window as
            ``schedule.standard_half_day_minutes``, scaled by overlap.
        schedule: Work schedule; defaults to ``DEFAULT_SCHEDULE``.
        calendar: Base business calendar.

    Raises:
        InvalidDateFormat: ``start`` or ``end`` cannot be parsed.

    An interval with ``end <= start`` is degenerate, not malformed, and
    yields an all-zero result.
    """
    schedule = schedule or DEFAULT_SCHEDULE
    start_at = parse_instant(start, "start", schedule.timezone)
    end_at = parse_instant(end, "end", schedule.timezone)

    if end_at <= start_at:
        return DurationResult()

    extra = BusinessCalendar.from_holidays(holidays)
    if calendar is None:
        calendar = extra
    elif extra.holidays:
        calendar = BusinessCalendar(
            holidays=calendar.holidays | extra.holidays,
            weekend_days=calendar.weekend_days,
        )

    minutes = break_minutes = holiday_minutes = night_minutes = 0

    for day in iter_days(start_at.date(), end_at.date()):
        day_start = max(start_at, at(day, datetime.min.time()))
        day_end = min(end_at, next_midnight(day))
        if day_end <= day_start:
            continue

        if calendar.classify(day) is not DayKind.working:
            holiday_minutes += whole_minutes(day_start, day_end)
            continue

        breakdown = split_working_day(day, day_start, day_end, schedule)
        minutes += credited_minutes(breakdown, schedule, use_standard_4_hour_blocks)
        break_minutes += breakdown.break_
        night_minutes += breakdown.night

    result = DurationResult(
        minutes=minutes,
        hours=round(minutes / MINUTES_PER_HOUR, 2),
        break_minutes=break_minutes,
        holiday_minutes=holiday_minutes,
        night_minutes=night_minutes,
    )
    logger.debug(
        "Working duration %s → %s (standard_blocks=%s): %d min",
        start_at, end_at, use_standard_4_hour_blocks, result.minutes,
    )
    return result
