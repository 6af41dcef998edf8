"""The fixed daily work schedule the duration calculator measures against."""

from __future__ import annotations

from datetime import datetime, time

from pydantic import BaseModel, ConfigDict, Field, model_validator

from leave_engine.common.constants import TIMEZONE


def _minutes_of(clock: time) -> int:
    return clock.hour * 60 + clock.minute


class WorkSchedule(BaseModel):
    """Business windows of one civil day.

    ``[work_start, break_start)`` is the morning, ``[break_start, break_end)``
    the break and ``[break_end, work_end)`` the afternoon. Everything outside
    ``[work_start, work_end)`` counts as night.
    """

    model_config = ConfigDict(frozen=True)

    work_start: time = time(8, 30)
    break_start: time = time(12, 0)
    break_end: time = time(13, 0)
    work_end: time = time(17, 30)
    standard_half_day_minutes: int = Field(240, gt=0)
    timezone: str = TIMEZONE

    @model_validator(mode="after")
    def validate_order(self) -> "WorkSchedule":
        if not (self.work_start < self.break_start <= self.break_end < self.work_end):
            raise ValueError(
                "Schedule times must satisfy work_start < break_start <= break_end < work_end."
            )
        return self

    @classmethod
    def from_settings(cls, settings) -> "WorkSchedule":
        return cls(
            work_start=_parse_clock(settings.WORK_START),
            break_start=_parse_clock(settings.BREAK_START),
            break_end=_parse_clock(settings.BREAK_END),
            work_end=_parse_clock(settings.WORK_END),
            standard_half_day_minutes=settings.STANDARD_HALF_DAY_MINUTES,
            timezone=settings.TIMEZONE,
        )

    @property
    def morning_minutes(self) -> int:
        return _minutes_of(self.break_start) - _minutes_of(self.work_start)

    @property
    def afternoon_minutes(self) -> int:
        return _minutes_of(self.work_end) - _minutes_of(self.break_end)

    @property
    def break_minutes(self) -> int:
        return _minutes_of(self.break_end) - _minutes_of(self.break_start)

    @property
    def physical_day_minutes(self) -> int:
        return self.morning_minutes + self.afternoon_minutes

    @property
    def standard_day_minutes(self) -> int:
        return 2 * self.standard_half_day_minutes


def _parse_clock(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


DEFAULT_SCHEDULE = WorkSchedule()
