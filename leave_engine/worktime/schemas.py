"""Work-time Pydantic v2 schemas — holiday records and duration results."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from leave_engine.common.constants import HolidayType


class HolidayRecord(BaseModel):
    """A calendar-administrator holiday entry (read-only to the engine)."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    date: dt.date
    type: HolidayType = HolidayType.statutory
    name: str = ""
    pay_rate: float = Field(1.0, ge=0)
    is_paid: bool = True
    memo: Optional[str] = None


class DurationResult(BaseModel):
    """Computed working duration of one interval.

    ``holiday_minutes`` and ``night_minutes`` only promise to be positive
    when the interval touched a non-working day or out-of-hours time.
    """

    minutes: int = 0
    hours: float = 0.0
    break_minutes: int = 0
    holiday_minutes: int = 0
    night_minutes: int = 0

    @property
    def crosses_holiday(self) -> bool:
        return self.holiday_minutes > 0

    @property
    def crosses_night(self) -> bool:
        return self.night_minutes > 0


class DurationRequest(BaseModel):
    """Payload for ``POST /worktime/duration``."""

    start: str = Field(..., description="Interval start, ISO-8601")
    end: str = Field(..., description="Interval end, ISO-8601")
    holidays: list[str] = Field(
        default_factory=list,
        description="Extra non-working dates (YYYY-MM-DD) for this calculation only.",
    )
    use_standard_4_hour_blocks: bool = False
