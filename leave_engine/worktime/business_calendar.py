"""Business calendar — weekend rule plus a flat set of holiday dates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Union

from leave_engine.common.constants import WEEKEND_DAYS, DayKind
from leave_engine.common.timeutils import parse_civil_date
from leave_engine.worktime.schemas import HolidayRecord

HolidayLike = Union[str, date, HolidayRecord]


@dataclass(frozen=True)
class BusinessCalendar:
    holidays: frozenset[date] = field(default_factory=frozenset)
    weekend_days: frozenset[int] = WEEKEND_DAYS

    @classmethod
    def from_holidays(
        cls,
        holidays: Iterable[HolidayLike] = (),
        weekend_days: frozenset[int] = WEEKEND_DAYS,
    ) -> "BusinessCalendar":
        dates = set()
        for item in holidays:
            if isinstance(item, HolidayRecord):
                dates.add(item.date)
            else:
                dates.add(parse_civil_date(item, "holidays"))
        return cls(holidays=frozenset(dates), weekend_days=frozenset(weekend_days))

    def classify(self, day: date) -> DayKind:
        if day.weekday() in self.weekend_days:
            return DayKind.weekend
        if day in self.holidays:
            return DayKind.holiday
        return DayKind.working

    def is_working_day(self, day: date) -> bool:
        return self.classify(day) is DayKind.working

    def is_weekend(self, day: date) -> bool:
        return self.classify(day) is DayKind.weekend
