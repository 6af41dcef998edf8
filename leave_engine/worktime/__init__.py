"""Work-time module — schedule, business calendar, working duration calculator."""

from leave_engine.worktime.business_calendar import BusinessCalendar
from leave_engine.worktime.schedule import DEFAULT_SCHEDULE, WorkSchedule
from leave_engine.worktime.schemas import DurationResult, HolidayRecord
from leave_engine.worktime.service import calc_working_duration

__all__ = [
    "BusinessCalendar",
    "DEFAULT_SCHEDULE",
    "DurationResult",
    "HolidayRecord",
    "WorkSchedule",
    "calc_working_duration",
]
