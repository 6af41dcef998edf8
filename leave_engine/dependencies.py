"""Shared FastAPI dependencies."""

from leave_engine.config import settings
from leave_engine.leave.entitlement import LeavePolicy
from leave_engine.worktime.schedule import WorkSchedule


async def get_schedule() -> WorkSchedule:
    """Work schedule built from the current settings."""
    return WorkSchedule.from_settings(settings)


async def get_policy() -> LeavePolicy:
    """Leave entitlement policy built from the current settings."""
    return LeavePolicy.from_settings(settings)


async def get_leave_end_flex_minutes() -> int:
    return settings.LEAVE_END_FLEX_MINUTES
