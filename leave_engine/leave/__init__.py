"""Leave module — entitlement, balance aggregation, request rules."""

from leave_engine.leave.entitlement import (
    DEFAULT_POLICY,
    LeavePolicy,
    accrual_schedule,
    entitlement,
    next_accrual_milestone,
)
from leave_engine.leave.schemas import (
    BalanceCheck,
    Entitlement,
    LeaveAdjustmentRecord,
    LeaveBalance,
    LeaveRequestRecord,
    TimeInterval,
)
from leave_engine.leave.service import LeaveBalanceService

__all__ = [
    "BalanceCheck",
    "DEFAULT_POLICY",
    "Entitlement",
    "LeaveAdjustmentRecord",
    "LeaveBalance",
    "LeaveBalanceService",
    "LeavePolicy",
    "LeaveRequestRecord",
    "TimeInterval",
    "accrual_schedule",
    "entitlement",
    "next_accrual_milestone",
]
