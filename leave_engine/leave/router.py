"""Leave router — entitlement, accrual milestone, balance, pre-approval check, rules.

Stateless: every record the computation needs travels in the request.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from leave_engine.common.constants import AccrualMode, LeaveCategory
from leave_engine.dependencies import get_leave_end_flex_minutes, get_policy, get_schedule
from leave_engine.leave.entitlement import LeavePolicy, entitlement, next_accrual_milestone
from leave_engine.leave.rules import validate_leave_request
from leave_engine.leave.schemas import (
    AccrualMilestone,
    BalanceCheck,
    BalanceCheckQuery,
    BalanceQuery,
    Entitlement,
    LeaveBalance,
    LeaveValidateOut,
    LeaveValidateQuery,
)
from leave_engine.leave.service import LeaveBalanceService
from leave_engine.worktime.schedule import WorkSchedule

router = APIRouter(prefix="", tags=["leave"])


# ── GET /entitlement ────────────────────────────────────────────────

@router.get("/entitlement", response_model=Entitlement)
async def get_entitlement(
    category: LeaveCategory = Query(...),
    hire_date: Optional[date] = Query(None),
    as_of: Optional[date] = Query(None),
    mode: AccrualMode = Query(AccrualMode.cumulative),
    policy: LeavePolicy = Depends(get_policy),
):
    """Accrued entitlement for a category. Special leave without hire date → 0."""
    return entitlement(category, hire_date, as_of, mode=mode, policy=policy)


# ── GET /milestone ──────────────────────────────────────────────────

@router.get("/milestone", response_model=Optional[AccrualMilestone])
async def get_next_milestone(
    hire_date: Optional[date] = Query(None),
    as_of: Optional[date] = Query(None),
    policy: LeavePolicy = Depends(get_policy),
):
    """Next special-leave grant date and size, or null without hire date."""
    return next_accrual_milestone(hire_date, as_of, policy=policy)


# ── POST /balance ───────────────────────────────────────────────────

@router.post("/balance", response_model=LeaveBalance)
async def get_balance(
    body: BalanceQuery,
    schedule: WorkSchedule = Depends(get_schedule),
    policy: LeavePolicy = Depends(get_policy),
):
    """Remaining balance from the supplied requests/adjustments snapshot."""
    return LeaveBalanceService.balance(
        body.emp_id,
        body.category,
        body.hire_date,
        body.requests,
        body.adjustments,
        as_of=body.as_of,
        holidays=body.holidays,
        schedule=schedule,
        policy=policy,
    )


# ── POST /balance/check ─────────────────────────────────────────────

@router.post("/balance/check", response_model=BalanceCheck)
async def check_balance(
    body: BalanceCheckQuery,
    schedule: WorkSchedule = Depends(get_schedule),
    policy: LeavePolicy = Depends(get_policy),
):
    """Pre-approval check. Insufficient balance is a 200 warning, not an error."""
    return LeaveBalanceService.check_request(
        body.candidate,
        body.emp_id,
        body.category,
        body.hire_date,
        body.requests,
        body.adjustments,
        as_of=body.as_of,
        holidays=body.holidays,
        schedule=schedule,
        policy=policy,
    )


# ── POST /validate ──────────────────────────────────────────────────

@router.post("/validate", response_model=LeaveValidateOut)
async def validate_request(
    body: LeaveValidateQuery,
    schedule: WorkSchedule = Depends(get_schedule),
    flex_minutes: int = Depends(get_leave_end_flex_minutes),
):
    """Apply the leave time-window and sick-leave rules to a submission."""
    minutes = validate_leave_request(
        body.start,
        body.end,
        body.category,
        hospitalized=body.hospitalized,
        sick_history=body.sick_history,
        schedule=schedule,
        flex_minutes=flex_minutes,
    )
    return LeaveValidateOut(requested_minutes=minutes)
