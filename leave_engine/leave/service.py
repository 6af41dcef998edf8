"""Leave service layer — balance aggregation and pre-approval balance check.

Business logic:
  - Used minutes = approved requests, each costed in standardized-block mode
  - Total minutes = entitlement for the category / tenure
  - Remaining = total - used + ledger adjustments (negative is a valid state)
  - Pre-approval check: warn, never reject, when a candidate overdraws
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from leave_engine.common.constants import BalanceCheckOutcome, LeaveCategory, LeaveStatus
from leave_engine.leave.entitlement import LeavePolicy, entitlement
from leave_engine.leave.schemas import (
    BalanceCheck,
    LeaveAdjustmentRecord,
    LeaveBalance,
    LeaveRequestRecord,
    TimeInterval,
    minutes_to_hours,
)
from leave_engine.worktime.business_calendar import HolidayLike
from leave_engine.worktime.schedule import WorkSchedule
from leave_engine.worktime.service import calc_working_duration

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# LeaveBalanceService
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceService:
    """Pure balance operations over an externally supplied snapshot."""

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def interval_cost(
        interval: TimeInterval,
        *,
        holidays: Iterable[HolidayLike] = (),
        schedule: Optional[WorkSchedule] = None,
    ) -> int:
        """Leave cost of one interval, always in standardized-block minutes."""
        return calc_working_duration(
            interval.start,
            interval.end,
            holidays=holidays,
            use_standard_4_hour_blocks=True,
            schedule=schedule,
        ).minutes

    @staticmethod
    def used_minutes(
        requests: Iterable[LeaveRequestRecord],
        emp_id: str,
        category: LeaveCategory,
        *,
        holidays: Sequence[HolidayLike] = (),
        schedule: Optional[WorkSchedule] = None,
    ) -> int:
        """Sum of approved request costs for this employee and category."""
        return sum(
            LeaveBalanceService.interval_cost(req.interval, holidays=holidays, schedule=schedule)
            for req in requests
            if req.emp_id == emp_id
            and req.category == category
            and req.status == LeaveStatus.approved
        )

    @staticmethod
    def total_adjustment_minutes(
        adjustments: Iterable[LeaveAdjustmentRecord],
        emp_id: str,
        category: LeaveCategory,
    ) -> int:
        return sum(
            adj.minutes
            for adj in adjustments
            if adj.emp_id == emp_id and adj.category == category
        )

    # ─────────────────────────────────────────────────────────────────
    # Balance
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def balance(
        emp_id: str,
        category: LeaveCategory,
        hire_date: Optional[date],
        requests: Iterable[LeaveRequestRecord] = (),
        adjustments: Iterable[LeaveAdjustmentRecord] = (),
        *,
        as_of: Optional[date] = None,
        holidays: Sequence[HolidayLike] = (),
        schedule: Optional[WorkSchedule] = None,
        policy: Optional[LeavePolicy] = None,
    ) -> LeaveBalance:
        """Remaining balance of one employee for one category.

        Only approved requests matching ``emp_id`` and ``category`` count;
        special leave uses the cumulative-since-hire entitlement.
        """
        total = entitlement(category, hire_date, as_of, policy=policy).total_minutes
        used = LeaveBalanceService.used_minutes(
            requests, emp_id, category, holidays=holidays, schedule=schedule,
        )
        adjusted = LeaveBalanceService.total_adjustment_minutes(adjustments, emp_id, category)

        result = LeaveBalance(
            emp_id=emp_id,
            category=category,
            total_minutes=total,
            used_minutes=used,
            adjustment_minutes=adjusted,
            remaining_minutes=total - used + adjusted,
        )
        logger.debug(
            "Balance %s/%s: total=%d used=%d adjusted=%d remaining=%d",
            emp_id, category.value, total, used, adjusted, result.remaining_minutes,
        )
        return result

    # ─────────────────────────────────────────────────────────────────
    # Pre-approval check
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def check_request(
        candidate: TimeInterval,
        emp_id: str,
        category: LeaveCategory,
        hire_date: Optional[date],
        requests: Iterable[LeaveRequestRecord] = (),
        adjustments: Iterable[LeaveAdjustmentRecord] = (),
        *,
        as_of: Optional[date] = None,
        holidays: Sequence[HolidayLike] = (),
        schedule: Optional[WorkSchedule] = None,
        policy: Optional[LeavePolicy] = None,
    ) -> BalanceCheck:
        """Cost a not-yet-approved request against the current balance.

        Overdrawing yields ``BalanceCheckOutcome.insufficient_balance`` so
        that a human approver can still confirm it.
        """
        requested = LeaveBalanceService.interval_cost(
            candidate, holidays=holidays, schedule=schedule,
        )
        current = LeaveBalanceService.balance(
            emp_id,
            category,
            hire_date,
            requests,
            adjustments,
            as_of=as_of,
            holidays=holidays,
            schedule=schedule,
            policy=policy,
        )
        remaining = current.remaining_minutes
        after = remaining - requested

        if requested > remaining:
            message = (
                f"Insufficient {category.value} leave balance. "
                f"Remaining: {minutes_to_hours(remaining):.1f}h, "
                f"Requested: {minutes_to_hours(requested):.1f}h."
            )
            logger.info("Balance check for %s/%s: %s", emp_id, category.value, message)
            return BalanceCheck(
                outcome=BalanceCheckOutcome.insufficient_balance,
                requested_minutes=requested,
                remaining_minutes=remaining,
                remaining_after_minutes=after,
                message=message,
            )

        return BalanceCheck(
            outcome=BalanceCheckOutcome.ok,
            requested_minutes=requested,
            remaining_minutes=remaining,
            remaining_after_minutes=after,
        )
