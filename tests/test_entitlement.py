"""Leave entitlement tests — flat caps, special-leave tiers (snapshot and
cumulative), tier boundaries, accrual milestones and schedule.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

import pytest

from leave_engine.common.constants import AccrualMode, LeaveCategory
from leave_engine.common.exceptions import MissingHireDate
from leave_engine.common.timeutils import add_months
from leave_engine.leave.entitlement import (
    LeavePolicy,
    accrual_schedule,
    annual_grant_days,
    cumulative_days,
    entitlement,
    next_accrual_milestone,
    snapshot_days,
    tenure_months,
)

HIRE = date(2020, 1, 15)


def _as_of(months: int) -> date:
    return add_months(HIRE, months)


# ═════════════════════════════════════════════════════════════════════
# 1. Flat caps
# ═════════════════════════════════════════════════════════════════════


class TestFlatCaps:

    def test_personal_leave_is_fourteen_days(self):
        result = entitlement(LeaveCategory.personal, HIRE, _as_of(1))
        assert result.total_days == 14
        assert result.total_minutes == 14 * 480

    def test_sick_leave_is_thirty_days(self):
        result = entitlement(LeaveCategory.sick, HIRE, _as_of(1))
        assert result.total_days == 30
        assert result.total_minutes == 14400

    def test_flat_caps_need_no_hire_date(self):
        assert entitlement(LeaveCategory.personal, None).total_minutes == 6720
        assert entitlement(LeaveCategory.sick, None).total_minutes == 14400

    def test_flat_caps_ignore_tenure(self):
        early = entitlement(LeaveCategory.personal, HIRE, _as_of(0))
        late = entitlement(LeaveCategory.personal, HIRE, _as_of(240))
        assert early.total_days == late.total_days

    def test_custom_policy(self):
        policy = LeavePolicy(personal_days=10, sick_days=20)
        assert entitlement(LeaveCategory.personal, policy=policy).total_days == 10
        assert entitlement(LeaveCategory.sick, policy=policy).total_days == 20


# ═════════════════════════════════════════════════════════════════════
# 2. Special leave tiers
# ═════════════════════════════════════════════════════════════════════


class TestSpecialLeaveTiers:

    @pytest.mark.parametrize(
        "months, expected",
        [
            (0, 0),
            (5, 0),
            (6, 3),
            (11, 3),
            (12, 10),
            (24, 20),
            (36, 34),
            (60, 63),
            (108, 123),
            (120, 139),
            (132, 156),
        ],
    )
    def test_cumulative_at_boundaries(self, months, expected):
        result = entitlement(LeaveCategory.special, HIRE, _as_of(months))
        assert result.mode is AccrualMode.cumulative
        assert result.total_days == expected
        assert result.total_minutes == expected * 480

    @pytest.mark.parametrize(
        "months, expected",
        [
            (5, 0),
            (6, 3),
            (12, 7),
            (23, 7),
            (24, 10),
            (36, 14),
            (59, 14),
            (60, 15),
            (119, 15),
            (120, 16),
            (144, 18),
            (300, 30),
        ],
    )
    def test_snapshot_at_boundaries(self, months, expected):
        result = entitlement(
            LeaveCategory.special, HIRE, _as_of(months), mode=AccrualMode.snapshot,
        )
        assert result.total_days == expected

    def test_cumulative_is_monotonic(self):
        """Cumulative entitlement never decreases as tenure grows."""
        previous = 0
        for months in range(0, 480):
            current = cumulative_days(months)
            assert current >= previous
            previous = current

    def test_annual_grant_is_capped(self):
        assert annual_grant_days(24) == 30
        assert annual_grant_days(40) == 30
        assert annual_grant_days(24, cap=20) == 20

    def test_snapshot_uses_policy_cap(self):
        policy = LeavePolicy(special_max_days_per_year=20)
        result = entitlement(
            LeaveCategory.special, HIRE, _as_of(300), mode=AccrualMode.snapshot, policy=policy,
        )
        assert result.total_days == 20

    def test_boundary_uses_whole_months_only(self):
        """Hired 31 Jan, checked 1 Jul → 6 elapsed months → first grant."""
        assert tenure_months(date(2024, 1, 31), date(2024, 7, 1)) == 6
        result = entitlement(LeaveCategory.special, date(2024, 1, 31), date(2024, 7, 1))
        assert result.total_days == 3

    def test_future_hire_date_counts_as_zero(self):
        assert tenure_months(date(2030, 1, 1), date(2024, 1, 1)) == 0
        assert snapshot_days(0) == 0

    def test_missing_hire_date_degrades_to_zero(self, caplog):
        """No hire date → special leave is 0, with a warning logged."""
        with caplog.at_level(logging.WARNING, logger="leave_engine.leave.entitlement"):
            result = entitlement(LeaveCategory.special, None)
        assert result.total_days == 0
        assert result.total_minutes == 0
        assert "without hire date" in caplog.text

    def test_tenure_months_requires_hire_date(self):
        with pytest.raises(MissingHireDate):
            tenure_months(None, date(2024, 1, 1))


# ═════════════════════════════════════════════════════════════════════
# 3. Milestones and accrual schedule
# ═════════════════════════════════════════════════════════════════════


class TestMilestones:

    def test_before_six_months(self):
        """Next grant is the one-time 3 days, from the 1st of the sixth month."""
        milestone = next_accrual_milestone(date(2024, 1, 15), date(2024, 3, 1))
        assert milestone is not None
        assert milestone.date == date(2024, 7, 1)
        assert milestone.days_granted == 3

    def test_between_six_and_twelve_months(self):
        milestone = next_accrual_milestone(date(2024, 1, 15), date(2024, 8, 1))
        assert milestone.date == date(2025, 1, 1)
        assert milestone.days_granted == 7

    def test_in_fifteen_day_tier(self):
        """After five years the sixth anniversary grants 15 days."""
        milestone = next_accrual_milestone(date(2024, 1, 15), date(2029, 2, 1))
        assert milestone.date == date(2030, 1, 1)
        assert milestone.days_granted == 15

    def test_tenth_anniversary_grants_sixteen(self):
        milestone = next_accrual_milestone(HIRE, _as_of(115))
        assert milestone.date == date(2030, 1, 1)
        assert milestone.days_granted == 16

    def test_month_before_anniversary(self):
        """Hired 20 Jun; on 31 May the next grant starts 1 Jun."""
        hire = date(2020, 6, 20)
        milestone = next_accrual_milestone(hire, date(2021, 5, 31))
        assert milestone.date == date(2021, 6, 1)
        assert milestone.days_granted == 7

    def test_anniversary_month_before_anniversary_day(self):
        """On 5 Jun the 20 Jun anniversary grant is already counted."""
        hire = date(2020, 6, 20)
        assert entitlement(LeaveCategory.special, hire, date(2021, 6, 5)).total_days == 10
        milestone = next_accrual_milestone(hire, date(2021, 6, 5))
        assert milestone.date == date(2022, 6, 1)
        assert milestone.days_granted == 10

    @pytest.mark.parametrize(
        "hire, as_of",
        [
            (date(2020, 6, 20), date(2020, 9, 30)),
            (date(2020, 6, 20), date(2021, 5, 31)),
            (date(2020, 6, 20), date(2021, 6, 5)),
            (date(2021, 1, 31), date(2026, 12, 31)),
        ],
    )
    def test_entitlement_changes_on_milestone_date(self, hire, as_of):
        """The day before the milestone keeps the old total; the milestone adds the grant."""
        milestone = next_accrual_milestone(hire, as_of)
        before = entitlement(LeaveCategory.special, hire, milestone.date - timedelta(days=1))
        on = entitlement(LeaveCategory.special, hire, milestone.date)
        assert before.total_days == entitlement(LeaveCategory.special, hire, as_of).total_days
        assert on.total_days - before.total_days == milestone.days_granted

    def test_leap_day_hire(self):
        milestone = next_accrual_milestone(date(2024, 2, 29), date(2024, 9, 1))
        assert milestone.date == date(2025, 2, 1)

    def test_no_hire_date(self):
        assert next_accrual_milestone(None) is None

    def test_schedule_sums_to_cumulative(self):
        for months in (0, 6, 12, 37, 61, 125):
            grants = accrual_schedule(HIRE, _as_of(months))
            assert sum(g.days_granted for g in grants) == cumulative_days(months)

    def test_schedule_dates(self):
        grants = accrual_schedule(HIRE, _as_of(25))
        assert [g.date for g in grants] == [
            date(2020, 7, 1),
            date(2021, 1, 1),
            date(2022, 1, 1),
        ]
        assert [g.days_granted for g in grants] == [3, 7, 10]

    def test_schedule_without_hire_date(self):
        assert accrual_schedule(None) == []
