"""Shared test fixtures — app, HTTP client, record factories.

The engine is pure, so most suites call it directly; API tests go through
an ``httpx.AsyncClient`` bound to a fresh app instance.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from leave_engine.common.constants import LeaveCategory, LeaveStatus
from leave_engine.leave.schemas import (
    LeaveAdjustmentRecord,
    LeaveRequestRecord,
    TimeInterval,
)
from leave_engine.main import create_app

# 2024-05-20 is a Monday.
MONDAY = date(2024, 5, 20)
TUESDAY = date(2024, 5, 21)
SATURDAY = date(2024, 5, 18)


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
def app():
    """Create a fresh app instance."""
    return create_app()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Record factories ────────────────────────────────────────────────

def _make_request(
    start: str,
    end: str,
    *,
    emp_id: str = "E001",
    category: LeaveCategory = LeaveCategory.special,
    status: LeaveStatus = LeaveStatus.approved,
) -> LeaveRequestRecord:
    return LeaveRequestRecord(
        emp_id=emp_id,
        category=category,
        interval=TimeInterval(
            start=datetime.fromisoformat(start),
            end=datetime.fromisoformat(end),
        ),
        status=status,
    )


def _make_adjustment(
    minutes: int,
    *,
    emp_id: str = "E001",
    category: LeaveCategory = LeaveCategory.special,
    reason: str = "Manual correction",
    created_by: str = "HR01",
) -> LeaveAdjustmentRecord:
    return LeaveAdjustmentRecord(
        emp_id=emp_id,
        category=category,
        minutes=minutes,
        reason=reason,
        created_by=created_by,
        created_at=datetime(2024, 1, 2, 9, 0),
    )
