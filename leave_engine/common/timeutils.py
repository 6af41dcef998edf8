"""Civil-time helpers: parsing into one fixed zone and pure calendar arithmetic.

Every instant handled by the engine is a *naive* ``datetime`` expressed in
the configured civil zone. Aware inputs are converted once, at parse time,
so nothing downstream depends on ambient timezone state.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import Union
from zoneinfo import ZoneInfo

from leave_engine.common.constants import TIMEZONE
from leave_engine.common.exceptions import InvalidDateFormat

InstantLike = Union[str, datetime, date]
DateLike = Union[str, date]


def parse_instant(value: InstantLike, field: str = "value", tz: str = TIMEZONE) -> datetime:
    """Read ``value`` as a naive civil datetime in ``tz``.

    Accepts ISO-8601 strings (``2024-05-20 08:30``, ``2024-05-20T00:30:00Z``,
    ``2024-05-20``), ``datetime`` and ``date`` objects. Anything else raises
    :class:`InvalidDateFormat`.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidDateFormat(field, value) from None
    else:
        raise InvalidDateFormat(field, value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz)).replace(tzinfo=None)
    return parsed


def parse_civil_date(value: DateLike, field: str = "date") -> date:
    """Read ``value`` as a calendar date (times are dropped)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            # A time part is only allowed after "T" or a space.
            if text[10:11] in ("T", " "):
                return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise InvalidDateFormat(field, value)


def at(day: date, clock: time) -> datetime:
    return datetime.combine(day, clock)


def next_midnight(day: date) -> datetime:
    return datetime.combine(day + timedelta(days=1), time.min)


def whole_minutes(start: datetime, end: datetime) -> int:
    """Elapsed whole minutes from ``start`` to ``end`` (0 when not positive)."""
    if end <= start:
        return 0
    return int((end - start).total_seconds() // 60)


def overlap_minutes(
    start_a: datetime,
    end_a: datetime,
    start_b: datetime,
    end_b: datetime,
) -> int:
    """Whole minutes shared by ``[start_a, end_a)`` and ``[start_b, end_b)``."""
    return whole_minutes(max(start_a, start_b), min(end_a, end_b))


def iter_days(start: date, end: date):
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by ``months``, clamping to the last day of short months."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    _, last_day = monthrange(year, month)
    return date(year, month, min(day.day, last_day))


def elapsed_months(since: date, until: date) -> int:
    """Month difference by calendar year/month only; the day of month is ignored."""
    return (until.year - since.year) * 12 + (until.month - since.month)
