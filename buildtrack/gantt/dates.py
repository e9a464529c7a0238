# Rev 0.1.0
"""Calendar helpers shared by the timeline engine. All values are ``datetime.date``."""
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Optional

from ..utils.logging_setup import get_logger

_log = get_logger(__name__)


def parse_date(value) -> Optional[date]:
    """Coerce a store value (date, datetime, ISO string, None) to a date.

    Strings that are not ISO dates log a warning and come back as None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    # tolerate full timestamps such as "2024-01-10T00:00:00Z"
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        # placeholders like "TBD" read as missing; the bar is shown undated
        _log.warning("Unparseable date %r treated as missing", value)
        return None


def days_between(later: date, earlier: date) -> int:
    """Signed whole days from ``earlier`` to ``later``."""
    return (later - earlier).days


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def add_months(d: date, n: int) -> date:
    """Shift by whole months; only used with first-of-month dates."""
    idx = d.year * 12 + (d.month - 1) + n
    return date(idx // 12, idx % 12 + 1, 1)


def start_of_week(d: date) -> date:
    # weeks start on Monday
    return d - timedelta(days=d.weekday())


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def start_of_quarter(d: date) -> date:
    return date(d.year, 3 * ((d.month - 1) // 3) + 1, 1)


def next_week(d: date) -> date:
    return start_of_week(d) + timedelta(days=7)


def next_month(d: date) -> date:
    return add_months(start_of_month(d), 1)


def next_quarter(d: date) -> date:
    return add_months(start_of_quarter(d), 3)


def quarter_of(d: date) -> int:
    return (d.month - 1) // 3 + 1
