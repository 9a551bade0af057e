# app/services/metrics.py
"""
Pure numeric helpers shared by the statistics bundle, report details
and responder profiles. One rounding policy everywhere:

- percentages: half-up to the nearest integer, 0 when the denominator is 0
- response time: whole hours, truncated
- averages: 2 decimals
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from app.core.clock import utcnow


def percent(part: int, whole: int) -> int:
    if not whole or whole <= 0:
        return 0
    return int(part * 100.0 / whole + 0.5)


def resolution_rate(resolved: int, total: int) -> int:
    """Resolved share of all reports, as an integer percent."""
    return percent(resolved, total)


def performance_score(completed: int, assigned: int) -> int:
    """Percent of a responder's assigned reports that are Resolved or Closed."""
    return percent(completed, assigned)


def response_time_hours(
    created_at: datetime,
    resolved_at: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> int:
    """
    Whole hours between creation and resolution, or until `now` while unresolved.
    """
    end = resolved_at or now or utcnow()
    seconds = (end - created_at).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 3600)


def average(values: Iterable[float]) -> float:
    vals = list(values)
    if not vals:
        return 0.0
    return round(sum(vals) / len(vals), 2)


def ratio(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round(part / whole, 2)
