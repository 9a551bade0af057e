# app/services/statistics.py
"""
Aggregate statistics over reports. Always recomputed from the database.

Counting is done in SQL; response times are derived in Python from
(created_at, resolved_at) so the per-report value, the average and the
above-average list all share metrics.response_time_hours.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.config import get_settings
from app.crud import action as crud_action
from app.crud import category as crud_category
from app.crud import responder as crud_responder
from app.crud import user as crud_user
from app.models.category import Category
from app.models.report import (
    STATUS_CLOSED,
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
    STATUS_RESOLVED,
    STATUS_UNDER_REVIEW,
    Report,
)
from app.models.responder import Responder
from app.services import metrics

log = logging.getLogger("app.statistics")

CRITICAL = "Critical"


def _total_reports(db: Session) -> int:
    return int(db.query(func.count(Report.id)).scalar() or 0)


def status_counts(db: Session) -> Dict[str, int]:
    rows = db.query(Report.status, func.count(Report.id)).group_by(Report.status).all()
    return {status: int(n) for status, n in rows}


def status_breakdown(db: Session, total: Optional[int] = None) -> List[Dict[str, Any]]:
    counts = status_counts(db)
    if total is None:
        total = sum(counts.values())
    out = [
        {"status": s, "count": n, "percentage": metrics.percent(n, total)}
        for s, n in counts.items()
    ]
    out.sort(key=lambda r: (-r["count"], r["status"]))
    return out


def category_breakdown(
    db: Session,
    total: Optional[int] = None,
    include_empty: Optional[bool] = None,
) -> List[Dict[str, Any]]:
    if include_empty is None:
        include_empty = get_settings().stats_include_empty_categories
    if total is None:
        total = _total_reports(db)

    n = func.count(Report.id)
    q = (
        db.query(Category.id, Category.name, n.label("n"))
        .outerjoin(Report, Report.category_id == Category.id)
        .group_by(Category.id, Category.name)
    )
    if not include_empty:
        q = q.having(n > 0)
    rows = q.order_by(n.desc(), Category.name.asc()).all()

    return [
        {
            "category_id": cid,
            "name": name,
            "count": int(count),
            "percentage": metrics.percent(int(count), total),
        }
        for cid, name, count in rows
    ]


def totals(db: Session, total_reports: Optional[int] = None) -> Dict[str, int]:
    return {
        "total_reports": _total_reports(db) if total_reports is None else total_reports,
        "total_users": int(crud_user.count_active_users(db)),
        "total_responders": int(crud_responder.count_available_responders(db)),
        "total_actions": int(crud_action.count_actions(db)),
        "total_categories": int(crud_category.count_categories(db)),
    }


def _response_times(db: Session, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    now = now or utcnow()
    rows = (
        db.query(Report.id, Report.description, Report.status, Report.created_at, Report.resolved_at)
        .order_by(Report.id.asc())
        .all()
    )
    return [
        {
            "id": rid,
            "description": desc,
            "status": status,
            "response_time_hours": metrics.response_time_hours(created, resolved, now=now),
        }
        for rid, desc, status, created, resolved in rows
    ]


def average_response_time(db: Session, now: Optional[datetime] = None) -> float:
    return metrics.average(r["response_time_hours"] for r in _response_times(db, now))


def above_average_response_time(
    db: Session, limit: int = 5, now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """Reports slower than the average, slowest first."""
    times = _response_times(db, now)
    avg = metrics.average(r["response_time_hours"] for r in times)
    slow = [r for r in times if r["response_time_hours"] > avg]
    slow.sort(key=lambda r: (-r["response_time_hours"], r["id"]))
    return slow[:limit]


def critical_responders(db: Session) -> List[Dict[str, Any]]:
    n = func.count(Report.id)
    rows = (
        db.query(Responder.id, Responder.name, Responder.role, n.label("n"))
        .join(Report, Report.responder_id == Responder.id)
        .filter(Report.priority == CRITICAL)
        .group_by(Responder.id, Responder.name, Responder.role)
        .order_by(n.desc(), Responder.name.asc())
        .all()
    )
    return [
        {"id": rid, "name": name, "role": role, "critical_reports": int(count)}
        for rid, name, role, count in rows
    ]


def summary(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    counts = status_counts(db)
    total = sum(counts.values())
    resolved = counts.get(STATUS_RESOLVED, 0)
    return {
        "total_reports": total,
        "pending_reports": counts.get(STATUS_PENDING, 0),
        "in_progress_reports": counts.get(STATUS_IN_PROGRESS, 0),
        "under_review_reports": counts.get(STATUS_UNDER_REVIEW, 0),
        "resolved_reports": resolved,
        "closed_reports": counts.get(STATUS_CLOSED, 0),
        "resolution_rate": metrics.resolution_rate(resolved, total),
        "average_response_time_hours": average_response_time(db, now),
        "average_actions_per_report": metrics.ratio(crud_action.count_actions(db), total),
    }


def build_report_stats(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Everything GET /reports/stats returns, in one pass."""
    now = now or utcnow()
    head = summary(db, now)
    total = head["total_reports"]

    bundle = {
        "totals": totals(db, total_reports=total),
        "summary": head,
        "by_status": status_breakdown(db, total),
        "by_category": category_breakdown(db, total),
        "above_average_response_time": above_average_response_time(db, now=now),
        "critical_responders": critical_responders(db),
        "valid_statuses": list(get_settings().valid_statuses),
    }
    log.debug(
        "stats computed total=%s resolution_rate=%s avg_hours=%s",
        total,
        head["resolution_rate"],
        head["average_response_time_hours"],
    )
    return bundle
