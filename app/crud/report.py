# app/crud/report.py
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.models.action import Action
from app.models.category import Category
from app.models.report import DEFAULT_PRIORITY, STATUS_PENDING, Report
from app.models.responder import Responder
from app.models.user import User

ANONYMOUS = "Anonymous"


# --- Read helpers -------------------------------------------------------------

def _joined(db: Session):
    """
    reports INNER JOIN categories, LEFT JOIN users, LEFT JOIN responders,
    plus a correlated action count.
    """
    action_count = (
        select(func.count(Action.id))
        .where(Action.report_id == Report.id)
        .correlate(Report)
        .scalar_subquery()
    )
    return (
        db.query(Report, Category, User, Responder, action_count.label("action_count"))
        .join(Category, Report.category_id == Category.id)
        .outerjoin(User, Report.user_id == User.id)
        .outerjoin(Responder, Report.responder_id == Responder.id)
    )


def _row(
    r: Report,
    c: Category,
    u: Optional[User],
    resp: Optional[Responder],
    action_count: Optional[int],
) -> Dict[str, Any]:
    return {
        "id": r.id,
        "category_id": r.category_id,
        "user_id": r.user_id,
        "responder_id": r.responder_id,
        "description": r.description,
        "location": r.location,
        "priority": r.priority,
        "status": r.status,
        "created_at": r.created_at,
        "resolved_at": r.resolved_at,
        # missing optional relations fall back to display defaults
        "reporter_name": (u.pseudonym if u is not None and u.pseudonym else ANONYMOUS),
        "reporter_department": u.campus_dept if u is not None else None,
        "reporter_contact": u.optional_contact if u is not None else None,
        "category_name": c.name,
        "category_role": c.role,
        "category_contact": c.contact_info,
        "responder_name": resp.name if resp is not None else None,
        "responder_role": resp.role if resp is not None else None,
        "action_count": int(action_count or 0),
    }


def get_report(db: Session, report_id: int) -> Optional[Report]:
    return db.get(Report, report_id)


def get_report_for_update(db: Session, report_id: int) -> Optional[Report]:
    """
    Fresh read of the row for a write path: row-locked where the backend
    supports FOR UPDATE, and never served from the session's identity map.
    """
    return (
        db.query(Report)
        .filter(Report.id == report_id)
        .populate_existing()
        .with_for_update()
        .one_or_none()
    )



def get_report_detail(db: Session, report_id: int) -> Optional[Dict[str, Any]]:
    row = _joined(db).filter(Report.id == report_id).first()
    if not row:
        return None
    return _row(*row)


def list_reports(
    db: Session,
    *,
    status: Optional[str] = None,
    category_id: Optional[int] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Dict[str, Any]], int]:
    """Paged joined list plus the total count matching the same filters."""
    q = _joined(db)
    count_q = db.query(func.count(Report.id))

    if status:
        q = q.filter(Report.status == status)
        count_q = count_q.filter(Report.status == status)
    if category_id is not None:
        q = q.filter(Report.category_id == category_id)
        count_q = count_q.filter(Report.category_id == category_id)

    rows = (
        q.order_by(Report.created_at.desc(), Report.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    total = count_q.scalar() or 0
    return [_row(*r) for r in rows], int(total)


def list_reports_by_status(db: Session, status: str) -> List[Dict[str, Any]]:
    rows = (
        _joined(db)
        .filter(Report.status == status)
        .order_by(Report.created_at.desc(), Report.id.desc())
        .all()
    )
    return [_row(*r) for r in rows]


# --- Create / Delete ------------------------------------------------------------

def create_report(
    db: Session,
    *,
    category_id: int,
    user_id: Optional[int],
    description: str,
    location: Optional[str] = None,
    priority: Optional[str] = None,
) -> Report:
    obj = Report(
        category_id=category_id,
        user_id=user_id,
        description=description,
        location=location or None,
        priority=priority or DEFAULT_PRIORITY,
        status=STATUS_PENDING,
        responder_id=None,
        resolved_at=None,
    )
    db.add(obj)
    db.flush()
    return obj


def delete_report(db: Session, obj: Report) -> None:
    # actions go with it (ORM cascade + ON DELETE CASCADE)
    db.delete(obj)
    db.flush()


# --- Conditional writes -----------------------------------------------------------
# Both return True only for the request whose UPDATE matched the row, so
# concurrent writers cannot both win.

def stamp_resolved(db: Session, report_id: int, when: datetime) -> bool:
    result = db.execute(
        update(Report)
        .where(Report.id == report_id, Report.resolved_at.is_(None))
        .values(resolved_at=when)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def assign_if_unassigned(db: Session, report_id: int, responder_id: int) -> bool:
    result = db.execute(
        update(Report)
        .where(Report.id == report_id, Report.responder_id.is_(None))
        .values(responder_id=responder_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
