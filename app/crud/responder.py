# app/crud/responder.py
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.models.action import Action
from app.models.report import STATUS_CLOSED, STATUS_RESOLVED, Report
from app.models.responder import Responder
from app.schemas.responder import ResponderCreate


def get_responder(db: Session, responder_id: int) -> Optional[Responder]:
    return db.get(Responder, responder_id)


def _with_workload(db: Session):
    """
    Responders LEFT JOINed with per-responder action counts and assignment counts.
    Aggregated in subqueries so the two joins don't multiply each other.
    """
    actions = (
        select(Action.responder_id, func.count(Action.id).label("n_actions"))
        .group_by(Action.responder_id)
        .subquery()
    )
    assigned = (
        select(
            Report.responder_id,
            func.count(Report.id).label("n_assigned"),
            func.sum(
                case((Report.status.in_([STATUS_RESOLVED, STATUS_CLOSED]), 1), else_=0)
            ).label("n_done"),
        )
        .where(Report.responder_id.isnot(None))
        .group_by(Report.responder_id)
        .subquery()
    )
    return (
        db.query(
            Responder,
            func.coalesce(actions.c.n_actions, 0),
            func.coalesce(assigned.c.n_assigned, 0),
            func.coalesce(assigned.c.n_done, 0),
        )
        .outerjoin(actions, actions.c.responder_id == Responder.id)
        .outerjoin(assigned, assigned.c.responder_id == Responder.id)
    )


def _row(r: Responder, n_actions, n_assigned, n_done) -> Dict[str, Any]:
    return {
        "id": r.id,
        "name": r.name,
        "role": r.role,
        "contact_info": r.contact_info,
        "department": r.department,
        "is_available": bool(r.is_available),
        "total_resolved": int(r.total_resolved or 0),
        "action_count": int(n_actions or 0),
        "assigned_reports": int(n_assigned or 0),
        "completed_reports": int(n_done or 0),
    }


def list_responders(db: Session) -> List[Dict[str, Any]]:
    rows = _with_workload(db).order_by(Responder.name.asc(), Responder.id.asc()).all()
    return [_row(*r) for r in rows]


def get_responder_detail(db: Session, responder_id: int) -> Optional[Dict[str, Any]]:
    row = _with_workload(db).filter(Responder.id == responder_id).first()
    if not row:
        return None
    return _row(*row)


def count_available_responders(db: Session) -> int:
    return (
        db.query(func.count(Responder.id))
        .filter(Responder.is_available.is_(True))
        .scalar()
        or 0
    )


def create_responder(db: Session, data: ResponderCreate) -> Responder:
    obj = Responder(
        name=data.name,
        role=data.role,
        contact_info=data.contact_info,
        department=data.department,
        is_available=data.is_available,
        total_resolved=0,
    )
    db.add(obj)
    db.flush()
    return obj


def increment_total_resolved(db: Session, responder: Responder) -> None:
    # evaluated in SQL; the attribute reloads on next access
    responder.total_resolved = Responder.total_resolved + 1
    db.flush()
