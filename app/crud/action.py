# app/crud/action.py
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.action import DEFAULT_ACTION_TYPE, Action
from app.models.report import Report
from app.models.responder import Responder


def _joined(db: Session):
    return (
        db.query(Action, Responder, Report)
        .join(Responder, Action.responder_id == Responder.id)
        .join(Report, Action.report_id == Report.id)
    )


def _row(a: Action, resp: Responder, rep: Report) -> Dict[str, Any]:
    return {
        "id": a.id,
        "report_id": a.report_id,
        "responder_id": a.responder_id,
        "description": a.description,
        "type": a.type,
        "timestamp": a.timestamp,
        "responder_name": resp.name,
        "responder_role": resp.role,
        "responder_contact": resp.contact_info,
        "report_description": rep.description,
        "report_status": rep.status,
    }


def get_action(db: Session, action_id: int) -> Optional[Dict[str, Any]]:
    row = _joined(db).filter(Action.id == action_id).first()
    if not row:
        return None
    return _row(*row)


def list_actions(db: Session, skip: int = 0, limit: int = 200) -> List[Dict[str, Any]]:
    rows = (
        _joined(db)
        .order_by(Action.timestamp.desc(), Action.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return [_row(*r) for r in rows]


def list_actions_for_report(db: Session, report_id: int) -> List[Dict[str, Any]]:
    rows = (
        _joined(db)
        .filter(Action.report_id == report_id)
        .order_by(Action.timestamp.desc(), Action.id.desc())
        .all()
    )
    return [_row(*r) for r in rows]


def count_actions(db: Session) -> int:
    return db.query(func.count(Action.id)).scalar() or 0


def create_action(
    db: Session,
    *,
    report_id: int,
    responder_id: int,
    description: str,
    type: Optional[str] = None,
) -> Action:
    obj = Action(
        report_id=report_id,
        responder_id=responder_id,
        description=description,
        type=type or DEFAULT_ACTION_TYPE,
    )
    db.add(obj)
    db.flush()
    return obj
