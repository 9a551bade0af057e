# app/api/v1/actions.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud import action as crud_action
from app.crud import report as crud_report
from app.db.session import get_db
from app.schemas.action import ActionCreate, ActionOut
from app.schemas.common import Envelope, envelope, listing
from app.services import lifecycle
from app.services.audit import ip_from_request

router = APIRouter(prefix="/actions", tags=["actions"])


@router.get("", response_model=Envelope[List[ActionOut]])
def list_actions(
    skip: int = Query(0, ge=0),
    limit: int = Query(200, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return listing(crud_action.list_actions(db, skip=skip, limit=limit))


@router.get("/report/{report_id}", response_model=Envelope[List[ActionOut]])
def list_report_actions(report_id: int, db: Session = Depends(get_db)):
    if crud_report.get_report(db, report_id) is None:
        raise NotFoundError("Report not found")
    return listing(crud_action.list_actions_for_report(db, report_id))


@router.get("/{action_id}", response_model=Envelope[ActionOut])
def get_action(action_id: int, db: Session = Depends(get_db)):
    row = crud_action.get_action(db, action_id)
    if row is None:
        raise NotFoundError("Action not found")
    return envelope(row)


@router.post("", response_model=Envelope[ActionOut], status_code=status.HTTP_201_CREATED)
def create_action(payload: ActionCreate, request: Request, db: Session = Depends(get_db)):
    """
    Log work on a report. A Pending report moves to In Progress, and an
    unassigned report is assigned to the acting responder.
    """
    action = lifecycle.log_action(db, payload, ip=ip_from_request(request))
    return envelope(crud_action.get_action(db, action.id), message="Action logged successfully")
