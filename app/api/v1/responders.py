# app/api/v1/responders.py
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud import responder as crud_responder
from app.db.session import get_db, transaction
from app.schemas.common import Envelope, envelope, listing
from app.schemas.responder import ResponderCreate, ResponderOut
from app.services import metrics

router = APIRouter(prefix="/responders", tags=["responders"])


def _with_score(row: Dict[str, Any]) -> Dict[str, Any]:
    row["performance_score"] = metrics.performance_score(
        row["completed_reports"], row["assigned_reports"]
    )
    return row


@router.get("", response_model=Envelope[List[ResponderOut]])
def list_responders(db: Session = Depends(get_db)):
    return listing([_with_score(r) for r in crud_responder.list_responders(db)])


@router.get("/{responder_id}", response_model=Envelope[ResponderOut])
def get_responder(responder_id: int, db: Session = Depends(get_db)):
    row = crud_responder.get_responder_detail(db, responder_id)
    if row is None:
        raise NotFoundError("Responder not found")
    return envelope(_with_score(row))


@router.post("", response_model=Envelope[ResponderOut], status_code=status.HTTP_201_CREATED)
def create_responder(payload: ResponderCreate, db: Session = Depends(get_db)):
    with transaction(db):
        obj = crud_responder.create_responder(db, payload)
    row = crud_responder.get_responder_detail(db, obj.id)
    return envelope(_with_score(row), message="Responder created successfully")
