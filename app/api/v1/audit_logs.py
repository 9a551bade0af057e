# app/api/v1/audit_logs.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.audit import AuditLogOut
from app.schemas.common import Envelope, listing
from app.services.audit import list_audit_logs

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("/logs", response_model=Envelope[List[AuditLogOut]])
def audit_logs(
    response: Response,
    entity_type: Optional[str] = Query(
        None, alias="entityType", description="Exact match on entity_type (e.g. report)"
    ),
    entity_id: Optional[int] = Query(None, alias="entityId"),
    action: Optional[str] = Query(
        None, description="Exact match on action (e.g. REPORT_STATUS_CHANGED)"
    ),
    limit: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Read-only audit trail, newest first.
    Header X-Total-Count holds the number of matching records.
    """
    rows, total = list_audit_logs(
        db,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        limit=limit,
        offset=offset,
    )
    response.headers["X-Total-Count"] = str(total)
    return listing([AuditLogOut.model_validate(r) for r in rows], total=total)
