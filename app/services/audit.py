# app/services/audit.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from fastapi import Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog

REPORT_CREATED = "REPORT_CREATED"
REPORT_STATUS_CHANGED = "REPORT_STATUS_CHANGED"
RESPONDER_ASSIGNED = "RESPONDER_ASSIGNED"
REPORT_RESOLVED = "REPORT_RESOLVED"
REPORT_DELETED = "REPORT_DELETED"
ACTION_LOGGED = "ACTION_LOGGED"


# -----------------------------
# Helpers
# -----------------------------
def ip_from_request(request: Optional[Request]) -> Optional[str]:
    """
    Client IP extraction compatible with proxies.
    Order:
      - X-Forwarded-For (first in the list)
      - X-Real-IP
      - request.client.host
    """
    if request is None:
        return None

    xff = request.headers.get("x-forwarded-for")
    if xff:
        first = xff.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    client = getattr(request, "client", None)
    return getattr(client, "host", None)


# -----------------------------
# Core API
# -----------------------------
def audit_log(
    db: Session,
    *,
    action: str,
    entity_type: Optional[str],
    entity_id: Optional[int],
    meta: Optional[Dict[str, Any]] = None,
    ip: Optional[str] = None,
) -> AuditLog:
    """
    Adds an audit record to the current unit of work.
    It is committed (or rolled back) together with the change it describes.
    """
    row = AuditLog(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta=meta or {},
        ip_address=ip,
    )
    db.add(row)
    db.flush()
    return row


def list_audit_logs(
    db: Session,
    *,
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    action: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[AuditLog], int]:
    q = db.query(AuditLog)
    if entity_type:
        q = q.filter(AuditLog.entity_type == entity_type)
    if entity_id is not None:
        q = q.filter(AuditLog.entity_id == entity_id)
    if action:
        q = q.filter(AuditLog.action == action)

    total = q.with_entities(func.count(AuditLog.id)).scalar() or 0
    rows = (
        q.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return rows, int(total)
