# app/services/lifecycle.py
"""
Report lifecycle rules.

Every public function runs as one unit of work: the report change, the
responder counter and the audit rows are committed together or not at all.

Status rules:
  - new reports always start as Pending, unassigned, unresolved
  - any whitelisted status may follow any other (no transition graph)
  - first entry into Resolved stamps resolved_at and bumps the assigned
    responder's total_resolved once; re-resolving never counts again
  - logging an action on a Pending report moves it to In Progress;
    an unassigned report picks up the acting responder
  - In Progress / Under Review reports cannot be deleted
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.config import get_settings
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.crud import action as crud_action
from app.crud import category as crud_category
from app.crud import report as crud_report
from app.crud import responder as crud_responder
from app.crud import user as crud_user
from app.db.session import transaction
from app.models.action import Action
from app.models.report import (
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
    STATUS_RESOLVED,
    Report,
)
from app.schemas.action import ActionCreate
from app.schemas.report import ReportCreate
from app.services import audit

log = logging.getLogger("app.lifecycle")


def valid_statuses() -> Tuple[str, ...]:
    return get_settings().valid_statuses


def ensure_valid_status(status: str) -> str:
    allowed = valid_statuses()
    if status not in allowed:
        raise ValidationError(
            f"Invalid status. Must be one of: {', '.join(allowed)}",
            details={"validStatuses": list(allowed)},
        )
    return status


def _load_report(db: Session, report_id: int) -> Report:
    report = crud_report.get_report_for_update(db, report_id)
    if report is None:
        raise NotFoundError("Report not found")
    return report


# ---------------------------
# SUBMIT
# ---------------------------
def submit_report(db: Session, payload: ReportCreate, *, ip: Optional[str] = None) -> Report:
    with transaction(db):
        if crud_category.get_category(db, payload.category_id) is None:
            raise NotFoundError("Category not found")

        # unknown users are not an error: the report just becomes anonymous
        user_id = None
        if not payload.is_anonymous and payload.user_id:
            if crud_user.get_user(db, payload.user_id) is not None:
                user_id = payload.user_id
            else:
                log.info("user #%s not found, filing report anonymously", payload.user_id)

        report = crud_report.create_report(
            db,
            category_id=payload.category_id,
            user_id=user_id,
            description=payload.description,
            location=payload.location,
            priority=payload.priority,
        )
        audit.audit_log(
            db,
            action=audit.REPORT_CREATED,
            entity_type="report",
            entity_id=report.id,
            meta={
                "category_id": report.category_id,
                "priority": report.priority,
                "anonymous": user_id is None,
            },
            ip=ip,
        )

    log.info(
        "report #%s submitted category=%s priority=%s anonymous=%s",
        report.id,
        report.category_id,
        report.priority,
        report.user_id is None,
    )
    return report


# ---------------------------
# STATUS UPDATE
# ---------------------------
def update_status(
    db: Session,
    report_id: int,
    status: str,
    *,
    responder_id: Optional[int] = None,
    ip: Optional[str] = None,
) -> Report:
    status = ensure_valid_status(status)

    with transaction(db):
        report = _load_report(db, report_id)
        old_status = report.status

        if responder_id is not None:
            responder = crud_responder.get_responder(db, responder_id)
            if responder is None:
                raise NotFoundError("Responder not found")
            if report.responder_id != responder.id:
                previous = report.responder_id
                report.responder_id = responder.id
                audit.audit_log(
                    db,
                    action=audit.RESPONDER_ASSIGNED,
                    entity_type="report",
                    entity_id=report.id,
                    meta={"responder_id": responder.id, "previous_responder_id": previous},
                    ip=ip,
                )

        report.status = status
        db.flush()

        if status == STATUS_RESOLVED and old_status != STATUS_RESOLVED and report.resolved_at is None:
            _mark_resolved(db, report, ip=ip)

        if old_status != status:
            audit.audit_log(
                db,
                action=audit.REPORT_STATUS_CHANGED,
                entity_type="report",
                entity_id=report.id,
                meta={"old_status": old_status, "new_status": status},
                ip=ip,
            )

    log.info("report #%s status %r -> %r", report.id, old_status, status)
    return report


def _mark_resolved(db: Session, report: Report, *, ip: Optional[str]) -> None:
    claimed = crud_report.stamp_resolved(db, report.id, utcnow())
    db.refresh(report, attribute_names=["resolved_at"])
    if not claimed:
        log.info("report #%s was already resolved by another request", report.id)
        return

    if report.responder_id is not None:
        responder = crud_responder.get_responder(db, report.responder_id)
        if responder is not None:
            crud_responder.increment_total_resolved(db, responder)
            log.info("responder #%s credited for resolving report #%s", responder.id, report.id)
    audit.audit_log(
        db,
        action=audit.REPORT_RESOLVED,
        entity_type="report",
        entity_id=report.id,
        meta={"responder_id": report.responder_id},
        ip=ip,
    )


# ---------------------------
# ACTIONS
# ---------------------------
def log_action(db: Session, payload: ActionCreate, *, ip: Optional[str] = None) -> Action:
    with transaction(db):
        report = _load_report(db, payload.report_id)
        responder = crud_responder.get_responder(db, payload.responder_id)
        if responder is None:
            raise NotFoundError("Responder not found")

        action = crud_action.create_action(
            db,
            report_id=report.id,
            responder_id=responder.id,
            description=payload.description,
            type=payload.type,
        )

        old_status = report.status
        assigned = False
        if report.responder_id is None:
            assigned = crud_report.assign_if_unassigned(db, report.id, responder.id)
            db.refresh(report, attribute_names=["responder_id"])
        if report.status == STATUS_PENDING:
            report.status = STATUS_IN_PROGRESS
        db.flush()

        audit.audit_log(
            db,
            action=audit.ACTION_LOGGED,
            entity_type="action",
            entity_id=action.id,
            meta={"report_id": report.id, "responder_id": responder.id, "type": action.type},
            ip=ip,
        )
        if assigned:
            audit.audit_log(
                db,
                action=audit.RESPONDER_ASSIGNED,
                entity_type="report",
                entity_id=report.id,
                meta={"responder_id": responder.id, "previous_responder_id": None},
                ip=ip,
            )
        if old_status != report.status:
            audit.audit_log(
                db,
                action=audit.REPORT_STATUS_CHANGED,
                entity_type="report",
                entity_id=report.id,
                meta={"old_status": old_status, "new_status": report.status},
                ip=ip,
            )

    log.info(
        "action #%s logged on report #%s by responder #%s (status %r -> %r, assigned=%s)",
        action.id,
        report.id,
        responder.id,
        old_status,
        report.status,
        assigned,
    )
    return action


# ---------------------------
# DELETE
# ---------------------------
def delete_report(db: Session, report_id: int, *, ip: Optional[str] = None) -> None:
    with transaction(db):
        report = _load_report(db, report_id)
        if report.is_active:
            log.warning("refusing to delete active report #%s (status=%r)", report.id, report.status)
            raise ConflictError(
                "Cannot delete active reports. Please resolve first.",
                details={"status": report.status},
            )

        snapshot = {
            "category_id": report.category_id,
            "status": report.status,
            "priority": report.priority,
            "responder_id": report.responder_id,
            "actions": len(report.actions),
        }
        crud_report.delete_report(db, report)
        audit.audit_log(
            db,
            action=audit.REPORT_DELETED,
            entity_type="report",
            entity_id=report_id,
            meta=snapshot,
            ip=ip,
        )

    log.info("report #%s deleted with %s action(s)", report_id, snapshot["actions"])
