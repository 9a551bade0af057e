# app/api/v1/reports.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud import action as crud_action
from app.crud import report as crud_report
from app.db.session import get_db
from app.schemas.common import Envelope, envelope, listing
from app.schemas.report import (
    ReportCreate,
    ReportDetailOut,
    ReportOut,
    ReportStatusUpdate,
)
from app.schemas.stats import ReportStats
from app.services import lifecycle, metrics, statistics
from app.services.audit import ip_from_request

router = APIRouter(prefix="/reports", tags=["reports"])


def _detail(db: Session, report_id: int) -> ReportDetailOut:
    row = crud_report.get_report_detail(db, report_id)
    if row is None:
        raise NotFoundError("Report not found")
    return ReportDetailOut(
        **row,
        actions=crud_action.list_actions_for_report(db, report_id),
        response_time_hours=metrics.response_time_hours(row["created_at"], row["resolved_at"]),
    )


# ---------------------------
# LIST / FILTER
# ---------------------------
@router.get("", response_model=Envelope[List[ReportOut]])
def list_reports(
    response: Response,
    status_f: Optional[str] = Query(None, alias="status", description="Exact status match"),
    category_id: Optional[int] = Query(None, alias="categoryId", ge=1),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Paged list, newest first. `results` is the page size, `total` the number
    of reports matching the filters.
    """
    rows, total = crud_report.list_reports(
        db, status=status_f, category_id=category_id, limit=limit, offset=offset
    )
    response.headers["X-Total-Count"] = str(total)
    return listing(rows, total=total)


@router.get("/stats", response_model=Envelope[ReportStats])
def report_stats(db: Session = Depends(get_db)):
    return envelope(statistics.build_report_stats(db))


@router.get("/status/{status_value}", response_model=Envelope[List[ReportOut]])
def reports_by_status(status_value: str, db: Session = Depends(get_db)):
    lifecycle.ensure_valid_status(status_value)
    return listing(crud_report.list_reports_by_status(db, status_value))


# ---------------------------
# READ (by id)
# ---------------------------
@router.get("/{report_id}", response_model=Envelope[ReportDetailOut])
def get_report(report_id: int, db: Session = Depends(get_db)):
    """Joined report with its actions (newest first) and response time."""
    return envelope(_detail(db, report_id))


# ---------------------------
# CREATE
# ---------------------------
@router.post("", response_model=Envelope[ReportDetailOut], status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    report = lifecycle.submit_report(db, payload, ip=ip_from_request(request))
    return envelope(_detail(db, report.id), message="Report submitted successfully")


# ---------------------------
# UPDATE STATUS
# ---------------------------
@router.put("/{report_id}", response_model=Envelope[ReportDetailOut])
def update_report(
    report_id: int,
    payload: ReportStatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Set the status (any whitelisted value) and optionally assign a responder.
    """
    lifecycle.update_status(
        db,
        report_id,
        payload.status,
        responder_id=payload.responder_id,
        ip=ip_from_request(request),
    )
    return envelope(_detail(db, report_id), message="Report updated successfully")


# ---------------------------
# DELETE
# ---------------------------
@router.delete("/{report_id}", response_model=Envelope[None])
def delete_report(report_id: int, request: Request, db: Session = Depends(get_db)):
    lifecycle.delete_report(db, report_id, ip=ip_from_request(request))
    return envelope(message="Report deleted successfully")
