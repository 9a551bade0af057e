# app/api/health.py
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import get_db, ping

router = APIRouter(tags=["health"])

log = logging.getLogger("app.db")


@router.get("/healthz")
def healthz() -> dict:
    # liveness: 200 as long as the process is up
    return {
        "ok": True,
        "service": get_settings().app_name,
        "status": "healthy",
        "ts": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """
    Readiness: DB ping plus environment metadata. 503 when the database is unreachable.
    """
    settings = get_settings()
    t0 = time.perf_counter()
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "service": settings.app_name,
    }
    try:
        ping(db)
    except SQLAlchemyError as e:
        log.error("health check: database unreachable: %s", e)
        body.update(status="error", message="Database connection failed", database="down")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body,
            headers={"Cache-Control": "no-store"},
        )

    latency_ms = (time.perf_counter() - t0) * 1000.0
    body.update(
        status="success",
        message="Server is healthy",
        database="up",
        db_latency_ms=round(latency_ms, 2),
    )
    return JSONResponse(status_code=200, content=body, headers={"Cache-Control": "no-store"})
