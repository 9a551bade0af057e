# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI

# settings import loads .env (root first, then app/.env)
from app.core.config import configure_logging, get_settings

settings = get_settings()
configure_logging(settings)

log = logging.getLogger("app")

# --- DB engine + models (must be imported BEFORE create_all) ---
from app.db.base import Base
from app.db.session import engine
from app import models  # noqa: F401  registers every table on Base.metadata

# ---------------------------
# ROUTERS
# ---------------------------
from app.api import health
from app.api.v1 import actions, audit_logs, categories, reports, responders, users
from app.core.errors import register_exception_handlers
from app.middleware.request_logging import RequestLoggingMiddleware

# ---------------------------
# CREATE TABLES (dev-only; guard with env, use alembic otherwise)
# ---------------------------
if settings.enable_create_all:
    Base.metadata.create_all(bind=engine)

# ---------------------------
# APP
# ---------------------------
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Incident reports, responder actions and report statistics",
)
app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)

# ---------------------------
# ROUTER MOUNT
# ---------------------------
app.include_router(reports.router, prefix="/api/v1")
app.include_router(actions.router, prefix="/api/v1")
app.include_router(responders.router, prefix="/api/v1")
app.include_router(categories.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(audit_logs.router, prefix="/api/v1")
app.include_router(health.router, prefix="/api")


ENDPOINTS = {
    "health": "/api/health",
    "reports": "/api/v1/reports",
    "reportStats": "/api/v1/reports/stats",
    "actions": "/api/v1/actions",
    "responders": "/api/v1/responders",
    "categories": "/api/v1/categories",
    "users": "/api/v1/users",
    "auditLogs": "/api/v1/audit/logs",
}


@app.get("/api", tags=["meta"])
def api_index():
    return {
        "status": "success",
        "message": f"{settings.app_name} v1",
        "endpoints": ENDPOINTS,
    }


@app.get("/", tags=["meta"])
def root():
    return {
        "status": "success",
        "message": f"{settings.app_name} is running",
        "docs": "/docs",
        "api": "/api",
    }


log.info(
    "%s started environment=%s create_all=%s statuses=%s",
    settings.app_name,
    settings.environment,
    settings.enable_create_all,
    ", ".join(settings.valid_statuses),
)
