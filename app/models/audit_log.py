# app/models/audit_log.py
from sqlalchemy import JSON, Column, DateTime, Index, Integer, String

from app.core.clock import utcnow
from app.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # e.g. REPORT_CREATED, REPORT_STATUS_CHANGED, RESPONDER_ASSIGNED, ACTION_LOGGED, REPORT_DELETED
    action = Column(String(50), nullable=False, index=True)
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(Integer, nullable=True)
    meta = Column(JSON, nullable=True)
    ip_address = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)


Index("ix_audit_logs_entity", AuditLog.entity_type, AuditLog.entity_id)
