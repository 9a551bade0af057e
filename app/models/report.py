# app/models/report.py
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base

PRIORITIES = ("Low", "Medium", "High", "Critical")
DEFAULT_PRIORITY = "Medium"

# status strings as stored; the accepted set is configurable (see core.config)
STATUS_PENDING = "Pending"
STATUS_IN_PROGRESS = "In Progress"
STATUS_UNDER_REVIEW = "Under Review"
STATUS_RESOLVED = "Resolved"
STATUS_CLOSED = "Closed"

# reports in these states may not be deleted
ACTIVE_STATUSES = frozenset({STATUS_IN_PROGRESS, STATUS_UNDER_REVIEW})


class Report(Base):
    """
    Incident report submitted by a (possibly anonymous) user.

    - user_id NULL means the report is anonymous.
    - responder_id is filled by assignment or by the first action logged.
    - resolved_at is stamped on the first transition into "Resolved" and never cleared.
    """

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)

    category_id = Column(
        Integer, ForeignKey("categories.id"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    responder_id = Column(
        Integer, ForeignKey("responders.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Content
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=True)

    # Classification / workflow
    priority = Column(String(20), nullable=False, default=DEFAULT_PRIORITY, index=True)
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)

    # Audit
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    resolved_at = Column(DateTime, nullable=True)

    category = relationship("Category", back_populates="reports")
    user = relationship("User")
    responder = relationship("Responder")
    actions = relationship(
        "Action",
        back_populates="report",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Action.timestamp.desc()",
    )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def __repr__(self) -> str:
        return (
            f"<Report id={self.id} category={self.category_id} status={self.status!r} "
            f"priority={self.priority!r} responder={self.responder_id}>"
        )


# Composite indexes for the list/statistics queries
Index("ix_reports_status_created", Report.status, Report.created_at)
Index("ix_reports_responder_priority", Report.responder_id, Report.priority)
