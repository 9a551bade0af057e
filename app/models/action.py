# app/models/action.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base

DEFAULT_ACTION_TYPE = "Investigation"


class Action(Base):
    """Immutable log entry of work a responder did on a report."""

    __tablename__ = "actionstaken"

    id = Column(Integer, primary_key=True, autoincrement=True)
    report_id = Column(
        Integer, ForeignKey("reports.id", ondelete="CASCADE"), nullable=False, index=True
    )
    responder_id = Column(
        Integer, ForeignKey("responders.id"), nullable=False, index=True
    )

    description = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default=DEFAULT_ACTION_TYPE)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)

    report = relationship("Report", back_populates="actions")
    responder = relationship("Responder")

    def __repr__(self) -> str:
        return f"<Action id={self.id} report={self.report_id} responder={self.responder_id} type={self.type!r}>"
