# app/models/responder.py
from sqlalchemy import Boolean, Column, Integer, String, text, true

from app.db.base import Base


class Responder(Base):
    """Staff member who can be assigned to reports and log actions against them."""

    __tablename__ = "responders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    role = Column(String(100), nullable=False)
    contact_info = Column(String(255), nullable=False)
    department = Column(String(100), nullable=True)

    is_available = Column(Boolean, nullable=False, default=True, server_default=true())
    # only ever incremented, once per report on its first resolution
    total_resolved = Column(Integer, nullable=False, default=0, server_default=text("0"))

    def __repr__(self) -> str:
        return f"<Responder id={self.id} name={self.name!r} resolved={self.total_resolved}>"
