# app/models/user.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, true

from app.core.clock import utcnow
from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)

    # Display name; "Anonymous" when the reporter did not give one
    pseudonym = Column(String(100), nullable=False, default="Anonymous")
    campus_dept = Column(String(100), nullable=True)
    optional_contact = Column(String(255), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} pseudonym={self.pseudonym!r}>"
