# app/models/category.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Category(Base):
    """Reference data: every report is filed under exactly one category."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    # responsible role/team, e.g. "Maintenance", "Campus Security"
    role = Column(String(100), nullable=False)
    contact_info = Column(String(255), nullable=False)

    reports = relationship("Report", back_populates="category", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r}>"
