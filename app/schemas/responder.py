# app/schemas/responder.py
from typing import Optional

from pydantic import Field, constr

from app.schemas.common import CamelModel


class ResponderCreate(CamelModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    role: constr(strip_whitespace=True, min_length=1, max_length=100)
    contact_info: constr(strip_whitespace=True, min_length=1, max_length=255)
    department: Optional[constr(strip_whitespace=True, max_length=100)] = None
    is_available: bool = True


class ResponderOut(CamelModel):
    id: int
    name: str
    role: str
    contact_info: str
    department: Optional[str] = None
    is_available: bool
    total_resolved: int

    action_count: int = 0
    assigned_reports: int = 0
    performance_score: int = Field(
        default=0, description="Percent of assigned reports that are Resolved or Closed"
    )
