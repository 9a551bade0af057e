# app/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import constr

from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    # falls back to "Anonymous" when not given
    pseudonym: Optional[constr(strip_whitespace=True, max_length=100)] = None
    campus_dept: Optional[constr(strip_whitespace=True, max_length=100)] = None
    optional_contact: Optional[constr(strip_whitespace=True, max_length=255)] = None


class UserOut(CamelModel):
    id: int
    pseudonym: str
    campus_dept: Optional[str] = None
    optional_contact: Optional[str] = None
    is_active: bool
    created_at: datetime
