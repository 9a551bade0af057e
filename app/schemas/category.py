# app/schemas/category.py
from pydantic import constr

from app.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    role: constr(strip_whitespace=True, min_length=1, max_length=100)
    contact_info: constr(strip_whitespace=True, min_length=1, max_length=255)


class CategoryOut(CamelModel):
    id: int
    name: str
    role: str
    contact_info: str
    report_count: int = 0
