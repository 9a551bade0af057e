# app/crud/category.py
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.report import Report
from app.schemas.category import CategoryCreate


def _row(c: Category, report_count: int) -> Dict[str, Any]:
    return {
        "id": c.id,
        "name": c.name,
        "role": c.role,
        "contact_info": c.contact_info,
        "report_count": int(report_count or 0),
    }


def _with_counts(db: Session):
    return (
        db.query(Category, func.count(Report.id))
        .outerjoin(Report, Report.category_id == Category.id)
        .group_by(Category.id)
    )


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)


def get_category_detail(db: Session, category_id: int) -> Optional[Dict[str, Any]]:
    row = _with_counts(db).filter(Category.id == category_id).first()
    if not row:
        return None
    return _row(*row)


def list_categories(db: Session) -> List[Dict[str, Any]]:
    rows = _with_counts(db).order_by(Category.name.asc()).all()
    return [_row(c, n) for c, n in rows]


def count_categories(db: Session) -> int:
    return db.query(func.count(Category.id)).scalar() or 0


def create_category(db: Session, data: CategoryCreate) -> Category:
    obj = Category(name=data.name, role=data.role, contact_info=data.contact_info)
    db.add(obj)
    db.flush()
    return obj
