# app/crud/user.py
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.user import UserCreate

ANONYMOUS = "Anonymous"


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def list_users(db: Session, skip: int = 0, limit: int = 100) -> List[User]:
    return (
        db.query(User)
        .order_by(User.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_active_users(db: Session) -> int:
    return db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar() or 0


def create_user(db: Session, data: UserCreate) -> User:
    obj = User(
        pseudonym=data.pseudonym or ANONYMOUS,
        campus_dept=data.campus_dept,
        optional_contact=data.optional_contact,
        is_active=True,
    )
    db.add(obj)
    db.flush()
    return obj
