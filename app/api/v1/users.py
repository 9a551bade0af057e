# app/api/v1/users.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud import user as crud_user
from app.db.session import get_db, transaction
from app.schemas.common import Envelope, envelope, listing
from app.schemas.user import UserCreate, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Envelope[List[UserOut]])
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    users = crud_user.list_users(db, skip=skip, limit=limit)
    return listing([UserOut.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=Envelope[UserOut])
def get_user(user_id: int, db: Session = Depends(get_db)):
    u = crud_user.get_user(db, user_id)
    if u is None:
        raise NotFoundError("User not found")
    return envelope(UserOut.model_validate(u))


@router.post("", response_model=Envelope[UserOut], status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    with transaction(db):
        u = crud_user.create_user(db, payload)
    return envelope(UserOut.model_validate(u), message="User created successfully")
