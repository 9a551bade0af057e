# app/api/v1/categories.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud import category as crud_category
from app.db.session import get_db, transaction
from app.schemas.category import CategoryCreate, CategoryOut
from app.schemas.common import Envelope, envelope, listing

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=Envelope[List[CategoryOut]])
def list_categories(db: Session = Depends(get_db)):
    return listing(crud_category.list_categories(db))


@router.get("/{category_id}", response_model=Envelope[CategoryOut])
def get_category(category_id: int, db: Session = Depends(get_db)):
    row = crud_category.get_category_detail(db, category_id)
    if row is None:
        raise NotFoundError("Category not found")
    return envelope(row)


@router.post("", response_model=Envelope[CategoryOut], status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    with transaction(db):
        obj = crud_category.create_category(db, payload)
    return envelope(
        crud_category.get_category_detail(db, obj.id),
        message="Category created successfully",
    )
