#!/usr/bin/env python3
"""
Seed default categories and responders.
- Creates tables first when ENABLE_CREATE_ALL=1 (use `alembic upgrade head` otherwise).
- Safe to run multiple times (idempotent).
"""
import os
import sys

# enable 'app.' imports
sys.path.append(os.getcwd())

from app.core.config import configure_logging, get_settings
from app.db.base import Base
from app.db.seed import seed_reference_data
from app.db.session import SessionLocal, engine, transaction
from app import models  # noqa: F401


def main() -> int:
    settings = get_settings()
    configure_logging(settings)

    if settings.enable_create_all:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        with transaction(db):
            counts = seed_reference_data(db)
    finally:
        db.close()

    print(f"Seed complete: {counts['categories']} categories, {counts['responders']} responders added.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
